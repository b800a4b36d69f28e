"""Fixture config: echo, worker, diagnostic and logging sections.

Defaults: loaded from config/config.yaml.example (single source of truth, no code-level defaults).
PORT from the environment overrides the configured bind port.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
EXAMPLE_CONFIG_PATH = _PROJECT_ROOT / "config" / "config.yaml.example"

# Lazy-loaded example config (single source of truth for defaults)
_EXAMPLE_CONFIG: Optional[Dict[str, Any]] = None


def _load_example_config() -> Dict[str, Any]:
    """Load config.yaml.example as defaults. No code-level defaults."""
    global _EXAMPLE_CONFIG
    if _EXAMPLE_CONFIG is None:
        with open(EXAMPLE_CONFIG_PATH, encoding="utf-8") as f:
            _EXAMPLE_CONFIG = yaml.safe_load(f) or {}
    return _EXAMPLE_CONFIG


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base. Override values take precedence."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _merged_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Merge config with example so missing keys come from config file."""
    return _deep_merge(_load_example_config(), cfg)


def _section(cfg: Dict[str, Any], section: str) -> Dict[str, Any]:
    s = cfg.get(section)
    return dict(s) if isinstance(s, dict) else {}


def _port(section: Dict[str, Any], environ: Optional[Mapping[str, str]]) -> int:
    env = os.environ if environ is None else environ
    port = env.get("PORT") or section.get("port")
    return int(port)


def read_config(config_path: Optional[str] = None) -> tuple[dict, str]:
    """Load YAML config. Returns (config, resolved_path).

    Lookup order: argument, PROBE_FIXTURES_CONFIG, config/config.yaml, then the example.
    """
    config_path = config_path or os.environ.get("PROBE_FIXTURES_CONFIG", "config/config.yaml")
    if not Path(config_path).exists():
        config_path = str(EXAMPLE_CONFIG_PATH)
    config_path = str(Path(config_path).resolve())
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    return config, config_path


def get_echo_config(
    config: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Return echo server config (host, port, greeting)."""
    s = _section(_merged_config(config or {}), "echo")
    return {
        "host": s.get("host"),
        "port": _port(s, environ),
        "greeting": s.get("greeting"),
    }


def get_worker_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return worker-mode config (sentinel, interval_sec, message)."""
    s = _section(_merged_config(config or {}), "worker")
    return {
        "sentinel": s.get("sentinel"),
        "interval_sec": float(s.get("interval_sec")),
        "message": s.get("message"),
    }


def get_diagnostic_config(
    config: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Return diagnostic server config.

    health_failures: number of leading /health calls answered with 500.
    largetext_max_kbytes: cap for /largetext.
    instance_env: env var holding the platform JSON with instance_id.
    """
    s = _section(_merged_config(config or {}), "diagnostic")
    return {
        "host": s.get("host"),
        "port": _port(s, environ),
        "health_failures": int(s.get("health_failures")),
        "largetext_max_kbytes": int(s.get("largetext_max_kbytes")),
        "instance_env": s.get("instance_env"),
    }


def get_logging_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    s = _section(_merged_config(config or {}), "logging")
    return {"level": str(s.get("level")).upper()}


def get_multi_process_config(
    config: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Return the web-mode config for the dual-mode process: echo host/port with its own greeting."""
    out = get_echo_config(config, environ)
    s = _section(_merged_config(config or {}), "multi_process")
    out["greeting"] = s.get("greeting")
    return out
