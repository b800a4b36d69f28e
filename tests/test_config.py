"""Tests for config/settings: example defaults, deep merge, PORT override."""

from pathlib import Path

import pytest

from probe_fixtures.config.settings import (
    get_diagnostic_config,
    get_echo_config,
    get_logging_config,
    get_multi_process_config,
    get_worker_config,
    read_config,
)


class TestExampleDefaults:
    """Missing keys come from config/config.yaml.example."""

    def test_echo_defaults(self):
        out = get_echo_config({}, environ={})
        assert out["host"] == "0.0.0.0"
        assert out["port"] == 3000
        assert "{host}" in out["greeting"] and "{port}" in out["greeting"]

    def test_worker_defaults(self):
        out = get_worker_config({})
        assert out["sentinel"] == "worker"
        assert out["interval_sec"] == 1.0

    def test_diagnostic_defaults(self):
        out = get_diagnostic_config({}, environ={})
        assert out["port"] == 8080
        assert out["health_failures"] == 3
        assert out["largetext_max_kbytes"] == 5120
        assert out["instance_env"] == "VCAP_APPLICATION"

    def test_multi_process_greeting_separate_from_echo(self):
        out = get_multi_process_config({"echo": {"port": 3005}}, environ={})
        assert out["port"] == 3005
        assert out["greeting"].startswith("Hello from a multi-process app!")
        assert out["greeting"] != get_echo_config({}, environ={})["greeting"]

    def test_logging_level_upper(self):
        assert get_logging_config({"logging": {"level": "debug"}})["level"] == "DEBUG"


class TestOverrides:
    def test_partial_section_merges_with_example(self):
        out = get_echo_config({"echo": {"port": 4000}}, environ={})
        assert out["port"] == 4000
        assert out["host"] == "0.0.0.0"

    def test_port_env_wins_over_config(self):
        assert get_echo_config({"echo": {"port": 4000}}, environ={"PORT": "5555"})["port"] == 5555
        assert get_diagnostic_config({}, environ={"PORT": "6001"})["port"] == 6001

    def test_empty_port_env_ignored(self):
        assert get_echo_config({}, environ={"PORT": ""})["port"] == 3000

    def test_diagnostic_override(self):
        out = get_diagnostic_config({"diagnostic": {"health_failures": 1, "largetext_max_kbytes": 10}}, environ={})
        assert out["health_failures"] == 1
        assert out["largetext_max_kbytes"] == 10


class TestReadConfig:
    def test_falls_back_to_example(self, tmp_path: Path):
        config, path = read_config(str(tmp_path / "missing.yaml"))
        assert path.endswith("config.yaml.example")
        assert config["echo"]["port"] == 3000

    def test_reads_given_file(self, tmp_path: Path):
        p = tmp_path / "config.yaml"
        p.write_text("echo:\n  port: 3100\n", encoding="utf-8")
        config, path = read_config(str(p))
        assert path == str(p.resolve())
        assert config == {"echo": {"port": 3100}}

    def test_env_var_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        p = tmp_path / "fixtures.yaml"
        p.write_text("diagnostic:\n  health_failures: 0\n", encoding="utf-8")
        monkeypatch.setenv("PROBE_FIXTURES_CONFIG", str(p))
        config, _ = read_config()
        assert get_diagnostic_config(config, environ={})["health_failures"] == 0

    def test_example_file_is_loadable(self, config: dict):
        assert set(config) >= {"echo", "worker", "diagnostic", "logging"}
