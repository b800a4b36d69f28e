"""Service bindings mounted as files under $SERVICE_BINDING_ROOT: <root>/<binding>/<key> holds one value."""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

BINDING_ROOT_ENV = "SERVICE_BINDING_ROOT"


def binding_root(environ: Mapping[str, str]) -> Optional[str]:
    return environ.get(BINDING_ROOT_ENV) or None


def read_service_bindings(root: Optional[str]) -> Dict[str, Dict[str, str]]:
    """Map each binding directory to {file name: contents}. Empty when root is unset or missing.

    Dot-prefixed entries (the ..data links of projected volumes) are skipped.
    """
    if not root:
        return {}
    base = Path(root)
    if not base.is_dir():
        logger.debug("Binding root %s is not a directory", root)
        return {}
    out: Dict[str, Dict[str, str]] = {}
    for binding in sorted(base.iterdir()):
        if binding.name.startswith(".") or not binding.is_dir():
            continue
        out[binding.name] = {
            f.name: f.read_text(encoding="utf-8")
            for f in sorted(binding.iterdir())
            if not f.name.startswith(".") and f.is_file()
        }
    return out
