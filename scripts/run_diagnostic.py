#!/usr/bin/env python3
"""Diagnostic fixture server. Usage: run_diagnostic.py [config.yaml]

Port from PORT env, else diagnostic.port in config."""

import os
import sys

# Project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)
os.chdir(_PROJECT_ROOT)


def main() -> None:
    from probe_fixtures.config.settings import get_logging_config, read_config
    from probe_fixtures.core.logging_utils import configure_logging
    from servers.diagnostic import run_server

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    config, _ = read_config(args[0] if args else None)
    configure_logging(get_logging_config(config)["level"])
    run_server(config)


if __name__ == "__main__":
    main()
