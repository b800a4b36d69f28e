#!/usr/bin/env python3
"""Dual-mode fixture. Usage: run_multi_process.py [config.yaml] [worker]

Last argument "worker" runs the periodic logger (no listener); anything else runs the echo server."""

import os
import sys

# Project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)
os.chdir(_PROJECT_ROOT)


def main() -> None:
    from probe_fixtures.config.settings import get_logging_config, read_config
    from probe_fixtures.core.logging_utils import configure_logging
    from servers.multi_process import main as run

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    # Config path is optional; the mode sentinel is always last
    config_path = args[0] if args and args[0].endswith((".yaml", ".yml")) else None
    config, _ = read_config(config_path)
    configure_logging(get_logging_config(config)["level"])
    run(args, config)


if __name__ == "__main__":
    main()
