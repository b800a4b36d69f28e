"""YAML config with example-file defaults."""

from probe_fixtures.config.settings import (
    get_diagnostic_config,
    get_echo_config,
    get_logging_config,
    get_multi_process_config,
    get_worker_config,
    read_config,
)

__all__ = [
    "get_diagnostic_config",
    "get_echo_config",
    "get_logging_config",
    "get_multi_process_config",
    "get_worker_config",
    "read_config",
]
