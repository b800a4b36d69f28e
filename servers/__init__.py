"""Fixture servers: echo, dual-mode (web/worker) and diagnostic."""

from servers.diagnostic import create_app, run_server
from servers.echo import create_echo_app, run_echo_server

__all__ = ["create_app", "create_echo_app", "run_echo_server", "run_server"]
