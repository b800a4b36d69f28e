"""Core: server context, command runner, logging helpers."""
