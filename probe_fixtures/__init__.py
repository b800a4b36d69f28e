"""Probe fixtures: echo, dual-mode and diagnostic HTTP servers used as smoke-test targets."""
