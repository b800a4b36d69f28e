"""Per-process state for the diagnostic server: health counter, start time, instance id, env snapshot."""

import json
import logging
import os
import threading
import time
import uuid
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from probe_fixtures.core.commands import CommandRunner

logger = logging.getLogger(__name__)


def resolve_instance_id(environ: Mapping[str, str], var: Optional[str]) -> str:
    """instance_id from the platform JSON env var, else a random hex id."""
    raw = environ.get(var) if var else None
    if raw:
        try:
            instance_id = (json.loads(raw) or {}).get("instance_id")
        except (ValueError, AttributeError) as e:
            logger.debug("Could not read instance_id from %s: %s", var, e)
            instance_id = None
        if instance_id:
            return str(instance_id)
    return uuid.uuid4().hex


def signal_self(signum: int) -> None:
    os.kill(os.getpid(), signum)


class ServerContext:
    """State shared by the diagnostic route handlers. Built once at startup."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        runner: Optional[CommandRunner] = None,
        health_failures: int = 3,
        largetext_max_kbytes: int = 5120,
        instance_id: Optional[str] = None,
        send_signal: Callable[[int], None] = signal_self,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.environ: Mapping[str, str] = MappingProxyType(dict(os.environ if environ is None else environ))
        self.runner = runner or CommandRunner()
        self.health_failures = health_failures
        self.largetext_max_kbytes = largetext_max_kbytes
        self.instance_id = instance_id or uuid.uuid4().hex
        self.send_signal = send_signal
        self._clock = clock
        self._lock = threading.Lock()
        self._health_calls = 0
        self._started_monotonic = clock()
        self.started_at = datetime.now(timezone.utc)

    @classmethod
    def from_config(
        cls,
        diag_cfg: Dict[str, Any],
        environ: Optional[Mapping[str, str]] = None,
        runner: Optional[CommandRunner] = None,
    ) -> "ServerContext":
        """Build from get_diagnostic_config() output; env is snapshotted here."""
        env = dict(os.environ if environ is None else environ)
        return cls(
            environ=env,
            runner=runner,
            health_failures=diag_cfg["health_failures"],
            largetext_max_kbytes=diag_cfg["largetext_max_kbytes"],
            instance_id=resolve_instance_id(env, diag_cfg.get("instance_env")),
        )

    def record_health_check(self) -> tuple[bool, int]:
        """Count one health call. Returns (healthy, count); unhealthy for the first health_failures calls."""
        with self._lock:
            self._health_calls += 1
            return self._health_calls > self.health_failures, self._health_calls

    @property
    def health_calls(self) -> int:
        with self._lock:
            return self._health_calls

    def uptime_seconds(self) -> float:
        return max(0.0, self._clock() - self._started_monotonic)

    def largetext_bytes(self, kbytes: int) -> int:
        return max(0, min(kbytes, self.largetext_max_kbytes)) * 1024
