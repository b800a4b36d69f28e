"""Structured logging for requests, shell commands and worker ticks."""

import logging
import sys
import uuid
from typing import IO, Any, Dict, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
SPEW_LOGGER = "probe_fixtures.logspew"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT, level=getattr(logging, level, logging.INFO))
    configure_spew_logger()


def configure_spew_logger(stream: Optional[IO[str]] = None) -> logging.Logger:
    """Log spew writes bare message lines (no asctime/level prefix) to stdout and skips the root handlers."""
    spew = logging.getLogger(SPEW_LOGGER)
    for h in list(spew.handlers):
        spew.removeHandler(h)
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    spew.addHandler(handler)
    spew.setLevel(logging.INFO)
    spew.propagate = False
    return spew


def new_request_id() -> str:
    return str(uuid.uuid4())[:8]


def _format(event: str, extra: Dict[str, Any]) -> str:
    return event + " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))


def log_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    request_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log one handled request: request_id, method, path, status, duration_ms."""
    extra = extra or {}
    extra["request_id"] = request_id or new_request_id()
    extra["method"] = method
    extra["path"] = path
    extra["status"] = status_code
    extra["duration_ms"] = f"{duration_ms:.1f}"
    logger.info(_format("request", extra))


def log_command(
    command: str,
    returncode: int,
    output_bytes: Optional[int] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a shell passthrough; non-zero exit goes out at WARNING."""
    extra = extra or {}
    extra["command"] = repr(command)
    extra["returncode"] = returncode
    if output_bytes is not None:
        extra["output_bytes"] = output_bytes
    msg = _format("command", extra)
    if returncode != 0:
        logger.warning(msg)
    else:
        logger.info(msg)


def log_worker_tick(tick: int, message: str, extra: Optional[dict] = None) -> None:
    extra = extra or {}
    extra["tick"] = tick
    logger.info(_format(message.replace(" ", "_"), extra))
