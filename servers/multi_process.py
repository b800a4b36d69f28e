"""Dual-mode fixture: echo server by default; with a trailing "worker" argument, a periodic logger that never listens.

Models a supervisor starting a web/worker pair from the same executable.
"""

import logging
import time
from typing import Callable, Optional, Sequence

from probe_fixtures.config.settings import get_multi_process_config, get_worker_config
from probe_fixtures.core.logging_utils import log_worker_tick
from servers.echo import run_echo_server

logger = logging.getLogger(__name__)

MODE_WEB = "web"
MODE_WORKER = "worker"


def select_mode(argv: Sequence[str], sentinel: str = "worker") -> str:
    """Return MODE_WORKER when the last argument equals sentinel, else MODE_WEB."""
    if argv and argv[-1] == sentinel:
        return MODE_WORKER
    return MODE_WEB


def run_worker(
    interval_sec: float = 1.0,
    message: str = "worker tick",
    iterations: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Log one line per interval. Runs forever when iterations is None; returns ticks logged otherwise."""
    logger.info("Worker mode: logging every %ss, no listener", interval_sec)
    tick = 0
    while iterations is None or tick < iterations:
        tick += 1
        log_worker_tick(tick, message)
        sleep(interval_sec)
    return tick


def main(argv: Sequence[str], config: Optional[dict] = None) -> None:
    worker_cfg = get_worker_config(config)
    mode = select_mode(argv, worker_cfg["sentinel"])
    if mode == MODE_WORKER:
        run_worker(worker_cfg["interval_sec"], worker_cfg["message"])
    else:
        run_echo_server(config, get_multi_process_config(config))
