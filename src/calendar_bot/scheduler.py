"""Fixed-interval scheduling of the polling pass.

The task runs once immediately and then once per interval. The next wait
only starts after the previous run returned, so runs never overlap.
SIGINT/SIGTERM set a stop event that ends the loop at the next wait.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


def run_every(
    interval: float,
    task: Callable[[], Any],
    stop_event: threading.Event,
) -> int:
    """Run a task now and then every `interval` seconds until stopped.

    Exceptions raised by the task are logged and the loop carries on with
    the next tick.

    Args:
        interval: Seconds between the end of one run and the next
        task: Callable to run
        stop_event: Set to stop the loop

    Returns:
        Number of runs performed
    """
    runs = 0
    while not stop_event.is_set():
        try:
            task()
        except Exception:
            logger.exception("Calendar check failed")
        runs += 1

        if stop_event.wait(interval):
            break

    logger.info(f"Scheduler stopped after {runs} runs")
    return runs


def install_signal_handlers(stop_event: threading.Event) -> None:
    """Stop the scheduler on SIGINT or SIGTERM.

    Must be called from the main thread.
    """

    def _handle(signum: int, frame: Any) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)
