"""Logging setup for the bot process."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DEBUG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(filename)s:%(lineno)d %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

# Libraries that log every request or discovery lookup at INFO
NOISY_LOGGERS = ("googleapiclient.discovery", "googleapiclient.discovery_cache")


def setup_logging(debug: bool = False) -> None:
    """Configure the root logger to write to stdout.

    Args:
        debug: Log DEBUG and above with milliseconds and source location,
            instead of INFO and above
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(DEBUG_FORMAT if debug else DEFAULT_FORMAT, datefmt=DATE_FORMAT)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
