"""
Logging setup.

Two phases: console-only logging while the configuration is still being
read, then file + console logging once log_path and log_level are known.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_console_logging(log_level: str = "INFO") -> None:
    """Log to stderr only, in the same format as the configured handlers."""
    logging.basicConfig(
        level=_resolve_level(log_level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True,
    )


def setup_logging(log_path: str, log_level: str) -> None:
    """Log to both the given file and stderr. Replaces any earlier configuration."""
    log_dir = os.path.dirname(log_path)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    logging.basicConfig(
        level=_resolve_level(log_level),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler(),
        ],
        force=True,
    )
