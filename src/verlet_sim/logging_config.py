# MIT License (see LICENSE)
"""
Logging configuration for applications embedding the engine.

The library itself only creates module loggers under the "verlet_sim"
namespace and never installs handlers; call setup_logging() from a script
or application entry point to see its output.
"""
from __future__ import annotations
import logging
import sys


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """
    Configure the "verlet_sim" logger.

    Args:
        level: Logging level (e.g. logging.DEBUG for per-step summaries).
        log_file: Optional path to also write logs to.
    """
    logger = logging.getLogger("verlet_sim")
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
