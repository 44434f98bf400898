"""
Analysis context logger.

Wraps utils.logger with the [analyze] prefix. Modules in this context import
their _log_* helpers from here.
"""

import os
from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[analyze]"


def setup_analysis_logger(log_dir: Path = None, console_level: str = "INFO") -> Path:
    """Send analyze logs to <log_dir>/analyze.log and the console; returns the log file."""
    return _setup_logger(
        context_name="analyze",
        log_dir=log_dir,
        extra_provenance={"LLM provider": os.getenv("LLM_PROVIDER", "gemini")},
        console_level=console_level,
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
