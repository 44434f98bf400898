"""
Drafting context logger.

Wraps utils.logger with the [draft] prefix. Modules in this context import
their _log_* helpers from here.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[draft]"


def setup_drafting_logger(log_dir: Path = None, console_level: str = "INFO") -> Path:
    """Send draft logs to <log_dir>/draft.log and the console; returns the log file."""
    return _setup_logger(context_name="draft", log_dir=log_dir, console_level=console_level)


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
