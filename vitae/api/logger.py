"""
HTTP API logger.

Wraps utils.logger with the [api] prefix. Modules in this context import
their _log_* helpers from here.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[api]"


def setup_api_logger(log_dir: Path = None, console_level: str = "INFO") -> Path:
    """Send api logs to <log_dir>/api.log and the console; returns the log file."""
    return _setup_logger(context_name="api", log_dir=log_dir, console_level=console_level)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
