"""
Persistence context logger.

Loguru helpers with the [persist] prefix. Sinks are configured by the entry point
(scripts or the API server) through vitae.utils.logger.
"""

from loguru import logger

CONTEXT_PREFIX = "[persist]"


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
