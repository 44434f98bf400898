"""
Session context logger.

Loguru helpers with the [session] prefix. Sinks are configured by the entry point
(scripts or the API server) through vitae.utils.logger.
"""

from loguru import logger

CONTEXT_PREFIX = "[session]"


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")
