"""
Assistant context logger.

Loguru helpers with the [assist] prefix. Sinks are configured by the entry point
(scripts or the API server) through vitae.utils.logger.
"""

from loguru import logger

CONTEXT_PREFIX = "[assist]"


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
