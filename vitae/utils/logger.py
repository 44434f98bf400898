"""
Logger setup shared by every context.

Each run of a script or the API server gets its own log directory under
LOGS_PATH, a DEBUG file sink and a colorized console sink. Context wrappers in
contexts/{context}/logger.py add their prefix and provenance on top of this.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_log_dir(prefix: str, logs_path: Path = None) -> Path:
    """
    Directory for one run (e.g., outs/logs/serve_20251114_123456).

    Not created here; setup_logger() creates it.
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return (logs_path or LOGS_PATH) / f"{prefix}_{stamp}"


def setup_logger(
    context_name: str,
    log_dir: Path = None,
    extra_provenance: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output to <log_dir>/<context_name>.log and the console.

    Args:
        context_name: Context identifier, also the log file stem ("api", "analyze", ...)
        log_dir: Directory for this run (default: session_log_dir(context_name))
        extra_provenance: Extra key/value pairs for the provenance header
        console_level: Minimum level shown on the console

    Returns:
        Path to the log file
    """
    if log_dir is None:
        log_dir = session_log_dir(context_name)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: dict = None) -> None:
    """Write a header recording how this run was started."""
    from vitae import __version__

    header = {
        "Context": context_name,
        "VITAE version": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }

    logger.info("=" * 80)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
