"""
Session logging shared by every context.

One call per session: a DEBUG file log under the session directory and an
optional colorized console sink. The console level comes from
VELLUM_CONSOLE_LOG_LEVEL so editor integrations can silence it without code
changes. Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from vellum import __version__
from vellum.utils.timestamp import now_exact

load_dotenv()
CONSOLE_LOG_LEVEL = os.getenv("VELLUM_CONSOLE_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console: bool = True,
) -> Path:
    """
    Configure loguru for one session of a context.

    Replaces any previously installed sinks, so the last context to call this
    owns the session log.

    Args:
        context_name: Context identifier (e.g., "layout", "content"); names the log file
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for the provenance header
        console: Also log to stdout at CONSOLE_LOG_LEVEL

    Returns:
        Path to log file

    Example:
        from vellum.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="layout",
            log_dir=Path("outs/logs/plan_20261017_123456"),
            extra_provenance={"Paper": "A4"}
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=CONSOLE_LOG_LEVEL, colorize=True)

    log_provenance(context_name, extra_provenance)

    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, object]] = None) -> None:
    """
    Write the session header: what ran, where, and with which versions.

    Entries of `extra_context` whose value is None are skipped.
    """
    logger.info("=" * 80)
    logger.info(f"Vellum {__version__} | context: {context_name}")
    logger.info(f"Started: {now_exact()}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        if value is not None:
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)
