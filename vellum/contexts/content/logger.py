"""
Content context logger.

Provides logging interface for content context with automatic [content] prefix.
All content modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[content]"


def setup_content_logger(log_dir: Path, document_path: Path = None) -> Path:
    """
    Setup logger for content context.

    Args:
        log_dir: Directory for this session
        document_path: Stored document being edited, for the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="content",
        log_dir=log_dir,
        extra_provenance={"Document": document_path},
    )


# Wrapper functions with automatic [content] prefix


def _log_info(message: str) -> None:
    """Log info message with [content] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [content] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [content] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [content] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [content] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level content-specific logging helpers


def log_migration(from_version: int, to_version: int, changes) -> None:
    """Log a stored-document migration and what it changed."""
    if not changes:
        _log_debug(f"Stored document already at version {to_version}")
        return
    _log_info(f"Migrated stored document v{from_version} -> v{to_version}")
    for change in changes:
        _log_debug(f"  {change}")


def log_section_order_healed(original, normalized) -> None:
    """Log a section order that normalization had to repair."""
    _log_warning(f"Section order repaired: {list(original)} -> {list(normalized)}")


def log_field_update(path: str, value) -> None:
    """Log one committed edit."""
    text = repr(value)
    _log_debug(f"Update {path} = {text[:80] + '...' if len(text) > 80 else text}")
