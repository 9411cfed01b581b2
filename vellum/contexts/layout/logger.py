"""
Layout context logger.

Provides logging interface for layout context with automatic [layout] prefix.
Pagination and frame calculation are pure and never log; the engine calls the
helpers below after each run.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[layout]"


def setup_layout_logger(log_dir: Path) -> Path:
    """
    Setup logger for layout context.

    Args:
        log_dir: Directory for this layout session

    Returns:
        Path to log file

    Example:
        from vellum.contexts.layout.logger import setup_layout_logger, _log_info

        log_file = setup_layout_logger(log_dir)
        _log_info("Composing layout...")
    """
    return _setup_logger(
        context_name="layout",
        log_dir=log_dir,
        extra_provenance={"Theme presets": os.getenv("VELLUM_THEME_PRESETS_PATH")},
    )


# Wrapper functions with automatic [layout] prefix


def _log_info(message: str) -> None:
    """Log info message with [layout] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [layout] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [layout] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level layout-specific logging helpers


def log_pagination_result(page_plan) -> None:
    """
    Log a page plan, one debug line per page.

    Args:
        page_plan: PagePlan from paginate()
    """
    _log_info(f"Paginated into {page_plan.page_count} page(s) ({page_plan.paper.value})")
    for page in page_plan.pages:
        _log_debug(
            f"  Page {page.page_index} [{page.header_mode.value}]: "
            f"{', '.join(page.sections) or '(empty)'} ({page.used_height:.0f}px)"
        )
        if page.is_overflowing:
            _log_warning(f"Page {page.page_index} exceeds its height budget")


def log_layout_result(layout, diagnostics, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log a computed layout with its diagnostics.

    Args:
        layout: LayoutGeometry from compute_layout()
        diagnostics: DocumentDiagnostics from diagnose_layout()
        elapsed_time: Time taken to compose
        verbose: Show every issue instead of the first few
    """
    frame_count = sum(1 for _ in layout.iter_frames())
    issues = diagnostics.get_inherited_issues()

    if not issues:
        _log_success(f"Layout: {frame_count} frames on {layout.page_count} page(s) ({elapsed_time:.3f}s)")
        return

    _log_warning(f"Layout: {frame_count} frames, {len(issues)} issue(s) ({elapsed_time:.3f}s)")
    issue_limit = len(issues) if verbose else 5
    for i, issue in enumerate(issues[:issue_limit], 1):
        _log_warning(f"  Issue {i}: {issue}")
    if len(issues) > issue_limit:
        _log_warning(f"  ... and {len(issues) - issue_limit} more issues")
