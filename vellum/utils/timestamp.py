"""Timestamp helpers for log directory names and provenance headers."""

from datetime import datetime


def now() -> str:
    """Current time as a filesystem-safe string (e.g., "20261017_142530")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Current time in ISO 8601 format with microseconds."""
    return datetime.now().isoformat()
