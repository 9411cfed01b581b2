"""
Shared utilities for VELLUM.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Timestamps for log directories
"""

from vellum.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact"]
