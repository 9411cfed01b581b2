"""
Content Context

Responsibilities:
- Defines the read-only content tree consumed by layout
- Owns the editable document state and its single path+value edit operation
- Normalizes section orders (drop unknown, drop duplicates, append missing)
- Loads, migrates and saves stored documents

Owns: Profile data, section order, stored document format
Never: Computes geometry
"""

from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.content.section_order import normalize_section_order, reorder_entries, reorder_sections

__all__ = [
    "ContentTree",
    "normalize_section_order",
    "reorder_entries",
    "reorder_sections",
]
