"""
Section order normalization and reorder operations.

Stored section orders come from older documents and from drag-and-drop edits,
so they can be short, duplicated, or carry kinds that no longer exist. The
store normalizes every order it accepts; the layout engine only ever sees a
complete, duplicate-free list.
"""

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional

from vellum.contexts.content.content_tree import DEFAULT_SECTION_ORDER, SECTION_KINDS


def normalize_section_order(order: Optional[Iterable[Any]]) -> List[str]:
    """
    Self-healing normalization.

    Unknown kinds are dropped, duplicates are dropped (first occurrence wins),
    and missing kinds are appended in canonical order.

    Example:
        >>> normalize_section_order(["experience", "summary", "experience", "photos"])
        ['experience', 'summary', 'education', 'skills', 'languages']
    """
    normalized: List[str] = []
    for kind in order or ():
        if isinstance(kind, str) and kind in SECTION_KINDS and kind not in normalized:
            normalized.append(kind)

    for kind in DEFAULT_SECTION_ORDER:
        if kind not in normalized:
            normalized.append(kind)

    return normalized


def is_normalized(order: Iterable[Any]) -> bool:
    """True when normalization would leave the order unchanged."""
    order = list(order)
    return order == normalize_section_order(order)


def _move(items: List[Any], start: int, end: int) -> List[Any]:
    if not 0 <= start < len(items):
        raise IndexError(f"Start index {start} out of range for {len(items)} items")
    if not 0 <= end < len(items):
        raise IndexError(f"End index {end} out of range for {len(items)} items")

    moved = list(items)
    item = moved.pop(start)
    moved.insert(end, item)
    return moved


def reorder_sections(order: List[str], start: int, end: int) -> List[str]:
    """
    Move the section at `start` to `end` (drag and drop).

    Returns:
        New order; the input list is not modified

    Raises:
        IndexError: If either index is out of range
    """
    return _move(order, start, end)


def reorder_entries(profile: Mapping[str, Any], list_name: str, start: int, end: int) -> Dict[str, Any]:
    """
    Move an entry within one of the profile's lists (experiences, skills, ...).

    Entry ids travel with the entry, so zone ids stay stable across the move.

    Returns:
        New profile dict; the input is not modified

    Raises:
        KeyError: If the profile has no list under `list_name`
        IndexError: If either index is out of range
    """
    entries = profile.get(list_name)
    if not isinstance(entries, list):
        raise KeyError(f"Profile has no list named '{list_name}'")

    result = copy.deepcopy(dict(profile))
    result[list_name] = _move(result[list_name], start, end)
    return result
