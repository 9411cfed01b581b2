"""
Path utilities for the stored profile dict.

Paths are dotted with integer list indices (`experiences.0.tasks.1`); bracket
indices (`experiences[0].tasks[1]`) are accepted and mean the same thing.

Every write returns a new dict (deep copy); the input is never modified.
"""

import copy
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from vellum.contexts.content.exceptions import InvalidPathError

_BRACKET_INDEX = re.compile(r"\[(\d+)\]")

_MISSING = object()

PathSegment = Union[str, int]


def parse_path(path: str) -> List[PathSegment]:
    """
    Split a path into segments; numeric segments become ints.

    Raises:
        InvalidPathError: If the path is empty or has an empty segment
    """
    if not isinstance(path, str) or not path.strip():
        raise InvalidPathError("Path must be a non-empty string", path=repr(path))

    normalized = _BRACKET_INDEX.sub(r".\1", path.strip())
    segments: List[PathSegment] = []
    for raw in normalized.split("."):
        if raw == "":
            raise InvalidPathError("Path has an empty segment", path=path)
        segments.append(int(raw) if raw.isdigit() else raw)
    return segments


def _step(container: Any, segment: PathSegment) -> Any:
    """One level of lookup, or _MISSING."""
    if isinstance(container, Mapping):
        return container.get(segment, container.get(str(segment), _MISSING))
    if isinstance(container, list) and isinstance(segment, int):
        return container[segment] if 0 <= segment < len(container) else _MISSING
    return _MISSING


def get_value_by_path(profile: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """
    Value at a path, or `default` when any segment is missing.

    Example:
        >>> get_value_by_path(profile, "experiences.0.role")
        'Staff Engineer'
    """
    current: Any = profile
    for segment in parse_path(path):
        current = _step(current, segment)
        if current is _MISSING:
            return default
    return current


def require_value_by_path(profile: Mapping[str, Any], path: str) -> Any:
    """
    Value at a path.

    Raises:
        InvalidPathError: If any segment is missing
    """
    current: Any = profile
    for segment in parse_path(path):
        current = _step(current, segment)
        if current is _MISSING:
            raise InvalidPathError("Path not found in profile", path=path, segment=str(segment))
    return current


def has_path(profile: Mapping[str, Any], path: str) -> bool:
    """True when the path resolves to a value other than None."""
    return get_value_by_path(profile, path) is not None


def _container_for(next_segment: PathSegment) -> Any:
    return [] if isinstance(next_segment, int) else {}


def set_value_by_path(profile: Mapping[str, Any], path: str, value: Any) -> Dict[str, Any]:
    """
    Set a value at a path (immutable update).

    Missing (or None) intermediate containers are created: a list when the
    next segment is an index, a dict otherwise. Existing scalars are never
    replaced by a container. A list index equal to the list length
    appends.

    Returns:
        A new profile dict with the value set

    Raises:
        InvalidPathError: If a list index is past the end, or a segment
                          traverses a scalar
    """
    segments = parse_path(path)
    result = copy.deepcopy(dict(profile))

    current: Any = result
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if isinstance(current, dict):
            key = segment if not isinstance(segment, int) or segment in current else str(segment)
            if last:
                current[key] = value
            else:
                if current.get(key) is None:
                    current[key] = _container_for(segments[i + 1])
                current = current[key]
        elif isinstance(current, list) and isinstance(segment, int):
            if segment > len(current):
                raise InvalidPathError("List index out of range", path=path, segment=str(segment))
            if segment == len(current):
                current.append(value if last else _container_for(segments[i + 1]))
            elif last:
                current[segment] = value
            elif current[segment] is None:
                current[segment] = _container_for(segments[i + 1])
            current = current[segment]
        else:
            raise InvalidPathError("Cannot traverse into a scalar value", path=path, segment=str(segment))

    return result


def batch_update(profile: Mapping[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply several path updates in order, returning one new profile."""
    result = copy.deepcopy(dict(profile))
    for path, value in updates.items():
        result = set_value_by_path(result, path, value)
    return result


def insert_array_item(
    profile: Mapping[str, Any], array_path: str, item: Any, index: Optional[int] = None
) -> Dict[str, Any]:
    """
    Insert an item into the list at `array_path` (immutable).

    Appends when `index` is None or out of range. Creates the list when the
    path holds no list yet.
    """
    array = get_value_by_path(profile, array_path)
    if not isinstance(array, list):
        return set_value_by_path(profile, array_path, [item])

    items = copy.deepcopy(array)
    if index is not None and 0 <= index <= len(items):
        items.insert(index, item)
    else:
        items.append(item)
    return set_value_by_path(profile, array_path, items)


def remove_array_item(profile: Mapping[str, Any], array_path: str, index: int) -> Dict[str, Any]:
    """Remove the item at `index` (immutable). Out-of-range indices are a no-op."""
    array = get_value_by_path(profile, array_path)
    if not isinstance(array, list) or not 0 <= index < len(array):
        return copy.deepcopy(dict(profile))

    items = copy.deepcopy(array)
    del items[index]
    return set_value_by_path(profile, array_path, items)


def remove_array_item_by_id(profile: Mapping[str, Any], array_path: str, item_id: str) -> Dict[str, Any]:
    """Remove the first entry whose `id` matches (immutable)."""
    array = get_value_by_path(profile, array_path)
    if isinstance(array, list):
        for index, item in enumerate(array):
            if isinstance(item, Mapping) and item.get("id") == item_id:
                return remove_array_item(profile, array_path, index)
    return copy.deepcopy(dict(profile))


def update_array_item_by_id(
    profile: Mapping[str, Any], array_path: str, item_id: str, updates: Mapping[str, Any]
) -> Dict[str, Any]:
    """Shallow-merge `updates` into the entry whose `id` matches (immutable)."""
    array = get_value_by_path(profile, array_path)
    if isinstance(array, list):
        for index, item in enumerate(array):
            if isinstance(item, Mapping) and item.get("id") == item_id:
                return set_value_by_path(profile, f"{array_path}.{index}", {**item, **updates})
    return copy.deepcopy(dict(profile))
