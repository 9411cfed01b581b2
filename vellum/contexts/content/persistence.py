"""
Stored document persistence.

A stored document is a YAML mapping:

    version: 2
    profile: {...}          # content tree dict (camelCase keys)
    section_order: [...]    # section kinds
    design: {...}           # ThemeConfig.to_dict()

Older documents are upgraded once, at load time, by `migrate_stored_state`:

- version 0: the bare profile dict at the root, no wrapper
- version 1: wrapper with `sectionOrder` and `theme` keys

Migration also assigns ids to list entries that lack one, turns legacy plain
string languages into {name, level} records, fills missing profile keys and
normalizes the section order.
"""

import copy
import uuid
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from omegaconf import OmegaConf

from vellum.contexts.content.content_tree import empty_profile
from vellum.contexts.content.exceptions import DocumentLoadError
from vellum.contexts.content.logger import log_migration, log_section_order_healed
from vellum.contexts.content.section_order import normalize_section_order
from vellum.contexts.theming.theme_mapper import ThemeConfig

CURRENT_VERSION = 2

# Keys whose presence at the root marks a bare (version 0) profile
PROFILE_KEYS = ("personal", "summary", "experiences", "educations", "skills", "languages")

# List name -> id prefix for entries that need a stable id
ID_PREFIXES = {
    "experiences": "exp",
    "educations": "edu",
    "languages": "lang",
}


def new_entry_id(list_name: str) -> str:
    """Fresh stable id for an entry of the given list."""
    return f"{ID_PREFIXES.get(list_name, 'item')}-{uuid.uuid4().hex[:12]}"


def _detect_version(raw: Mapping[str, Any]) -> int:
    version = raw.get("version")
    if version is None:
        return 0 if any(key in raw for key in PROFILE_KEYS) or "profile" not in raw else 1
    if isinstance(version, bool) or not isinstance(version, int):
        raise DocumentLoadError(f"Stored version must be an integer, got {version!r}")
    return version


def _complete_profile(profile: Mapping[str, Any], changes: List[str]) -> Dict[str, Any]:
    """Fill missing keys from the blank profile (two levels deep)."""
    completed = empty_profile()
    for key, value in profile.items():
        if isinstance(value, Mapping) and isinstance(completed.get(key), dict):
            completed[key] = {**completed[key], **copy.deepcopy(dict(value))}
        else:
            completed[key] = copy.deepcopy(value)

    missing = [key for key in empty_profile() if key not in profile]
    if missing:
        changes.append(f"Added missing profile keys: {missing}")
    return completed


def _heal_languages(profile: Dict[str, Any], changes: List[str]) -> None:
    languages = profile.get("languages")
    if isinstance(languages, str):
        languages = [languages] if languages.strip() else []
        changes.append("Wrapped a single-string languages value in a list")
    elif not isinstance(languages, list):
        if languages is not None:
            changes.append(f"Reset unreadable languages value ({type(languages).__name__})")
        languages = []

    if any(isinstance(language, str) for language in languages):
        languages = [
            {"name": language, "level": ""} if isinstance(language, str) else language for language in languages
        ]
        changes.append("Converted plain-string languages to records")
    profile["languages"] = languages


def assign_entry_ids(profile: Dict[str, Any]) -> Dict[str, int]:
    """
    Give every record entry of the id-carrying lists a unique, stable id.

    Entries with a missing, empty or repeated id get a fresh `new_entry_id`.
    The profile is updated in place.

    Returns:
        Number of ids assigned per list name (lists with none assigned omitted)
    """
    assigned: Dict[str, int] = {}
    for list_name in ID_PREFIXES:
        entries = profile.get(list_name)
        if not isinstance(entries, list):
            continue
        seen = set()
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            entry_id = entry.get("id")
            if not entry_id or entry_id in seen:
                entry["id"] = new_entry_id(list_name)
                assigned[list_name] = assigned.get(list_name, 0) + 1
            seen.add(entry["id"])
    return assigned


def _heal_entries(profile: Dict[str, Any], changes: List[str]) -> None:
    _heal_languages(profile, changes)
    for list_name, count in assign_entry_ids(profile).items():
        changes.append(f"Assigned {count} id(s) in {list_name}")


def migrate_stored_state(raw: Any) -> Dict[str, Any]:
    """
    Upgrade a stored document to the current version.

    Args:
        raw: Parsed stored document (any version)

    Returns:
        Version-2 document with a complete profile, a normalized section order
        and a complete design block. The input is not modified.

    Raises:
        DocumentLoadError: If the input is not a mapping or its version is
                           newer than this code understands
    """
    if not isinstance(raw, Mapping):
        raise DocumentLoadError(f"Stored document must be a mapping, got {type(raw).__name__}")

    version = _detect_version(raw)
    if version > CURRENT_VERSION:
        raise DocumentLoadError("Stored document is newer than supported", version=version)

    changes: List[str] = []

    if version == 0:
        profile = dict(raw)
        order = None
        design = None
        changes.append("Wrapped bare profile")
    elif version == 1:
        profile = dict(raw.get("profile") or {})
        order = raw.get("sectionOrder", raw.get("section_order"))
        design = raw.get("theme", raw.get("design"))
        changes.append("Renamed sectionOrder/theme to section_order/design")
    else:
        profile = dict(raw.get("profile") or {})
        order = raw.get("section_order")
        design = raw.get("design")

    profile = _complete_profile(profile, changes)
    _heal_entries(profile, changes)

    normalized_order = normalize_section_order(order)
    if order is not None and list(order) != normalized_order:
        log_section_order_healed(order, normalized_order)
        changes.append("Normalized section order")

    if not isinstance(design, Mapping):
        # Older documents kept the accent color in the profile metadata
        legacy_accent = (profile.get("metadata") or {}).get("accentColor")
        design = {"accentColor": legacy_accent} if legacy_accent else {}
    design = ThemeConfig.from_dict(design).to_dict()

    log_migration(version, CURRENT_VERSION, changes)

    return {
        "version": CURRENT_VERSION,
        "profile": profile,
        "section_order": normalized_order,
        "design": design,
    }


def load_document(document_path: Path) -> Dict[str, Any]:
    """
    Load and migrate a stored document.

    Raises:
        DocumentLoadError: If the file is missing, unreadable or not a mapping
    """
    document_path = Path(document_path)
    if not document_path.exists():
        raise DocumentLoadError("Stored document not found", document_path=document_path)

    try:
        raw = OmegaConf.to_container(OmegaConf.load(document_path), resolve=True)
    except Exception as e:
        raise DocumentLoadError(f"Could not parse stored document: {e}", document_path=document_path) from e

    try:
        return migrate_stored_state(raw)
    except DocumentLoadError as e:
        raise DocumentLoadError(e.message, document_path=document_path, version=e.version) from e


def save_document(document: Mapping[str, Any], document_path: Path) -> Path:
    """
    Write a stored document as YAML.

    Returns:
        The path written
    """
    document_path = Path(document_path)
    document_path.parent.mkdir(parents=True, exist_ok=True)

    OmegaConf.save(OmegaConf.create(dict(document)), document_path)

    # Strip trailing blank lines for consistency
    content = document_path.read_text()
    document_path.write_text(content.rstrip() + "\n")

    return document_path


def split_document(document: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str], ThemeConfig]:
    """(profile, section order, theme config) of a current-version document."""
    return (
        copy.deepcopy(dict(document["profile"])),
        list(document["section_order"]),
        ThemeConfig.from_dict(document["design"]),
    )
