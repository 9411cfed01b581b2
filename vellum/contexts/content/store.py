"""
Content store.

Holds the editable document state (profile dict, section order, design) and is
the only place it changes. Every edit goes through a path+value update or one
of the list/order operations below; each returns nothing and notifies
subscribers.

Record entries of experiences, educations and languages always carry a unique
id: missing or repeated ids are assigned on construction and after every edit,
so zone ids never depend on an entry's position.

The layout engine never sees the mutable state: `snapshot()` hands out a frozen
ContentTree, a tuple section order and a ThemeConfig.
"""

import copy
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from vellum.contexts.content.content_tree import ContentTree, empty_profile
from vellum.contexts.content.logger import _log_debug, _log_info, log_field_update, log_section_order_healed
from vellum.contexts.content.paths import (
    get_value_by_path,
    insert_array_item,
    remove_array_item_by_id,
    set_value_by_path,
)
from vellum.contexts.content.persistence import (
    CURRENT_VERSION,
    ID_PREFIXES,
    assign_entry_ids,
    load_document,
    new_entry_id,
    save_document,
    split_document,
)
from vellum.contexts.content.section_order import normalize_section_order, reorder_entries, reorder_sections
from vellum.contexts.theming.theme_mapper import ThemeConfig


class StoreSnapshot(NamedTuple):
    content: ContentTree
    section_order: Tuple[str, ...]
    theme: ThemeConfig


Subscriber = Callable[[StoreSnapshot], None]


class ContentStore:
    """
    Editable document state with change notification.

    Example:
        store = ContentStore.from_file(Path("documents/cv.yaml"))
        store.subscribe(lambda snap: engine.compose(*snap))
        store.update_field("experiences.0.role", "Staff Engineer")
    """

    def __init__(
        self,
        profile: Optional[Mapping[str, Any]] = None,
        section_order: Optional[Sequence[str]] = None,
        design: Optional[Mapping[str, Any]] = None,
    ):
        self._profile: Dict[str, Any] = copy.deepcopy(dict(profile)) if profile is not None else empty_profile()
        for list_name, count in assign_entry_ids(self._profile).items():
            _log_debug(f"Assigned {count} entry id(s) in {list_name}")
        self._section_order: List[str] = self._normalized(section_order)
        self._theme = ThemeConfig.from_dict(design)
        self._subscribers: List[Subscriber] = []

    # -- construction / persistence ----------------------------------------

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "ContentStore":
        """Store from a current-version stored document (see persistence.migrate_stored_state)."""
        profile, order, theme = split_document(document)
        return cls(profile=profile, section_order=order, design=theme.to_dict())

    @classmethod
    def from_file(cls, document_path: Path) -> "ContentStore":
        _log_info(f"Loading document: {document_path}")
        return cls.from_document(load_document(document_path))

    def to_document(self) -> Dict[str, Any]:
        return {
            "version": CURRENT_VERSION,
            "profile": copy.deepcopy(self._profile),
            "section_order": list(self._section_order),
            "design": self._theme.to_dict(),
        }

    def save(self, document_path: Path) -> Path:
        path = save_document(self.to_document(), document_path)
        _log_info(f"Saved document: {path}")
        return path

    # -- reads ---------------------------------------------------------------

    @property
    def profile(self) -> Dict[str, Any]:
        """Deep copy of the profile dict."""
        return copy.deepcopy(self._profile)

    @property
    def section_order(self) -> List[str]:
        return list(self._section_order)

    @property
    def theme(self) -> ThemeConfig:
        return self._theme

    def get(self, path: str, default: Any = None) -> Any:
        return copy.deepcopy(get_value_by_path(self._profile, path, default))

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            content=ContentTree.from_dict(self._profile),
            section_order=tuple(self._section_order),
            theme=self._theme,
        )

    # -- subscriptions -------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a change callback.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        if not self._subscribers:
            return
        snap = self.snapshot()
        for callback in list(self._subscribers):
            callback(snap)

    # -- edits ---------------------------------------------------------------

    def update_field(self, path: str, value: Any) -> None:
        """
        Set one value in the profile. This is the single edit path used by the overlay.

        Raises:
            InvalidPathError: If the path cannot be written
        """
        self._profile = set_value_by_path(self._profile, path, value)
        # Entries written whole through a path still need stable ids
        assign_entry_ids(self._profile)
        log_field_update(path, value)
        self._notify()

    def add_entry(self, list_name: str, entry: Any, index: Optional[int] = None) -> Any:
        """
        Insert an entry into a profile list.

        Record entries of id-carrying lists get a fresh id when they have none or
        their id is already taken.

        Returns:
            The inserted entry
        """
        if isinstance(entry, Mapping) and list_name in ID_PREFIXES:
            entry = dict(entry)
            existing = {item.get("id") for item in self._profile.get(list_name) or () if isinstance(item, Mapping)}
            if not entry.get("id") or entry["id"] in existing:
                entry["id"] = new_entry_id(list_name)
        self._profile = insert_array_item(self._profile, list_name, entry, index)
        _log_debug(f"Added entry to {list_name}")
        self._notify()
        return entry

    def remove_entry(self, list_name: str, entry_id: str) -> None:
        self._profile = remove_array_item_by_id(self._profile, list_name, entry_id)
        _log_debug(f"Removed {entry_id} from {list_name}")
        self._notify()

    def move_entry(self, list_name: str, start: int, end: int) -> None:
        self._profile = reorder_entries(self._profile, list_name, start, end)
        _log_debug(f"Moved {list_name}[{start}] -> [{end}]")
        self._notify()

    def set_section_order(self, order: Sequence[str]) -> None:
        self._section_order = self._normalized(order)
        self._notify()

    def move_section(self, start: int, end: int) -> None:
        self._section_order = reorder_sections(self._section_order, start, end)
        _log_debug(f"Section order: {self._section_order}")
        self._notify()

    def update_design(self, changes: Mapping[str, Any]) -> None:
        """Merge design keys (camelCase) into the theme config."""
        self._theme = ThemeConfig.from_dict({**self._theme.to_dict(), **dict(changes)})
        self._notify()

    def set_theme(self, theme: ThemeConfig) -> None:
        self._theme = theme
        self._notify()

    @staticmethod
    def _normalized(order: Optional[Sequence[str]]) -> List[str]:
        normalized = normalize_section_order(order)
        if order is not None and list(order) != normalized:
            log_section_order_healed(order, normalized)
        return normalized
