"""
Zone Catalog

Flat catalog of editable field zones for the interactive overlay. Each zone
pairs a content-tree path with the frame the layout calculator assigned to the
field, so a click on the overlay lands exactly on the field drawn by the print
pipeline.

Zones are never patched: the whole catalog is rebuilt from a fresh layout on
every content or theme change. Frames are read from the LayoutGeometry (the
same Frame objects), never recomputed.

Zone ids use stable entry ids so they survive reordering
(`experience:<id>:task:<j>`); paths use positions because that is what the
content store edits (`experiences.0.tasks.1`).
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.layout.layout_calculator import Frame, LayoutGeometry
from vellum.contexts.theming.theme_mapper import ResolvedTheme


class ZoneKind(str, Enum):
    TEXT = "text"
    MULTILINE = "multiline"
    PHOTO = "photo"
    LIST = "list"


CONTACT_PLACEHOLDERS = {
    "email": "Email",
    "phone": "Phone",
    "address": "Address",
    "linkedin": "LinkedIn",
    "website": "Website",
}


@dataclass(frozen=True)
class FieldZone:
    """
    One editable hit-region.

    Attributes:
        zone_id: Stable identifier (e.g., "experience:exp-1:role")
        path: Content-tree path the zone edits (e.g., "experiences.0.role")
        kind: Editor kind the overlay opens
        frame: Frame assigned by the layout calculator
        placeholder: Label shown when the field is empty
    """

    zone_id: str
    path: str
    kind: ZoneKind
    frame: Frame
    placeholder: str = ""

    def scaled(self, zoom: float) -> "FieldZone":
        return FieldZone(self.zone_id, self.path, self.kind, self.frame.scaled(zoom), self.placeholder)


@dataclass(frozen=True)
class OverlayPayload:
    """What the overlay needs to place its hit-targets."""

    zones: Tuple[FieldZone, ...]
    accent_color: str
    zoom: float = 1.0

    def zone(self, zone_id: str) -> Optional[FieldZone]:
        for zone in self.zones:
            if zone.zone_id == zone_id:
                return zone
        return None


def build_zones(layout: LayoutGeometry, content: ContentTree) -> Tuple[FieldZone, ...]:
    """
    Build the zone catalog for a computed layout.

    Walks the content in the order the layout calculator used and emits one
    zone per addressable field. Fields whose frame is absent from the geometry
    (no photo, section not placed, empty aggregate block) get no zone.

    Args:
        layout: Geometry from compute_layout
        content: The content tree the layout was computed from

    Returns:
        Zones in document order
    """
    zones: List[FieldZone] = []

    # Identity block
    if layout.photo is not None:
        zones.append(FieldZone("photo", "personal.photoUrl", ZoneKind.PHOTO, layout.photo, "Photo"))
    zones.append(FieldZone("first_name", "personal.firstName", ZoneKind.TEXT, layout.first_name, "First name"))
    zones.append(FieldZone("last_name", "personal.lastName", ZoneKind.TEXT, layout.last_name, "Last name"))
    zones.append(FieldZone("title", "personal.title", ZoneKind.TEXT, layout.title, "Title"))
    for name, frame in layout.contact:
        zones.append(
            FieldZone(f"contact:{name}", f"personal.contact.{name}", ZoneKind.TEXT, frame, CONTACT_PLACEHOLDERS[name])
        )

    # Sections, in the order they were placed
    for kind in layout.placed_sections:
        if kind == "summary" and layout.summary is not None:
            zones.append(FieldZone("summary", "summary", ZoneKind.MULTILINE, layout.summary, "Professional summary"))
        elif kind == "experience":
            zones.extend(_experience_zones(layout, content))
        elif kind == "education":
            zones.extend(_education_zones(layout, content))
        elif kind == "skills" and layout.skills is not None:
            zones.append(FieldZone("skills", "skills", ZoneKind.LIST, layout.skills, "Skills"))
        elif kind == "languages" and layout.languages is not None:
            zones.append(FieldZone("languages", "languages", ZoneKind.LIST, layout.languages, "Languages"))

    return tuple(zones)


def _experience_zones(layout: LayoutGeometry, content: ContentTree) -> List[FieldZone]:
    zones = []
    for i, (exp, frames) in enumerate(zip(content.experiences, layout.experiences)):
        prefix = f"experience:{exp.id}"
        path = f"experiences.{i}"
        zones.append(FieldZone(f"{prefix}:role", f"{path}.role", ZoneKind.TEXT, frames.role, "Role"))
        zones.append(FieldZone(f"{prefix}:dates", f"{path}.dates", ZoneKind.TEXT, frames.dates, "Dates"))
        zones.append(FieldZone(f"{prefix}:company", f"{path}.company", ZoneKind.TEXT, frames.company, "Company"))
        for j, frame in enumerate(frames.tasks):
            zones.append(FieldZone(f"{prefix}:task:{j}", f"{path}.tasks.{j}", ZoneKind.TEXT, frame, "Task"))
    return zones


def _education_zones(layout: LayoutGeometry, content: ContentTree) -> List[FieldZone]:
    zones = []
    for i, (edu, frames) in enumerate(zip(content.educations, layout.educations)):
        prefix = f"education:{edu.id}"
        path = f"educations.{i}"
        zones.append(FieldZone(f"{prefix}:degree", f"{path}.degree", ZoneKind.TEXT, frames.degree, "Degree"))
        zones.append(FieldZone(f"{prefix}:year", f"{path}.year", ZoneKind.TEXT, frames.year, "Year"))
        zones.append(FieldZone(f"{prefix}:school", f"{path}.school", ZoneKind.TEXT, frames.school, "School"))
        if frames.description is not None:
            zones.append(
                FieldZone(
                    f"{prefix}:description",
                    f"{path}.description",
                    ZoneKind.MULTILINE,
                    frames.description,
                    "Description",
                )
            )
    return zones


def scale_zones(zones: Sequence[FieldZone], zoom: float) -> Tuple[FieldZone, ...]:
    """Scale every zone frame by the overlay's zoom factor."""
    if zoom <= 0:
        raise ValueError(f"Zoom must be positive, got {zoom}")
    return tuple(zone.scaled(zoom) for zone in zones)


def build_overlay(
    layout: LayoutGeometry, content: ContentTree, theme: ResolvedTheme, zoom: float = 1.0
) -> OverlayPayload:
    """Zones scaled to the current zoom, plus the accent color for highlighting."""
    return OverlayPayload(
        zones=scale_zones(build_zones(layout, content), zoom),
        accent_color=theme.accent_color,
        zoom=zoom,
    )


def hit_test(zones: Sequence[FieldZone], x: float, y: float, page: int = 0) -> Optional[FieldZone]:
    """
    Zone under a point, or None.

    Later zones are drawn on top, so the last match wins.
    """
    for zone in reversed(zones):
        if zone.frame.page == page and zone.frame.contains(x, y):
            return zone
    return None
