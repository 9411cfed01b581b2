"""
Content Tree Data Structures

Defines the read-only content tree consumed by the layout engine. The content
store persists the document as a plain nested dict (edited through path+value
updates); `ContentTree.from_dict` turns a snapshot of that dict into frozen
dataclasses so the engine can neither mutate nor accidentally share state with
the store.

Every list-addressable entry (experience, education, language) carries a stable
`id`. Position in the tuple is document order; the id survives reordering and
is what field zone identifiers are built from.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Canonical section kinds, in default document order
SECTION_KINDS = ("summary", "experience", "education", "skills", "languages")
DEFAULT_SECTION_ORDER = list(SECTION_KINDS)

# Sections drawn in the sidebar column when the theme has one
SIDEBAR_SECTION_KINDS = ("skills", "languages")

# Content-tree list that backs each section kind
SECTION_LIST_KEYS = {
    "experience": "experiences",
    "education": "educations",
    "skills": "skills",
    "languages": "languages",
}


def _text(value: Any) -> str:
    """Coerce a stored scalar to text; None becomes the empty string."""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class ContactInfo:
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    website: str = ""

    # Always laid out, even when empty, so the user has something to click
    REQUIRED_FIELDS = ("email", "phone", "address")
    OPTIONAL_FIELDS = ("linkedin", "website")

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ContactInfo":
        data = data or {}
        return cls(
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            address=_text(data.get("address")),
            linkedin=_text(data.get("linkedin")),
            website=_text(data.get("website")),
        )

    def visible_fields(self) -> Tuple[str, ...]:
        """Contact field names that get a line, in display order."""
        optional = tuple(name for name in self.OPTIONAL_FIELDS if getattr(self, name).strip())
        return self.REQUIRED_FIELDS + optional


@dataclass(frozen=True)
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    photo_url: str = ""
    contact: ContactInfo = field(default_factory=ContactInfo)

    @property
    def has_photo(self) -> bool:
        return bool(self.photo_url.strip())

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PersonalInfo":
        data = data or {}
        return cls(
            first_name=_text(data.get("firstName")),
            last_name=_text(data.get("lastName")),
            title=_text(data.get("title")),
            photo_url=_text(data.get("photoUrl")),
            contact=ContactInfo.from_dict(data.get("contact")),
        )


@dataclass(frozen=True)
class Experience:
    """
    One work experience entry.

    Attributes:
        id: Stable identifier
        role: Job title
        company: Organization name
        dates: Display string for the date range (e.g., "2020 - Present")
        location: Optional location
        tasks: Ordered task descriptions
    """

    id: str
    role: str = ""
    company: str = ""
    dates: str = ""
    location: str = ""
    tasks: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int) -> "Experience":
        return cls(
            id=_text(data.get("id")) or f"experience-{index}",
            role=_text(data.get("role")),
            company=_text(data.get("company")),
            dates=_text(data.get("dates")),
            location=_text(data.get("location")),
            tasks=tuple(_text(task) for task in data.get("tasks") or ()),
        )


@dataclass(frozen=True)
class Education:
    id: str
    degree: str = ""
    school: str = ""
    year: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int) -> "Education":
        return cls(
            id=_text(data.get("id")) or f"education-{index}",
            degree=_text(data.get("degree")),
            school=_text(data.get("school")),
            year=_text(data.get("year")),
            description=_text(data.get("description")),
        )


@dataclass(frozen=True)
class Language:
    id: str
    name: str = ""
    level: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int) -> "Language":
        return cls(
            id=_text(data.get("id")) or f"language-{index}",
            name=_text(data.get("name")),
            level=_text(data.get("level")),
        )


@dataclass(frozen=True)
class ContentMetadata:
    template_id: str = ""
    density: str = "comfortable"
    accent_color: str = ""
    font_family: str = "sans"

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ContentMetadata":
        data = data or {}
        return cls(
            template_id=_text(data.get("templateId")),
            density=_text(data.get("density")) or "comfortable",
            accent_color=_text(data.get("accentColor")),
            font_family=_text(data.get("fontFamily")) or "sans",
        )


@dataclass(frozen=True)
class ContentTree:
    """
    Read-only snapshot of a résumé document.

    Built from the stored profile dict with `from_dict`. Frozen and made of
    tuples, so two snapshots of the same data compare (and hash) equal, which
    is what lets the engine memoize on it.
    """

    id: str = ""
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    experiences: Tuple[Experience, ...] = ()
    educations: Tuple[Education, ...] = ()
    skills: Tuple[str, ...] = ()
    languages: Tuple[Language, ...] = ()
    metadata: ContentMetadata = field(default_factory=ContentMetadata)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ContentTree":
        data = data or {}
        return cls(
            id=_text(data.get("id")),
            personal=PersonalInfo.from_dict(data.get("personal")),
            summary=_text(data.get("summary")),
            experiences=tuple(
                Experience.from_dict(entry, i) for i, entry in enumerate(data.get("experiences") or ())
            ),
            educations=tuple(
                Education.from_dict(entry, i) for i, entry in enumerate(data.get("educations") or ())
            ),
            skills=tuple(_text(skill) for skill in data.get("skills") or ()),
            languages=tuple(
                Language.from_dict(entry, i) for i, entry in enumerate(data.get("languages") or ())
            ),
            metadata=ContentMetadata.from_dict(data.get("metadata")),
        )

    def section_is_empty(self, section_kind: str) -> bool:
        """True when the section has nothing to render."""
        if section_kind == "summary":
            return not self.summary
        return len(getattr(self, SECTION_LIST_KEYS[section_kind])) == 0


def empty_profile() -> Dict[str, Any]:
    """A blank stored profile with every key present."""
    return {
        "id": "",
        "personal": {
            "firstName": "",
            "lastName": "",
            "title": "",
            "photoUrl": "",
            "contact": {"email": "", "phone": "", "address": ""},
        },
        "summary": "",
        "experiences": [],
        "educations": [],
        "skills": [],
        "languages": [],
        "metadata": {
            "templateId": "",
            "density": "comfortable",
            "accentColor": "",
            "fontFamily": "sans",
        },
    }
