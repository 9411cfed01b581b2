"""Unit tests for the content store."""

import pytest

from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.content.exceptions import InvalidPathError
from vellum.contexts.content.store import ContentStore
from vellum.contexts.theming.theme_mapper import ThemeConfig


@pytest.fixture
def store(sample_document_path):
    return ContentStore.from_file(sample_document_path)


@pytest.mark.unit
def test_empty_store():
    """Test the blank document."""
    store = ContentStore()

    assert store.section_order == ["summary", "experience", "education", "skills", "languages"]
    assert store.theme == ThemeConfig()
    assert store.snapshot().content == ContentTree()


@pytest.mark.unit
def test_constructor_heals_section_order():
    store = ContentStore(section_order=["skills", "skills", "photos"])
    assert store.section_order == ["skills", "summary", "experience", "education", "languages"]


@pytest.mark.unit
def test_update_field_notifies(store):
    """Test the single path+value edit."""
    snapshots = []
    store.subscribe(snapshots.append)

    store.update_field("experiences.0.role", "Principal Engineer")

    assert store.get("experiences.0.role") == "Principal Engineer"
    assert len(snapshots) == 1
    assert snapshots[0].content.experiences[0].role == "Principal Engineer"
    assert snapshots[0].content.experiences[0].id == "exp-acme"


@pytest.mark.unit
def test_update_field_bad_path(store):
    """Test that a failed write leaves state untouched and notifies no one."""
    snapshots = []
    store.subscribe(snapshots.append)

    with pytest.raises(InvalidPathError):
        store.update_field("experiences.9.role", "x")
    assert snapshots == []
    assert len(store.profile["experiences"]) == 2


@pytest.mark.unit
def test_update_field_never_replaces_scalars(store):
    """Test that a path running through a scalar is rejected instead of overwriting it."""
    snapshots = []
    store.subscribe(snapshots.append)
    skills = store.get("skills")

    with pytest.raises(InvalidPathError):
        store.update_field("skills.0.name", "x")
    with pytest.raises(InvalidPathError):
        store.update_field("personal.firstName.given", "y")

    assert snapshots == []
    assert store.get("skills") == skills
    assert store.get("personal.firstName") == "Ada"
    assert store.snapshot().content.skills[0] == "Python"


@pytest.mark.unit
def test_unsubscribe(store):
    snapshots = []
    unsubscribe = store.subscribe(snapshots.append)
    unsubscribe()
    unsubscribe()

    store.update_field("summary", "Short")
    assert snapshots == []


@pytest.mark.unit
def test_profile_is_a_copy(store):
    """Test that reads cannot mutate the store."""
    profile = store.profile
    profile["experiences"].clear()
    store.get("skills").append("COBOL")

    assert len(store.profile["experiences"]) == 2
    assert "COBOL" not in store.get("skills")


@pytest.mark.unit
def test_add_and_remove_entry(store):
    """Test id assignment on insert and removal by id."""
    entry = store.add_entry("experiences", {"role": "Consultant", "tasks": []}, index=0)

    assert entry["id"].startswith("exp-")
    assert store.get("experiences.0.id") == entry["id"]
    assert len(store.get("experiences")) == 3

    store.remove_entry("experiences", entry["id"])
    assert [e["id"] for e in store.get("experiences")] == ["exp-acme", "exp-globex"]


@pytest.mark.unit
def test_add_entry_keeps_existing_id(store):
    entry = store.add_entry("languages", {"id": "lang-de", "name": "German", "level": "B1"})
    assert entry["id"] == "lang-de"
    assert store.add_entry("skills", "Terraform") == "Terraform"
    assert store.get("skills")[-1] == "Terraform"


@pytest.mark.unit
def test_move_entry_and_section(store):
    """Test list and section reordering."""
    store.move_entry("experiences", 1, 0)
    assert [e["id"] for e in store.get("experiences")] == ["exp-globex", "exp-acme"]

    store.move_section(4, 0)
    assert store.section_order[0] == "languages"

    store.set_section_order(["education"])
    assert store.section_order == ["education", "summary", "experience", "skills", "languages"]


@pytest.mark.unit
def test_update_design(store):
    """Test merging design keys; invalid values fall back to defaults."""
    store.update_design({"density": "compact", "fontPairing": "comic"})

    assert store.theme.density == "compact"
    assert store.theme.font_pairing == ThemeConfig().font_pairing
    assert store.snapshot().theme is store.theme


@pytest.mark.unit
def test_snapshot_is_hashable(store):
    """Test that snapshots of equal state compare equal."""
    first = store.snapshot()
    second = store.snapshot()

    assert first == second
    assert hash(first) == hash(second)
    assert isinstance(first.section_order, tuple)


@pytest.mark.unit
def test_save_round_trip(store, tmp_path):
    """Test that a saved store reloads to the same state."""
    store.update_field("summary", "Edited summary")
    path = store.save(tmp_path / "cv.yaml")

    reloaded = ContentStore.from_file(path)
    assert reloaded.snapshot() == store.snapshot()
    assert reloaded.to_document() == store.to_document()


@pytest.mark.unit
def test_constructor_assigns_entry_ids():
    """Test that entries passed without ids keep the same id when moved."""
    store = ContentStore(profile={"experiences": [{"role": "A"}, {"role": "B"}]})
    ids = {entry["role"]: entry["id"] for entry in store.get("experiences")}

    assert all(entry_id.startswith("exp-") for entry_id in ids.values())
    assert len(set(ids.values())) == 2

    store.move_entry("experiences", 0, 1)

    assert [entry["role"] for entry in store.get("experiences")] == ["B", "A"]
    assert {entry["role"]: entry["id"] for entry in store.get("experiences")} == ids
    assert [experience.id for experience in store.snapshot().content.experiences] == [ids["B"], ids["A"]]


@pytest.mark.unit
def test_add_entry_replaces_taken_id(store):
    entry = store.add_entry("experiences", {"id": "exp-acme", "role": "Consultant"})

    assert entry["id"] != "exp-acme"
    assert len({e["id"] for e in store.get("experiences")}) == 3


@pytest.mark.unit
def test_update_field_gives_whole_entries_an_id(store):
    """Test that an entry written through a path is given an id."""
    store.update_field("educations.1", {"degree": "MSc"})

    assert store.get("educations.1.id").startswith("edu-")
