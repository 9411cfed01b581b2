"""Unit tests for profile path utilities."""

import pytest

from vellum.contexts.content.exceptions import InvalidPathError
from vellum.contexts.content.paths import (
    batch_update,
    get_value_by_path,
    has_path,
    insert_array_item,
    parse_path,
    remove_array_item,
    remove_array_item_by_id,
    require_value_by_path,
    set_value_by_path,
    update_array_item_by_id,
)


@pytest.fixture
def profile():
    return {
        "personal": {"firstName": "Ada", "contact": {"email": "ada@example.com"}},
        "experiences": [
            {"id": "exp-1", "role": "Engineer", "tasks": ["Built things", "Fixed things"]},
            {"id": "exp-2", "role": "Intern", "tasks": []},
        ],
        "skills": ["Python"],
    }


@pytest.mark.unit
def test_parse_path():
    """Test dotted and bracket paths."""
    assert parse_path("experiences.0.tasks.1") == ["experiences", 0, "tasks", 1]
    assert parse_path("experiences[0].tasks[1]") == ["experiences", 0, "tasks", 1]
    assert parse_path("summary") == ["summary"]


@pytest.mark.unit
@pytest.mark.parametrize("path", ["", "   ", "experiences..role", ".summary", None])
def test_parse_path_rejects_malformed(path):
    """Test empty paths and empty segments."""
    with pytest.raises(InvalidPathError):
        parse_path(path)


@pytest.mark.unit
def test_get_value_by_path(profile):
    """Test reads, including missing segments."""
    assert get_value_by_path(profile, "personal.contact.email") == "ada@example.com"
    assert get_value_by_path(profile, "experiences.0.tasks.1") == "Fixed things"
    assert get_value_by_path(profile, "experiences[1].role") == "Intern"
    assert get_value_by_path(profile, "experiences.5.role") is None
    assert get_value_by_path(profile, "personal.firstName.x", default="?") == "?"


@pytest.mark.unit
def test_require_value_by_path(profile):
    """Test the raising read."""
    assert require_value_by_path(profile, "skills.0") == "Python"
    with pytest.raises(InvalidPathError) as exc_info:
        require_value_by_path(profile, "personal.contact.website")
    assert exc_info.value.segment == "website"
    # Usable where a KeyError is expected
    with pytest.raises(KeyError):
        require_value_by_path(profile, "missing")


@pytest.mark.unit
def test_has_path(profile):
    assert has_path(profile, "experiences.1.tasks")
    assert not has_path(profile, "summary")


@pytest.mark.unit
def test_set_value_by_path_is_immutable(profile):
    """Test that writes return a new dict and leave the input alone."""
    updated = set_value_by_path(profile, "experiences.0.role", "Staff Engineer")

    assert updated["experiences"][0]["role"] == "Staff Engineer"
    assert profile["experiences"][0]["role"] == "Engineer"
    assert updated is not profile


@pytest.mark.unit
def test_set_value_by_path_creates_intermediates():
    """Test dict and list creation along the way."""
    updated = set_value_by_path({}, "personal.contact.linkedin", "in/ada")
    assert updated == {"personal": {"contact": {"linkedin": "in/ada"}}}

    updated = set_value_by_path({}, "experiences.0.role", "Engineer")
    assert updated == {"experiences": [{"role": "Engineer"}]}


@pytest.mark.unit
def test_set_value_by_path_appends_at_length(profile):
    """Test that index == len appends."""
    updated = set_value_by_path(profile, "experiences.0.tasks.2", "Shipped things")
    assert updated["experiences"][0]["tasks"] == ["Built things", "Fixed things", "Shipped things"]


@pytest.mark.unit
def test_set_value_by_path_errors(profile):
    """Test out-of-range indices and traversing scalars."""
    with pytest.raises(InvalidPathError):
        set_value_by_path(profile, "experiences.7.role", "x")
    with pytest.raises(InvalidPathError):
        set_value_by_path(profile, "skills.0.name", "x")
    with pytest.raises(InvalidPathError):
        set_value_by_path(profile, "personal.firstName.given", "x")
    assert profile["personal"]["firstName"] == "Ada"
    assert profile["skills"] == ["Python"]


@pytest.mark.unit
def test_set_value_by_path_fills_none_intermediates():
    """Test that a None along the path becomes a container."""
    assert set_value_by_path({"personal": None}, "personal.firstName", "Ada") == {"personal": {"firstName": "Ada"}}
    assert set_value_by_path({"tags": [None]}, "tags.0.name", "x") == {"tags": [{"name": "x"}]}


@pytest.mark.unit
def test_batch_update(profile):
    updated = batch_update(profile, {"personal.firstName": "Grace", "summary": "Hello"})
    assert updated["personal"]["firstName"] == "Grace"
    assert updated["summary"] == "Hello"
    assert "summary" not in profile


@pytest.mark.unit
def test_insert_array_item(profile):
    """Test insertion at an index, append, and list creation."""
    assert insert_array_item(profile, "skills", "Rust", 0)["skills"] == ["Rust", "Python"]
    assert insert_array_item(profile, "skills", "Rust")["skills"] == ["Python", "Rust"]
    assert insert_array_item(profile, "skills", "Rust", 99)["skills"] == ["Python", "Rust"]
    assert insert_array_item(profile, "languages", {"name": "French"})["languages"] == [{"name": "French"}]
    assert profile["skills"] == ["Python"]


@pytest.mark.unit
def test_remove_array_item(profile):
    assert remove_array_item(profile, "experiences.0.tasks", 0)["experiences"][0]["tasks"] == ["Fixed things"]
    assert remove_array_item(profile, "skills", 3) == profile


@pytest.mark.unit
def test_array_items_by_id(profile):
    """Test id-addressed remove and update."""
    removed = remove_array_item_by_id(profile, "experiences", "exp-1")
    assert [entry["id"] for entry in removed["experiences"]] == ["exp-2"]
    assert remove_array_item_by_id(profile, "experiences", "exp-9") == profile

    updated = update_array_item_by_id(profile, "experiences", "exp-2", {"role": "Engineer II"})
    assert updated["experiences"][1] == {"id": "exp-2", "role": "Engineer II", "tasks": []}
    assert profile["experiences"][1]["role"] == "Intern"
