"""Unit tests for stored document loading, migration and saving."""

import pytest

from vellum.contexts.content.exceptions import DocumentLoadError
from vellum.contexts.content.persistence import (
    CURRENT_VERSION,
    load_document,
    migrate_stored_state,
    save_document,
    split_document,
)
from vellum.contexts.theming.theme_mapper import ThemeConfig


@pytest.mark.unit
def test_current_version_document_is_unchanged(sample_document):
    """Test that a version-2 document keeps its ids, order and design."""
    migrated = migrate_stored_state(sample_document)

    assert migrated["version"] == CURRENT_VERSION
    assert migrated["section_order"] == sample_document["section_order"]
    assert [entry["id"] for entry in migrated["profile"]["experiences"]] == ["exp-acme", "exp-globex"]
    assert migrated["design"] == ThemeConfig.from_dict(sample_document["design"]).to_dict()


@pytest.mark.unit
def test_legacy_document_is_migrated(legacy_document_path):
    """Test the version-1 upgrade: ids, language records, order and accent color."""
    document = load_document(legacy_document_path)
    profile = document["profile"]

    assert document["version"] == CURRENT_VERSION
    assert all(entry["id"].startswith("exp-") for entry in profile["experiences"])
    assert profile["educations"][0]["id"].startswith("edu-")
    assert profile["languages"][0]["name"] == "French"
    assert profile["languages"][1]["id"].startswith("lang-")
    assert document["section_order"] == ["experience", "summary", "skills", "education", "languages"]
    assert document["design"]["accentColor"] == "#b91c1c"


@pytest.mark.unit
def test_bare_profile_is_version_zero():
    """Test wrapping a profile stored without any envelope."""
    migrated = migrate_stored_state({"summary": "Hello", "skills": ["Go"]})

    assert migrated["profile"]["summary"] == "Hello"
    assert migrated["profile"]["experiences"] == []
    assert migrated["profile"]["personal"]["contact"]["email"] == ""
    assert migrated["section_order"] == ["summary", "experience", "education", "skills", "languages"]
    assert migrated["design"] == ThemeConfig().to_dict()


@pytest.mark.unit
def test_migration_does_not_modify_input():
    raw = {"experiences": [{"role": "Engineer"}]}
    migrate_stored_state(raw)
    assert raw == {"experiences": [{"role": "Engineer"}]}


@pytest.mark.unit
def test_duplicate_ids_are_reassigned():
    """Test that the second entry sharing an id gets a new one."""
    raw = {
        "version": 2,
        "profile": {"experiences": [{"id": "exp-1", "role": "A"}, {"id": "exp-1", "role": "B"}]},
    }
    ids = [entry["id"] for entry in migrate_stored_state(raw)["profile"]["experiences"]]

    assert ids[0] == "exp-1"
    assert ids[1] != "exp-1"
    assert len(set(ids)) == 2


@pytest.mark.unit
@pytest.mark.parametrize("raw", [[1, 2, 3], "profile", None, {"version": 3, "profile": {}}, {"version": "two"}])
def test_unloadable_documents_raise(raw):
    """Test non-mappings, future versions and bad version values."""
    with pytest.raises(DocumentLoadError):
        migrate_stored_state(raw)


@pytest.mark.unit
def test_missing_file_raises(tmp_path):
    with pytest.raises(DocumentLoadError) as exc_info:
        load_document(tmp_path / "missing.yaml")
    assert exc_info.value.document_path == tmp_path / "missing.yaml"


@pytest.mark.unit
def test_save_and_load(tmp_path, sample_document_path):
    """Test that a saved document loads back to the same state."""
    document = load_document(sample_document_path)
    output = save_document(document, tmp_path / "nested" / "cv.yaml")

    assert output.exists()
    assert not output.read_text().endswith("\n\n")
    assert load_document(output) == document


@pytest.mark.unit
def test_split_document(sample_document_path):
    profile, order, theme = split_document(load_document(sample_document_path))

    assert profile["personal"]["firstName"] == "Ada"
    assert order[0] == "summary"
    assert isinstance(theme, ThemeConfig)


@pytest.mark.unit
@pytest.mark.parametrize(
    "languages, expected",
    [
        ("French", ["French"]),
        ("  ", []),
        (42, []),
        (None, []),
    ],
)
def test_languages_that_are_not_a_list(languages, expected):
    """Test that a single language string becomes one record instead of one per character."""
    profile = migrate_stored_state({"languages": languages})["profile"]

    assert [language["name"] for language in profile["languages"]] == expected
    assert all(language["id"].startswith("lang-") for language in profile["languages"])
    assert all(language["level"] == "" for language in profile["languages"])
