"""
Integration tests for the full composition pipeline.
Tests: stored document → store snapshot → page plan → geometry → zones.
"""

import pytest

from vellum.contexts.content.persistence import load_document, split_document
from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.content.store import ContentStore
from vellum.contexts.theming.theme_mapper import ThemeConfig
from vellum.engine import LayoutEngine, compose_document


@pytest.mark.integration
def test_compose_sample_document(sample_document_path):
    """Test composing the sample document end to end."""
    profile, order, theme = split_document(load_document(sample_document_path))
    result = compose_document(ContentTree.from_dict(profile), order, theme)

    assert result.page_plan.page_count == 2
    assert result.page_plan.pages[0].sections == ("summary", "experience", "education")
    assert result.page_plan.pages[1].sections == ("skills", "languages")
    assert result.layout.page_count == 2
    assert result.diagnostics.is_valid
    assert result.theme.accent_color == theme.accent_color


@pytest.mark.integration
def test_composition_is_deterministic(sample_content):
    """Test that identical inputs give identical outputs."""
    order = ["summary", "experience", "education", "skills", "languages"]
    first = compose_document(sample_content, order)
    second = compose_document(sample_content, order)

    assert first.page_plan == second.page_plan
    assert first.layout == second.layout
    assert first.zones == second.zones


@pytest.mark.integration
def test_zones_share_layout_frames(sample_content):
    """Test that the overlay and the print geometry agree exactly."""
    result = compose_document(sample_content, ["summary", "experience", "education", "skills", "languages"])
    frames = dict(result.layout.iter_frames())

    for zone in result.zones:
        assert zone.frame == frames[zone.zone_id]

    overlay = result.overlay(2.0)
    assert overlay.zone("summary").frame.width == pytest.approx(frames["summary"].width * 2)


@pytest.mark.integration
def test_engine_reuses_last_result(sample_content):
    """Test memoization on unchanged inputs."""
    engine = LayoutEngine()
    order = ("summary", "experience", "education", "skills", "languages")

    first = engine.compose(sample_content, order, ThemeConfig())
    second = engine.compose(sample_content, list(order))

    assert second is first
    assert engine.compositions == 1

    engine.invalidate()
    third = engine.compose(sample_content, order)
    assert third is not first
    assert third.layout == first.layout
    assert engine.compositions == 2


@pytest.mark.integration
def test_store_edits_drive_recomposition(sample_document_path):
    """Test the edit loop: store change → snapshot → new layout."""
    store = ContentStore.from_file(sample_document_path)
    engine = LayoutEngine()
    results = []
    store.subscribe(lambda snapshot: results.append(engine.compose_snapshot(snapshot)))

    before = engine.compose_snapshot(store.snapshot())
    store.update_field("experiences.0.tasks.0", "Led the migration. " * 20)

    assert len(results) == 1
    after = results[0]
    assert after is not before
    assert engine.compositions == 2
    task_zone = after.overlay().zone("experience:exp-acme:task:0")
    assert task_zone.frame.height > before.overlay().zone("experience:exp-acme:task:0").frame.height


@pytest.mark.integration
def test_section_move_changes_plan(sample_document_path):
    """Test that moving the skills section first puts it on page 1 in the sidebar."""
    store = ContentStore.from_file(sample_document_path)
    store.move_section(3, 0)

    result = LayoutEngine().compose_snapshot(store.snapshot())

    assert result.page_plan.pages[0].sections[0] == "skills"
    assert result.layout.skills.page == 0
    assert result.layout.skills.x < result.theme.main_x


@pytest.mark.integration
def test_design_change_without_sidebar(sample_document_path):
    """Test that removing the sidebar moves everything into the main column."""
    store = ContentStore.from_file(sample_document_path)
    store.update_design({"sidebarPosition": "none"})

    result = LayoutEngine().compose_snapshot(store.snapshot())

    assert result.layout.sidebar_column is None
    assert result.layout.skills.x == pytest.approx(result.theme.main_x)
    assert result.layout.first_name.x == pytest.approx(result.theme.main_x)
