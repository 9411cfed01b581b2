"""Unit tests for theme validation."""

from dataclasses import replace

import pytest

from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.layout.units import pt_to_px
from vellum.contexts.theming.theme_guard import auto_fix_config, validate_theme
from vellum.contexts.theming.theme_mapper import ThemeConfig, resolve_theme


@pytest.mark.unit
@pytest.mark.parametrize("style", ["modern", "classic", "minimal"])
@pytest.mark.parametrize("side", ["left", "right", "none"])
def test_builtin_styles_are_valid(style, side):
    """Test that every built-in style/sidebar combination passes."""
    theme = resolve_theme(ThemeConfig.from_dict({"headerStyle": style, "sidebarPosition": side}))
    validation = validate_theme(theme)

    assert validation.is_valid
    assert validation.errors == []


@pytest.mark.unit
def test_photo_wider_than_sidebar_is_an_error():
    """Test photo fit check with a fix that hides the photo."""
    theme = replace(resolve_theme(), sidebar_width=pt_to_px(100))
    validation = validate_theme(theme)

    assert not validation.is_valid
    issue = validation.errors[0]
    assert issue.code == "PHOTO_TOO_LARGE"
    assert issue.fix == {"showPhoto": False}


@pytest.mark.unit
def test_hidden_photo_is_not_checked():
    """Test that a hidden photo never fails the fit check."""
    theme = replace(resolve_theme(), sidebar_width=pt_to_px(100), show_photo=False)
    assert "PHOTO_TOO_LARGE" not in validate_theme(theme).codes


@pytest.mark.unit
def test_sidebar_ratio_limits():
    """Test too-narrow and too-wide sidebarRatio overrides, with fixes back to the limits."""
    narrow = validate_theme(resolve_theme(ThemeConfig.from_dict({"sidebarRatio": 0.1, "showPhoto": False})))
    wide = validate_theme(resolve_theme(ThemeConfig.from_dict({"sidebarRatio": 0.5})))

    assert narrow.codes == ["SIDEBAR_TOO_NARROW"]
    assert narrow.errors[0].fix == {"sidebarRatio": 0.15}
    assert wide.codes == ["SIDEBAR_TOO_WIDE"]
    assert wide.errors[0].fix == {"sidebarRatio": 0.45}


@pytest.mark.unit
def test_sidebar_ratio_is_ignored_without_sidebar():
    """Test that a single-column layout never fails the ratio checks."""
    config = ThemeConfig.from_dict({"sidebarRatio": 0.1, "sidebarPosition": "none"})
    assert validate_theme(resolve_theme(config)).is_valid


@pytest.mark.unit
def test_auto_fix_clamps_sidebar_ratio():
    """Test that auto-fix moves an out-of-range ratio to the nearest limit."""
    fixed = auto_fix_config(ThemeConfig.from_dict({"sidebarRatio": 0.5}))

    assert fixed.sidebar_ratio == 0.45
    assert fixed.sidebar_position == "left"
    assert resolve_theme(fixed).sidebar_ratio == 0.45
    assert validate_theme(resolve_theme(fixed)).is_valid


@pytest.mark.unit
def test_auto_fix_narrow_sidebar_also_hides_photo():
    """Test that every error fix is applied in one pass."""
    config = ThemeConfig.from_dict({"sidebarRatio": 0.1})
    validation = validate_theme(resolve_theme(config))
    assert set(validation.codes) == {"SIDEBAR_TOO_NARROW", "PHOTO_TOO_LARGE"}

    fixed = auto_fix_config(config)

    assert fixed.sidebar_ratio == 0.15
    assert fixed.show_photo is False
    assert validate_theme(resolve_theme(fixed)).is_valid


@pytest.mark.unit
def test_narrow_main_column_suggests_single_column():
    """Test the main column width check."""
    theme = replace(resolve_theme(), main_width=pt_to_px(150))
    validation = validate_theme(theme)

    issue = next(issue for issue in validation.errors if issue.code == "MAIN_CONTENT_TOO_NARROW")
    assert issue.fix == {"sidebarPosition": "none"}


@pytest.mark.unit
def test_font_scale_warnings():
    """Test warnings at the ends of the font scale range."""
    small = validate_theme(resolve_theme(ThemeConfig.from_dict({"fontSize": 0.7})))
    large = validate_theme(resolve_theme(ThemeConfig.from_dict({"fontSize": 1.3})))

    assert small.is_valid and "FONT_TOO_SMALL" in small.codes
    assert large.is_valid and "FONT_TOO_LARGE" in large.codes


@pytest.mark.unit
def test_content_aware_warnings():
    """Test long summary, many experiences and long task lists."""
    content = ContentTree.from_dict(
        {
            "summary": "s" * 900,
            "experiences": [{"id": f"e{i}", "tasks": ["t"] * (8 if i == 2 else 1)} for i in range(6)],
        }
    )
    validation = validate_theme(resolve_theme(), content)

    assert validation.is_valid
    assert "SUMMARY_TOO_LONG" in validation.codes
    assert "TOO_MANY_EXPERIENCES" in validation.codes
    task_issue = next(issue for issue in validation.warnings if issue.code == "TOO_MANY_TASKS")
    assert task_issue.field == "experiences.2.tasks"
    assert validation.suggestions


@pytest.mark.unit
def test_long_summary_with_small_font_is_fine():
    """Test that a reduced font scale silences the summary warning."""
    content = ContentTree.from_dict({"summary": "s" * 900})
    validation = validate_theme(resolve_theme(ThemeConfig.from_dict({"fontSize": 0.9})), content)
    assert "SUMMARY_TOO_LONG" not in validation.codes


@pytest.mark.unit
def test_auto_fix_leaves_valid_config_untouched(sample_content):
    """Test that a valid config is returned as-is."""
    config = ThemeConfig.from_dict({"headerStyle": "classic"})
    assert auto_fix_config(config, sample_content) is config

