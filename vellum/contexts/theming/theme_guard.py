"""
Theme validation.

Detects theme/content combinations that will break the page before anything is
rendered: a sidebar too narrow or too wide, a main column too narrow to read, a
photo wider than the sidebar, and content-aware warnings (long summary, many
experiences, long task lists).

Errors carry an optional fix (design keys to override); `auto_fix_config`
applies them to a ThemeConfig.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.layout.units import px_to_pt
from vellum.contexts.theming.theme_mapper import ResolvedTheme, ThemeConfig, resolve_theme

LIMITS = {
    "min_sidebar_ratio": 0.15,
    "max_sidebar_ratio": 0.45,
    "min_main_width_pt": 200,
    "small_font_scale": 0.8,
    "large_font_scale": 1.2,
    "critical_summary_length": 800,
    "max_experiences_before_warning": 5,
    "max_tasks_per_experience": 6,
}


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    SIDEBAR_TOO_NARROW = "Sidebar ratio {ratio:.0%} is too narrow. Minimum: {limit:.0%}"
    SIDEBAR_TOO_WIDE = "Sidebar ratio {ratio:.0%} is too wide. Maximum: {limit:.0%}"
    MAIN_CONTENT_TOO_NARROW = "Main content width ({width:.0f}pt) is too narrow for readable text"
    PHOTO_TOO_LARGE = "Photo size ({photo:.0f}pt) doesn't fit in sidebar ({sidebar:.0f}pt)"
    FONT_TOO_SMALL = "Font scale {scale:.0%} may be too small to read"
    FONT_TOO_LARGE = "Font scale {scale:.0%} may cause overflow"
    SUMMARY_TOO_LONG = "Summary ({length} chars) with current font size may overflow"
    TOO_MANY_EXPERIENCES = "{count} experiences may require multiple pages"
    TOO_MANY_TASKS = "Experience {position} has {count} tasks (max recommended: {limit})"


@dataclass(frozen=True)
class ThemeIssue:
    """
    One validation finding.

    Attributes:
        code: Stable identifier (e.g., "PHOTO_TOO_LARGE")
        message: Human-readable description
        field: Config or content field the issue is about
        fix: Design keys (camelCase) that resolve the issue, if known
    """

    code: str
    message: str
    field: str
    fix: Optional[Dict[str, Any]] = None


@dataclass
class ThemeValidation:
    errors: List[ThemeIssue] = field(default_factory=list)
    warnings: List[ThemeIssue] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.errors + self.warnings]


def validate_theme(theme: ResolvedTheme, content: Optional[ContentTree] = None) -> ThemeValidation:
    """
    Validate a resolved theme, optionally against document content.

    Args:
        theme: Resolved theme to check
        content: Optional content tree for content-aware warnings

    Returns:
        ThemeValidation; `is_valid` is False when any error was found
    """
    result = ThemeValidation()

    # Geometry
    ratio = theme.sidebar_ratio
    if theme.has_sidebar and ratio < LIMITS["min_sidebar_ratio"]:
        result.errors.append(
            ThemeIssue(
                code="SIDEBAR_TOO_NARROW",
                message=IssueTemplates.SIDEBAR_TOO_NARROW.format(ratio=ratio, limit=LIMITS["min_sidebar_ratio"]),
                field="sidebarRatio",
                fix={"sidebarRatio": LIMITS["min_sidebar_ratio"]},
            )
        )
    if theme.has_sidebar and ratio > LIMITS["max_sidebar_ratio"]:
        result.errors.append(
            ThemeIssue(
                code="SIDEBAR_TOO_WIDE",
                message=IssueTemplates.SIDEBAR_TOO_WIDE.format(ratio=ratio, limit=LIMITS["max_sidebar_ratio"]),
                field="sidebarRatio",
                fix={"sidebarRatio": LIMITS["max_sidebar_ratio"]},
            )
        )

    main_width_pt = px_to_pt(theme.main_width)
    if main_width_pt < LIMITS["min_main_width_pt"]:
        result.errors.append(
            ThemeIssue(
                code="MAIN_CONTENT_TOO_NARROW",
                message=IssueTemplates.MAIN_CONTENT_TOO_NARROW.format(width=main_width_pt),
                field="sidebarPosition",
                fix={"sidebarPosition": "none"},
            )
        )

    # Photo must fit the sidebar with its padding on both sides
    if theme.has_sidebar and theme.show_photo and theme.photo_size > theme.sidebar_inner_width:
        result.errors.append(
            ThemeIssue(
                code="PHOTO_TOO_LARGE",
                message=IssueTemplates.PHOTO_TOO_LARGE.format(
                    photo=px_to_pt(theme.photo_size), sidebar=px_to_pt(theme.sidebar_width)
                ),
                field="showPhoto",
                fix={"showPhoto": False},
            )
        )

    # Typography
    if theme.font_scale <= LIMITS["small_font_scale"]:
        result.warnings.append(
            ThemeIssue(
                code="FONT_TOO_SMALL",
                message=IssueTemplates.FONT_TOO_SMALL.format(scale=theme.font_scale),
                field="fontSize",
            )
        )
    if theme.font_scale >= LIMITS["large_font_scale"]:
        result.warnings.append(
            ThemeIssue(
                code="FONT_TOO_LARGE",
                message=IssueTemplates.FONT_TOO_LARGE.format(scale=theme.font_scale),
                field="fontSize",
            )
        )

    if content is not None:
        _validate_content(theme, content, result)

    if len(result.warnings) > 2 and not result.suggestions:
        result.suggestions.append('Consider using the "compact" theme preset for dense content.')

    return result


def _validate_content(theme: ResolvedTheme, content: ContentTree, result: ThemeValidation) -> None:
    summary_length = len(content.summary)
    if summary_length > LIMITS["critical_summary_length"] and theme.font_scale >= 1.0:
        result.warnings.append(
            ThemeIssue(
                code="SUMMARY_TOO_LONG",
                message=IssueTemplates.SUMMARY_TOO_LONG.format(length=summary_length),
                field="summary",
            )
        )
        result.suggestions.append("Reduce font scale to 0.9 or shorten summary.")

    experience_count = len(content.experiences)
    if experience_count > LIMITS["max_experiences_before_warning"]:
        result.warnings.append(
            ThemeIssue(
                code="TOO_MANY_EXPERIENCES",
                message=IssueTemplates.TOO_MANY_EXPERIENCES.format(count=experience_count),
                field="experiences",
            )
        )
        result.suggestions.append("Consider using compact spacing or reducing font size.")

    for i, experience in enumerate(content.experiences):
        if len(experience.tasks) > LIMITS["max_tasks_per_experience"]:
            result.warnings.append(
                ThemeIssue(
                    code="TOO_MANY_TASKS",
                    message=IssueTemplates.TOO_MANY_TASKS.format(
                        position=i + 1, count=len(experience.tasks), limit=LIMITS["max_tasks_per_experience"]
                    ),
                    field=f"experiences.{i}.tasks",
                )
            )


def auto_fix_config(config: ThemeConfig, content: Optional[ContentTree] = None) -> ThemeConfig:
    """
    Apply every available error fix to a config.

    Returns the config unchanged when it already validates or no error has a fix.
    """
    validation = validate_theme(resolve_theme(config), content)
    if validation.is_valid:
        return config

    design = config.to_dict()
    for issue in validation.errors:
        if issue.fix:
            design.update(issue.fix)

    return ThemeConfig.from_dict(design)

