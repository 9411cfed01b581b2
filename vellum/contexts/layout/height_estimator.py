"""
Section height estimation.

Heights are heuristic estimates in device units, not measurements. Both the
on-screen overlay and the print pipeline plan against the same estimate, which
is what keeps them aligned; accuracy against the final rendering is secondary.

Two granularities:
- `CostFunction.estimate(section_kind, content)`: coarse per-section total used
  by the paginator.
- `estimate_text_height(...)`: per-field estimate used by the layout calculator
  for individual lines (roles, task bullets, summary paragraph).

`CostFunction` is the seam for swapping in a metric-accurate measurer later
without touching the paginator or layout calculator.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

from vellum.contexts.content.content_tree import SECTION_KINDS, ContentTree
from vellum.contexts.layout.exceptions import LayoutInvariantError

# Average glyph width as a fraction of font size (Helvetica/Arial-like fonts)
GLYPH_WIDTH_RATIO = 0.5

SECTION_HEADER = 60
SECTION_BOTTOM_MARGIN = 40
SECTION_FRAME = SECTION_HEADER + SECTION_BOTTOM_MARGIN

SUMMARY_CHARS_PER_LINE = 100
SUMMARY_LINE_HEIGHT = 24

EXPERIENCE_ENTRY_HEADER = 80  # role + company + dates
EXPERIENCE_TASK_LINE = 24
EXPERIENCE_GAP = 20

EDUCATION_ROW = 70
LANGUAGE_ROW = 35

SKILLS_PER_ROW = 5
SKILL_ROW = 40


def estimate_text_height(
    text: Optional[str],
    font_size: float,
    width: float,
    line_height: float,
) -> float:
    """
    Estimate the height of wrapped text.

    Args:
        text: Text to wrap (empty or None counts as one line)
        font_size: Font size in device units
        width: Available width in device units
        line_height: Line height multiplier

    Returns:
        Estimated height in device units
    """
    if not text:
        return font_size * line_height

    glyph_width = font_size * GLYPH_WIDTH_RATIO
    chars_per_line = max(1, math.floor(width / glyph_width))
    lines = max(1, math.ceil(len(text) / chars_per_line))

    return lines * font_size * line_height


def estimate_grid_height(item_count: int, items_per_row: int, row_height: float) -> float:
    """Height of items wrapping into rows of `items_per_row`."""
    if item_count <= 0:
        return 0
    return math.ceil(item_count / max(1, items_per_row)) * row_height


class CostFunction(ABC):
    """Interface for per-section height estimation."""

    @abstractmethod
    def estimate(self, section_kind: str, content: ContentTree) -> float:
        """Estimated rendered height of a section in device units (0 if empty)."""


class HeuristicHeightEstimator(CostFunction):
    """
    Default cost function using character-count and fixed per-item heuristics.

    Rules per section kind:
    - summary: ceil(chars / 100) lines of 24
    - experience: per entry 80 + 24 per task + 20 gap
    - education: 70 per entry
    - languages: 35 per entry
    - skills: rows of 5 items, 40 per row

    Every non-empty section adds header (60) and bottom margin (40). Empty
    sections are 0 so the paginator drops them.
    """

    def estimate(self, section_kind: str, content: ContentTree) -> float:
        if section_kind not in SECTION_KINDS:
            raise LayoutInvariantError(
                f"Unknown section kind: {section_kind}",
                invariant="known_section_kind",
                value=section_kind,
            )

        height = self._estimate_body(section_kind, content)
        if height < 0:
            raise LayoutInvariantError(
                f"Negative height estimated for '{section_kind}'",
                invariant="non_negative_height",
                value=height,
            )
        return height

    def _estimate_body(self, section_kind: str, content: ContentTree) -> float:
        if section_kind == "summary":
            if not content.summary:
                return 0
            lines = math.ceil(len(content.summary) / SUMMARY_CHARS_PER_LINE)
            return lines * SUMMARY_LINE_HEIGHT + SECTION_FRAME

        if section_kind == "experience":
            if not content.experiences:
                return 0
            entries = sum(
                EXPERIENCE_ENTRY_HEADER + len(exp.tasks) * EXPERIENCE_TASK_LINE + EXPERIENCE_GAP
                for exp in content.experiences
            )
            return entries + SECTION_FRAME

        if section_kind == "education":
            if not content.educations:
                return 0
            return EDUCATION_ROW * len(content.educations) + SECTION_FRAME

        if section_kind == "languages":
            if not content.languages:
                return 0
            return LANGUAGE_ROW * len(content.languages) + SECTION_FRAME

        # skills
        if not content.skills:
            return 0
        return estimate_grid_height(len(content.skills), SKILLS_PER_ROW, SKILL_ROW) + SECTION_FRAME


DEFAULT_ESTIMATOR = HeuristicHeightEstimator()


def estimate_section_height(
    section_kind: str, content: ContentTree, estimator: Optional[CostFunction] = None
) -> float:
    """Estimate one section's height with the given (or default) cost function."""
    return (estimator or DEFAULT_ESTIMATOR).estimate(section_kind, content)
