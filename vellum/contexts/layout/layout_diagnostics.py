"""
Layout diagnostics.

Checks a computed LayoutGeometry against its page plan and reports problems
the overlay and print pipeline would both show: pages whose estimated content
exceeds the budget, frames that run below the bottom margin, and frames that
spill past the edge of their column.

The hierarchy mirrors the page: DocumentDiagnostics holds one PageDiagnostics
per planned page, each page holds one ColumnDiagnostics per column ("sidebar",
"main"), and each column holds a FieldDiagnostics for every field frame placed
in it. `get_inherited_issues()` collects messages from a level and everything
below it.

Overflow is reported, never corrected: the calculator does not clamp frames.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from vellum.contexts.layout.layout_calculator import Frame, LayoutGeometry
from vellum.contexts.layout.paginator import PagePlan

# Floating-point slack when comparing frame edges
EDGE_TOLERANCE = 1e-6

REGIONS = ("sidebar", "main")


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Page-level
    PAGE_OVER_BUDGET = "Page {page} content ({used:.0f}px) exceeds its height budget"

    # Column-level
    CONTENT_BELOW_MARGIN = "'{region}' on page {page} has content below bottom margin by {amount:.1f}px"

    # Field-level
    FIELD_BELOW_MARGIN = "'{label}' on page {page} ends below the bottom margin"
    FIELD_PAST_COLUMN = "'{label}' on page {page} extends past the '{region}' column edge"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class FieldDiagnostics(Diagnostics):
    """Diagnostics for a single field frame."""

    label: str = ""
    region_name: str = ""
    page: int = 0
    below_margin: bool = False
    past_column_edge: bool = False

    def get_issues(self) -> List[str]:
        issues = []
        if self.below_margin:
            issues.append(IssueTemplates.FIELD_BELOW_MARGIN.format(label=self.label, page=self.page))
        if self.past_column_edge:
            issues.append(
                IssueTemplates.FIELD_PAST_COLUMN.format(label=self.label, page=self.page, region=self.region_name)
            )
        return issues


@dataclass
class ColumnDiagnostics(Diagnostics):
    """Diagnostics for a column on a page."""

    region_name: str = ""
    page: int = 0
    content_bottom: float = 0.0
    bottom_limit: float = 0.0

    @property
    def overflow_amount(self) -> float:
        return max(0.0, self.content_bottom - self.bottom_limit)

    @property
    def content_below_margin(self) -> bool:
        return self.overflow_amount > EDGE_TOLERANCE

    def get_issues(self) -> List[str]:
        issues = []
        if self.content_below_margin:
            issues.append(
                IssueTemplates.CONTENT_BELOW_MARGIN.format(
                    region=self.region_name, page=self.page, amount=self.overflow_amount
                )
            )
        return issues


@dataclass
class PageDiagnostics(Diagnostics):
    """Diagnostics for a single planned page."""

    page_index: int = 0
    used_height: float = 0.0
    is_overflowing: bool = False

    def get_issues(self) -> List[str]:
        issues = []
        if self.is_overflowing:
            issues.append(IssueTemplates.PAGE_OVER_BUDGET.format(page=self.page_index, used=self.used_height))
        return issues

    def column(self, region_name: str) -> Optional[ColumnDiagnostics]:
        for component in self.components:
            if isinstance(component, ColumnDiagnostics) and component.region_name == region_name:
                return component
        return None


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for the entire document."""

    page_count: int = 0

    @property
    def overflowing_pages(self) -> List[int]:
        return [
            page.page_index
            for page in self.components
            if isinstance(page, PageDiagnostics) and not page.is_valid
        ]


# =============================================================================
# Helper Functions
# =============================================================================


def _region_of(layout: LayoutGeometry, frame: Frame) -> str:
    """Column a frame was placed in, by its x position."""
    sidebar = layout.sidebar_column
    if sidebar is not None and sidebar.x - EDGE_TOLERANCE <= frame.x < sidebar.right:
        return "sidebar"
    return "main"


def _column_right(layout: LayoutGeometry, region_name: str) -> float:
    if region_name == "sidebar" and layout.sidebar_column is not None:
        return layout.sidebar_column.right
    return layout.main_column.right


# =============================================================================
# Main Entry Point
# =============================================================================


def diagnose_layout(layout: LayoutGeometry, page_plan: PagePlan) -> DocumentDiagnostics:
    """
    Build the diagnostics hierarchy for a computed layout.

    Args:
        layout: Geometry from compute_layout
        page_plan: The plan the geometry was computed from

    Returns:
        DocumentDiagnostics; `is_valid` is True when nothing overflows
    """
    fields: Dict[Tuple[int, str], List[FieldDiagnostics]] = {}
    for label, frame in layout.iter_frames():
        region_name = _region_of(layout, frame)
        fields.setdefault((frame.page, region_name), []).append(
            FieldDiagnostics(
                label=label,
                region_name=region_name,
                page=frame.page,
                below_margin=frame.bottom > layout.bottom_limit + EDGE_TOLERANCE,
                past_column_edge=frame.right > _column_right(layout, region_name) + EDGE_TOLERANCE,
            )
        )

    regions = REGIONS if layout.sidebar_column is not None else ("main",)
    pages = []
    for descriptor in page_plan.pages:
        columns = []
        for region_name in regions:
            field_diagnostics = fields.get((descriptor.page_index, region_name), [])
            frames_bottom = [
                frame.bottom
                for label, frame in layout.iter_frames()
                if frame.page == descriptor.page_index and _region_of(layout, frame) == region_name
            ]
            columns.append(
                ColumnDiagnostics(
                    components=list(field_diagnostics),
                    region_name=region_name,
                    page=descriptor.page_index,
                    content_bottom=max(frames_bottom, default=0.0),
                    bottom_limit=layout.bottom_limit,
                )
            )
        pages.append(
            PageDiagnostics(
                components=columns,
                page_index=descriptor.page_index,
                used_height=descriptor.used_height,
                is_overflowing=descriptor.is_overflowing,
            )
        )

    return DocumentDiagnostics(
        components=pages,
        page_count=layout.page_count,
    )
