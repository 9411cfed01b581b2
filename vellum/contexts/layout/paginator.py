"""
Section-level pagination.

Greedily packs sections into fixed-height pages. The first page reserves room
for the full identity header, later pages for a condensed running header; both
subtract the fixed top/bottom margins from the physical page height.

Pagination granularity is the section. A section is never split across two
pages, even when its estimate alone exceeds the page budget: it then sits alone
on its page and that page is flagged `is_overflowing`.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from vellum.contexts.content.content_tree import SECTION_KINDS, ContentTree
from vellum.contexts.layout.exceptions import LayoutInvariantError
from vellum.contexts.layout.height_estimator import CostFunction, estimate_section_height
from vellum.contexts.layout.units import HeaderMode, PaperFormat, available_height


@dataclass(frozen=True)
class PageDescriptor:
    """
    One planned page.

    Attributes:
        page_index: 0-based page index
        sections: Section kinds assigned to this page, in document order
        header_mode: FULL for page 0, MINI for every other page
        used_height: Sum of estimated section heights on this page
        is_overflowing: True when the page content exceeds its budget
    """

    page_index: int
    sections: Tuple[str, ...]
    header_mode: HeaderMode
    used_height: float = 0
    is_overflowing: bool = False


@dataclass(frozen=True)
class PagePlan:
    """Ordered page descriptors plus the paper format they were planned for."""

    pages: Tuple[PageDescriptor, ...]
    paper: PaperFormat = PaperFormat.A4

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def section_sequence(self) -> Tuple[str, ...]:
        """Concatenation of every page's sections, in order."""
        return tuple(kind for page in self.pages for kind in page.sections)

    def page_of(self, section_kind: str) -> Optional[int]:
        """Index of the page holding a section, or None if it was omitted."""
        for page in self.pages:
            if section_kind in page.sections:
                return page.page_index
        return None


def check_section_order(section_order: Sequence[str]) -> None:
    """
    Fail fast on an order the content store should already have normalized.

    Raises:
        LayoutInvariantError: On unknown kinds, duplicates, or missing kinds
    """
    unknown = [kind for kind in section_order if kind not in SECTION_KINDS]
    if unknown:
        raise LayoutInvariantError(
            f"Unknown section kinds in order: {unknown}",
            invariant="known_section_kind",
            value=list(section_order),
        )
    if len(set(section_order)) != len(section_order):
        raise LayoutInvariantError(
            "Duplicate section kinds in order",
            invariant="duplicate_free_order",
            value=list(section_order),
        )
    missing = [kind for kind in SECTION_KINDS if kind not in section_order]
    if missing:
        raise LayoutInvariantError(
            f"Section order is missing kinds: {missing}",
            invariant="complete_order",
            value=list(section_order),
        )


class _PageBuilder:
    """In-progress page: the 'accumulating' state of the paginator."""

    def __init__(self, page_index: int, paper: PaperFormat):
        self.page_index = page_index
        self.header_mode = HeaderMode.FULL if page_index == 0 else HeaderMode.MINI
        self.budget = available_height(paper, self.header_mode)
        self.sections: List[str] = []
        self.height = 0.0
        self.forced = False

    def add(self, section_kind: str, height: float) -> None:
        self.sections.append(section_kind)
        self.height += height

    def fits(self, height: float) -> bool:
        return self.height + height <= self.budget

    def freeze(self) -> PageDescriptor:
        return PageDescriptor(
            page_index=self.page_index,
            sections=tuple(self.sections),
            header_mode=self.header_mode,
            used_height=self.height,
            is_overflowing=self.forced or self.height > self.budget,
        )


def paginate(
    section_order: Sequence[str],
    content: ContentTree,
    paper: PaperFormat = PaperFormat.A4,
    estimator: Optional[CostFunction] = None,
    max_pages: Optional[int] = None,
) -> PagePlan:
    """
    Distribute sections across pages.

    For each section in order: skip it if its estimated height is zero; if it
    does not fit the current page's remaining budget and the page already holds
    a section, flush the page and start the next one (header MINI) with this
    section; otherwise append it to the current page.

    Args:
        section_order: Complete, duplicate-free order of section kinds
        content: Content tree snapshot
        paper: Paper format (selects the physical page height)
        estimator: Cost function (defaults to the heuristic estimator)
        max_pages: Optional page cap; once reached, remaining sections are forced
                   onto the last page, which is then flagged overflowing

    Returns:
        PagePlan with at least one page. An entirely empty document yields one
        FULL page listing the whole input order.

    Raises:
        LayoutInvariantError: If the order is malformed or an estimate is negative
    """
    check_section_order(section_order)
    if max_pages is not None and max_pages < 1:
        raise LayoutInvariantError("max_pages must be at least 1", invariant="max_pages", value=max_pages)

    paper = PaperFormat(paper)
    pages: List[PageDescriptor] = []
    current = _PageBuilder(0, paper)

    for section_kind in section_order:
        height = estimate_section_height(section_kind, content, estimator)
        if height < 0:
            raise LayoutInvariantError(
                f"Negative height estimated for '{section_kind}'",
                invariant="non_negative_height",
                value=height,
            )
        if height == 0:
            continue

        if not current.fits(height) and current.sections:
            at_page_cap = max_pages is not None and len(pages) + 1 >= max_pages
            if at_page_cap:
                current.forced = True
                current.add(section_kind, height)
                continue

            pages.append(current.freeze())
            current = _PageBuilder(len(pages), paper)

        current.add(section_kind, height)

    if current.sections:
        pages.append(current.freeze())

    if not pages:
        pages.append(
            PageDescriptor(
                page_index=0,
                sections=tuple(section_order),
                header_mode=HeaderMode.FULL,
            )
        )

    return PagePlan(pages=tuple(pages), paper=paper)
