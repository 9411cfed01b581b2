"""
Layout Calculator

Cursor-driven walk over the content tree that assigns an absolute frame to
every addressable field. The walk follows the page plan: each page gets a fresh
main-column cursor (and, in sidebar layouts, a fresh sidebar cursor), and
sections are placed in plan order.

The on-screen overlay and the print pipeline both call `compute_layout` with
the same inputs, so the frames they draw against are identical. Nothing here is
measured from rendered output: heights come from the height estimator.

Column rules:
- Sidebar layouts: the identity block (photo, names, title, contact lines)
  opens the sidebar of page 0; `skills` and `languages` go to the sidebar
  column of whatever page the plan puts them on. Everything else flows in the
  main column.
- Single-column layouts: the identity block opens the main column of page 0
  and every section follows it.

Frames are never rounded and overflow past the bottom margin is not clamped;
`layout_diagnostics` reports it.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from vellum.contexts.content.content_tree import (
    DEFAULT_SECTION_ORDER,
    SECTION_KINDS,
    SIDEBAR_SECTION_KINDS,
    ContentTree,
)
from vellum.contexts.layout.exceptions import LayoutInvariantError
from vellum.contexts.layout.height_estimator import estimate_grid_height, estimate_text_height
from vellum.contexts.layout.paginator import PagePlan, paginate
from vellum.contexts.layout.units import MINI_HEADER_HEIGHT, pt_to_px
from vellum.contexts.theming.theme_mapper import ResolvedTheme

# Identity block gaps (points)
NAME_GAP = 4
TITLE_GAP = 8
CONTACT_GAP = 2
IDENTITY_GAP = 20

# Experience/education rows (points)
DATE_COLUMN_WIDTH = 75
DATE_COLUMN_GAP = 15
MIN_ROLE_HEIGHT = 14
MIN_LINE_HEIGHT = 12
TASK_INDENT = 12
TASK_SPACING = 2

# Summary placeholder (points)
MIN_SUMMARY_HEIGHT = 30

# Skill chips (points)
SKILL_CELL_WIDTH = 80
SKILL_ROW_GAP = 4


@dataclass(frozen=True)
class Frame:
    """
    Absolute rectangle in device units on one page.

    All components must be non-negative; a negative one is a bug in the
    calculator and raises LayoutInvariantError at construction.
    """

    x: float
    y: float
    width: float
    height: float
    page: int = 0

    def __post_init__(self):
        for name in ("x", "y", "width", "height", "page"):
            value = getattr(self, name)
            if value < 0 or (isinstance(value, float) and math.isnan(value)):
                raise LayoutInvariantError(
                    f"Frame component '{name}' must be non-negative",
                    invariant="non_negative_frame",
                    value=(self.x, self.y, self.width, self.height, self.page),
                )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def scaled(self, zoom: float) -> "Frame":
        return Frame(self.x * zoom, self.y * zoom, self.width * zoom, self.height * zoom, self.page)


@dataclass(frozen=True)
class ExperienceFrames:
    entry_id: str
    role: Frame
    dates: Frame
    company: Frame
    tasks: Tuple[Frame, ...] = ()


@dataclass(frozen=True)
class EducationFrames:
    entry_id: str
    degree: Frame
    year: Frame
    school: Frame
    description: Optional[Frame] = None


@dataclass(frozen=True)
class LayoutGeometry:
    """
    Every frame the overlay and print pipeline need.

    Attributes:
        page_width: Physical page width
        page_height: Physical page height
        page_count: Number of pages in the plan the layout followed
        sidebar_column: Sidebar column rectangle (page 0), None in single-column layouts
        main_column: Main column rectangle (page 0)
        bottom_limit: y of the bottom margin; frames below it overflow the page
        photo: Photo frame, None when there is no photo or photos are hidden
        first_name, last_name, title: Identity block frames
        contact: (field name, frame) per visible contact line, in display order
        section_titles: (section kind, frame) per placed section, in placement order
        summary: Summary paragraph (or placeholder), None when summary is not placed
        experiences: Per-entry frames, in document order
        educations: Per-entry frames, in document order
        skills: Aggregate skills block, None when absent or empty
        languages: Aggregate languages block, None when absent or empty
    """

    page_width: float
    page_height: float
    page_count: int
    sidebar_column: Optional[Frame]
    main_column: Frame
    bottom_limit: float
    photo: Optional[Frame]
    first_name: Frame
    last_name: Frame
    title: Frame
    contact: Tuple[Tuple[str, Frame], ...]
    section_titles: Tuple[Tuple[str, Frame], ...]
    summary: Optional[Frame] = None
    experiences: Tuple[ExperienceFrames, ...] = ()
    educations: Tuple[EducationFrames, ...] = ()
    skills: Optional[Frame] = None
    languages: Optional[Frame] = None

    @property
    def placed_sections(self) -> Tuple[str, ...]:
        return tuple(kind for kind, _ in self.section_titles)

    def section_title(self, section_kind: str) -> Optional[Frame]:
        for kind, frame in self.section_titles:
            if kind == section_kind:
                return frame
        return None

    def contact_frame(self, field_name: str) -> Optional[Frame]:
        for name, frame in self.contact:
            if name == field_name:
                return frame
        return None

    def iter_frames(self) -> Iterator[Tuple[str, Frame]]:
        """Yield (label, frame) for every field frame, identity block first."""
        if self.photo is not None:
            yield "photo", self.photo
        yield "first_name", self.first_name
        yield "last_name", self.last_name
        yield "title", self.title
        for name, frame in self.contact:
            yield f"contact:{name}", frame
        for kind, frame in self.section_titles:
            yield f"section_title:{kind}", frame
        if self.summary is not None:
            yield "summary", self.summary
        for exp in self.experiences:
            yield f"experience:{exp.entry_id}:role", exp.role
            yield f"experience:{exp.entry_id}:dates", exp.dates
            yield f"experience:{exp.entry_id}:company", exp.company
            for j, task in enumerate(exp.tasks):
                yield f"experience:{exp.entry_id}:task:{j}", task
        for edu in self.educations:
            yield f"education:{edu.entry_id}:degree", edu.degree
            yield f"education:{edu.entry_id}:year", edu.year
            yield f"education:{edu.entry_id}:school", edu.school
            if edu.description is not None:
                yield f"education:{edu.entry_id}:description", edu.description
        if self.skills is not None:
            yield "skills", self.skills
        if self.languages is not None:
            yield "languages", self.languages


class _Column:
    """A vertical cursor over one column of one page."""

    def __init__(self, x: float, width: float, top: float, page: int):
        self.x = x
        self.width = width
        self.cursor = top
        self.page = page

    def take(self, height: float, x_offset: float = 0.0, width: Optional[float] = None) -> Frame:
        """Frame at the cursor; the cursor advances by its height."""
        frame = self.peek(height, x_offset, width)
        self.cursor += height
        return frame

    def peek(self, height: float, x_offset: float = 0.0, width: Optional[float] = None) -> Frame:
        """Frame at the cursor without advancing."""
        return Frame(
            x=self.x + x_offset,
            y=self.cursor,
            width=self.width - x_offset if width is None else width,
            height=height,
            page=self.page,
        )

    def skip(self, distance: float) -> None:
        self.cursor += distance


class _LayoutWalk:
    """Mutable state of one `compute_layout` call."""

    def __init__(self, theme: ResolvedTheme, content: ContentTree):
        self.theme = theme
        self.content = content
        self.section_titles = []
        self.summary = None
        self.experiences = []
        self.educations = []
        self.skills = None
        self.languages = None

    # -- helpers ------------------------------------------------------------

    def text_height(self, text: str, font: str, width: float, minimum_pt: float = 0.0) -> float:
        height = estimate_text_height(text, self.theme.font_px(font), width, self.theme.line_height)
        return max(pt_to_px(minimum_pt), height)

    def line(self, font: str) -> float:
        return self.theme.font_px(font) * self.theme.line_height

    # -- identity block -----------------------------------------------------

    def place_identity(self, column: _Column):
        theme = self.theme
        personal = self.content.personal

        photo = None
        if personal.has_photo and theme.show_photo:
            size = min(theme.photo_size, column.width)
            photo = column.take(size, x_offset=(column.width - size) / 2, width=size)
            column.skip(theme.spacing.photo_margin_bottom)

        first_name = column.take(self.text_height(personal.first_name, "sidebar_name", column.width))
        last_name = column.take(self.text_height(personal.last_name, "sidebar_name", column.width))
        column.skip(pt_to_px(NAME_GAP))

        title = column.take(self.text_height(personal.title, "sidebar_title", column.width))
        column.skip(pt_to_px(TITLE_GAP))

        contact = []
        for name in personal.contact.visible_fields():
            value = getattr(personal.contact, name)
            contact.append((name, column.take(self.text_height(value, "sidebar_text", column.width))))
            column.skip(pt_to_px(CONTACT_GAP))
        column.skip(pt_to_px(IDENTITY_GAP))

        return photo, first_name, last_name, title, tuple(contact)

    # -- sections -----------------------------------------------------------

    def place_section(self, kind: str, column: _Column, in_sidebar: bool) -> None:
        theme = self.theme
        title_font = "sidebar_section_title" if in_sidebar else "section_title"

        self.section_titles.append((kind, column.take(self.line(title_font))))
        column.skip(theme.spacing.section_title_margin_bottom)

        if kind == "summary":
            self.place_summary(column)
        elif kind == "experience":
            self.place_experiences(column)
        elif kind == "education":
            self.place_educations(column)
        elif kind == "skills":
            self.place_skills(column, "sidebar_text" if in_sidebar else "body")
        elif kind == "languages":
            self.place_languages(column, "sidebar_text" if in_sidebar else "body")
        else:
            raise LayoutInvariantError(f"Unknown section kind '{kind}'", invariant="known_section_kind", value=kind)

        if in_sidebar:
            column.skip(theme.spacing.sidebar_section_margin_bottom)
        else:
            column.skip(theme.spacing.section_margin_bottom)

    def place_summary(self, column: _Column) -> None:
        # Empty summaries still get a placeholder to click
        height = self.text_height(self.content.summary, "body", column.width, MIN_SUMMARY_HEIGHT)
        self.summary = column.take(height)

    def _two_column_row(self, column: _Column, left_text: str, left_font: str, left_min: float,
                        right_text: str) -> Tuple[Frame, Frame]:
        date_width = pt_to_px(DATE_COLUMN_WIDTH)
        left_width = max(0.0, column.width - date_width - pt_to_px(DATE_COLUMN_GAP))
        left_height = self.text_height(left_text, left_font, left_width, left_min)
        right_height = self.text_height(right_text, "small", date_width)

        left = column.peek(left_height, width=left_width)
        right = column.peek(right_height, x_offset=column.width - date_width, width=date_width)
        column.skip(max(left_height, right_height))
        return left, right

    def place_experiences(self, column: _Column) -> None:
        indent = pt_to_px(TASK_INDENT)
        for exp in self.content.experiences:
            role, dates = self._two_column_row(column, exp.role, "body", MIN_ROLE_HEIGHT, exp.dates)
            company = column.take(self.text_height(exp.company, "body", column.width, MIN_LINE_HEIGHT))

            tasks = []
            for task in exp.tasks:
                height = self.text_height(task, "body", column.width - indent, MIN_LINE_HEIGHT)
                tasks.append(column.take(height, x_offset=indent))
                column.skip(pt_to_px(TASK_SPACING))

            column.skip(self.theme.spacing.exp_item_margin_bottom)
            self.experiences.append(
                ExperienceFrames(entry_id=exp.id, role=role, dates=dates, company=company, tasks=tuple(tasks))
            )

    def place_educations(self, column: _Column) -> None:
        for edu in self.content.educations:
            degree, year = self._two_column_row(column, edu.degree, "body", MIN_LINE_HEIGHT, edu.year)
            school = column.take(self.text_height(edu.school, "body", column.width, MIN_LINE_HEIGHT))

            description = None
            if edu.description:
                description = column.take(self.text_height(edu.description, "small", column.width))

            column.skip(self.theme.spacing.edu_item_margin_bottom)
            self.educations.append(
                EducationFrames(entry_id=edu.id, degree=degree, year=year, school=school, description=description)
            )

    def place_skills(self, column: _Column, font: str) -> None:
        if not self.content.skills:
            return
        per_row = max(1, math.floor(column.width / pt_to_px(SKILL_CELL_WIDTH)))
        row_height = self.line(font) + pt_to_px(SKILL_ROW_GAP)
        self.skills = column.take(estimate_grid_height(len(self.content.skills), per_row, row_height))

    def place_languages(self, column: _Column, font: str) -> None:
        if not self.content.languages:
            return
        self.languages = column.take(len(self.content.languages) * self.line(font))


def check_page_plan(page_plan: PagePlan, theme: ResolvedTheme) -> None:
    """
    Fail fast on a plan this theme cannot lay out.

    A plan may omit kinds (zero-height sections are skipped), but every kind it
    lists must be known and listed once, and it must be planned for the
    theme's paper.

    Raises:
        LayoutInvariantError: On an empty plan, out-of-order page indices,
                              unknown or duplicate kinds, or a paper mismatch
    """
    if not page_plan.pages:
        raise LayoutInvariantError("Page plan has no pages", invariant="non_empty_plan", value=page_plan)
    indices = [page.page_index for page in page_plan.pages]
    if indices != list(range(len(indices))):
        raise LayoutInvariantError(
            "Page indices must run 0, 1, 2, ... in order", invariant="page_indices", value=indices
        )

    sequence = page_plan.section_sequence
    unknown = [kind for kind in sequence if kind not in SECTION_KINDS]
    if unknown:
        raise LayoutInvariantError(
            f"Unknown section kinds in page plan: {unknown}",
            invariant="known_section_kind",
            value=sequence,
        )
    if len(set(sequence)) != len(sequence):
        raise LayoutInvariantError(
            "Section listed more than once in page plan",
            invariant="duplicate_free_order",
            value=sequence,
        )
    if page_plan.paper != theme.paper:
        raise LayoutInvariantError(
            f"Page plan is for {page_plan.paper.value} paper, theme is {theme.paper.value}",
            invariant="matching_paper",
            value=page_plan.paper,
        )


def compute_layout(
    theme: ResolvedTheme,
    content: ContentTree,
    page_plan: Optional[PagePlan] = None,
    section_order: Optional[Sequence[str]] = None,
) -> LayoutGeometry:
    """
    Compute the frame of every addressable field.

    Args:
        theme: Resolved theme (all geometry comes from here)
        content: Content tree snapshot
        page_plan: Plan to follow; computed from `section_order` when omitted
        section_order: Order used only when no plan is given (default order if None)

    Returns:
        LayoutGeometry for the whole document

    Raises:
        LayoutInvariantError: On a malformed order or plan, a plan for other
                              paper, or a negative frame
    """
    if page_plan is None:
        order = list(section_order) if section_order is not None else list(DEFAULT_SECTION_ORDER)
        page_plan = paginate(order, content, theme.paper)
    check_page_plan(page_plan, theme)

    walk = _LayoutWalk(theme, content)
    margins = theme.margins

    def main_column(page: int) -> _Column:
        top = margins.top if page == 0 else margins.top + MINI_HEADER_HEIGHT
        return _Column(theme.main_x, theme.main_width, top, page)

    def sidebar_column(page: int) -> _Column:
        top = theme.sidebar_padding_top if page == 0 else margins.top + MINI_HEADER_HEIGHT
        return _Column(theme.sidebar_inner_x, theme.sidebar_inner_width, top, page)

    identity = None
    for descriptor in page_plan.pages:
        page = descriptor.page_index
        main = main_column(page)
        sidebar = sidebar_column(page) if theme.has_sidebar else None

        if page == 0:
            identity = walk.place_identity(sidebar if sidebar is not None else main)

        for kind in descriptor.sections:
            if sidebar is not None and kind in SIDEBAR_SECTION_KINDS:
                walk.place_section(kind, sidebar, in_sidebar=True)
            else:
                walk.place_section(kind, main, in_sidebar=False)

    photo, first_name, last_name, title, contact = identity

    return LayoutGeometry(
        page_width=theme.page_width,
        page_height=theme.page_height,
        page_count=page_plan.page_count,
        sidebar_column=(
            Frame(theme.sidebar_x, 0.0, theme.sidebar_width, theme.page_height) if theme.has_sidebar else None
        ),
        main_column=Frame(theme.main_x, 0.0, theme.main_width, theme.page_height),
        bottom_limit=theme.page_height - margins.bottom,
        photo=photo,
        first_name=first_name,
        last_name=last_name,
        title=title,
        contact=contact,
        section_titles=tuple(walk.section_titles),
        summary=walk.summary,
        experiences=tuple(walk.experiences),
        educations=tuple(walk.educations),
        skills=walk.skills,
        languages=walk.languages,
    )
