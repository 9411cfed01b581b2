"""
Theme Mapper

Translates the small, user-editable design configuration (accent color, font
pairing, font scale, sidebar side, paper format, ...) into a fully resolved
geometry/typography theme.

`resolve_theme` is pure and total: every input field has a default, invalid
values fall back to it, and numeric knobs are clamped. Identical input always
yields an identical (==, hash-equal) ResolvedTheme. Both the overlay and the
print pipeline derive all geometry from this object.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from vellum.contexts.layout.units import PaperFormat, page_height_px, page_width_px, pt_to_px, px_to_pt
from vellum.contexts.theming.defaults import (
    BASE_FONT_SIZES,
    BULLET_CHARS,
    BULLET_STYLES,
    DEFAULT_DESIGN,
    DENSITIES,
    DENSITY_SPACING,
    FONT_PAIRINGS,
    FONT_SCALE_RANGE,
    HEADER_GEOMETRY,
    HEADER_STYLES,
    HEADER_STYLING,
    LINE_HEIGHT_RANGE,
    PHOTO_SIZE,
    SECTION_LINE_STYLES,
    SIDEBAR_PADDING,
    SIDEBAR_POSITIONS,
    SIDEBAR_RATIO_RANGE,
    SIDEBAR_TOP_EXTRA,
)


def _choice(value: Any, allowed: Sequence[str], default: str) -> str:
    if isinstance(value, str) and value.lower() in allowed:
        return value.lower()
    return default


def _number(value: Any, default: Optional[float]) -> Optional[float]:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return default


def _clamp(value: float, bounds: Sequence[float]) -> float:
    low, high = bounds
    return min(max(value, low), high)


@dataclass(frozen=True)
class ThemeConfig:
    """
    Persisted design knobs.

    Values are stored as given (after type coercion); clamping happens in
    `resolve_theme` so the stored configuration round-trips unchanged.
    """

    accent_color: str = DEFAULT_DESIGN["accentColor"]
    font_pairing: str = DEFAULT_DESIGN["fontPairing"]
    font_scale: float = DEFAULT_DESIGN["fontSize"]
    line_height: float = DEFAULT_DESIGN["lineHeight"]
    header_style: str = DEFAULT_DESIGN["headerStyle"]
    density: str = DEFAULT_DESIGN["density"]
    sidebar_position: str = DEFAULT_DESIGN["sidebarPosition"]
    section_line_style: str = DEFAULT_DESIGN["sectionLineStyle"]
    section_line_color: str = DEFAULT_DESIGN["sectionLineColor"]
    bullet_style: str = DEFAULT_DESIGN["bulletStyle"]
    show_photo: bool = DEFAULT_DESIGN["showPhoto"]
    paper_format: PaperFormat = PaperFormat.A4
    # None keeps the header style's own ratio
    sidebar_ratio: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ThemeConfig":
        """
        Build a config from a stored design block (camelCase keys).

        Never raises: missing or invalid entries take their default.
        """
        data = data or {}
        paper = data.get("paperFormat")
        paper_name = paper.upper() if isinstance(paper, str) else None

        accent = data.get("accentColor")
        line_color = data.get("sectionLineColor")
        ratio = data.get("sidebarRatio")

        return cls(
            accent_color=accent if isinstance(accent, str) and accent else DEFAULT_DESIGN["accentColor"],
            font_pairing=_choice(data.get("fontPairing"), FONT_PAIRINGS, DEFAULT_DESIGN["fontPairing"]),
            font_scale=_number(data.get("fontSize"), DEFAULT_DESIGN["fontSize"]),
            line_height=_number(data.get("lineHeight"), DEFAULT_DESIGN["lineHeight"]),
            header_style=_choice(data.get("headerStyle"), HEADER_STYLES, DEFAULT_DESIGN["headerStyle"]),
            density=_choice(data.get("density"), DENSITIES, DEFAULT_DESIGN["density"]),
            sidebar_position=_choice(
                data.get("sidebarPosition"), SIDEBAR_POSITIONS, DEFAULT_DESIGN["sidebarPosition"]
            ),
            section_line_style=_choice(
                data.get("sectionLineStyle"), SECTION_LINE_STYLES, DEFAULT_DESIGN["sectionLineStyle"]
            ),
            section_line_color=(
                line_color if isinstance(line_color, str) and line_color else DEFAULT_DESIGN["sectionLineColor"]
            ),
            bullet_style=_choice(data.get("bulletStyle"), BULLET_STYLES, DEFAULT_DESIGN["bulletStyle"]),
            show_photo=_flag(data.get("showPhoto"), DEFAULT_DESIGN["showPhoto"]),
            paper_format=(
                PaperFormat(paper_name) if paper_name in PaperFormat.__members__ else PaperFormat.A4
            ),
            sidebar_ratio=None if ratio is None else _number(ratio, None),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Stored design block (camelCase keys)."""
        design = {
            "accentColor": self.accent_color,
            "fontPairing": self.font_pairing,
            "fontSize": self.font_scale,
            "lineHeight": self.line_height,
            "headerStyle": self.header_style,
            "density": self.density,
            "sidebarPosition": self.sidebar_position,
            "sectionLineStyle": self.section_line_style,
            "sectionLineColor": self.section_line_color,
            "bulletStyle": self.bullet_style,
            "showPhoto": self.show_photo,
            "paperFormat": getattr(self.paper_format, "value", self.paper_format),
        }
        if self.sidebar_ratio is not None:
            design["sidebarRatio"] = self.sidebar_ratio
        return design


@dataclass(frozen=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class FontSizes:
    """Resolved font sizes in points (base size x font scale)."""

    sidebar_name: float
    sidebar_title: float
    sidebar_section_title: float
    sidebar_text: float
    section_title: float
    body: float
    small: float

    @property
    def heading(self) -> float:
        return self.section_title


@dataclass(frozen=True)
class Spacing:
    """Vertical rhythm in device units."""

    photo_margin_bottom: float
    section_margin_bottom: float
    section_title_margin_bottom: float
    exp_item_margin_bottom: float
    edu_item_margin_bottom: float
    sidebar_section_margin_bottom: float


@dataclass(frozen=True)
class ResolvedTheme:
    """
    Fully resolved geometry and typography.

    Lengths are in device units except `font_sizes` (points). Derived, never
    persisted: a pure function of ThemeConfig.
    """

    paper: PaperFormat
    page_width: float
    page_height: float
    margins: Margins
    sidebar_side: str  # "left", "right" or "none"
    sidebar_width: float
    sidebar_ratio: float  # 0.0 without a sidebar
    sidebar_x: float
    sidebar_gap: float
    sidebar_padding: float
    sidebar_padding_top: float
    main_x: float
    main_width: float
    font_family: str
    font_scale: float
    line_height: float
    font_sizes: FontSizes
    spacing: Spacing
    accent_color: str
    line_color: str
    line_width: float
    line_style: str
    bullet_char: str
    header_style: str
    show_photo: bool
    photo_size: float
    photo_radius: float

    @property
    def has_sidebar(self) -> bool:
        return self.sidebar_side != "none"

    def font_px(self, name: str) -> float:
        """A resolved font size converted to device units."""
        return pt_to_px(getattr(self.font_sizes, name))

    @property
    def sidebar_inner_x(self) -> float:
        return self.sidebar_x + self.sidebar_padding

    @property
    def sidebar_inner_width(self) -> float:
        return max(0.0, self.sidebar_width - 2 * self.sidebar_padding)


def resolve_theme(config: Optional[ThemeConfig] = None) -> ResolvedTheme:
    """
    Resolve a design configuration into a complete theme.

    Args:
        config: Persisted design knobs (defaults used when None)

    Returns:
        ResolvedTheme with every geometry value computed
    """
    # Round-trip through the stored form so hand-built configs get the same
    # coercion and fallbacks as loaded ones
    config = ThemeConfig.from_dict((config or ThemeConfig()).to_dict())

    paper = PaperFormat(config.paper_format)
    page_width = page_width_px(paper)
    page_height = page_height_px(paper)

    geometry = HEADER_GEOMETRY[config.header_style]
    styling = HEADER_STYLING[config.header_style]
    density = DENSITY_SPACING[config.density]

    margin = pt_to_px(geometry["margin"])
    margins = Margins(top=margin, right=margin, bottom=margin, left=margin)

    sidebar_side = config.sidebar_position
    if sidebar_side == "none":
        sidebar_ratio = 0.0
        sidebar_width = 0.0
        sidebar_gap = 0.0
        sidebar_x = 0.0
        main_x = margins.left
        main_width = page_width - margins.left - margins.right
    else:
        if config.sidebar_ratio is None:
            sidebar_ratio = geometry["sidebar_ratio"]
        else:
            sidebar_ratio = _clamp(config.sidebar_ratio, SIDEBAR_RATIO_RANGE)
        # Rounded in points so the print pipeline gets a whole-point column
        sidebar_width = pt_to_px(round(px_to_pt(page_width) * sidebar_ratio))
        sidebar_gap = pt_to_px(geometry["sidebar_gap"])
        if sidebar_side == "left":
            sidebar_x = 0.0
            main_x = sidebar_width + sidebar_gap
            main_width = page_width - sidebar_width - sidebar_gap - margins.right
        else:
            sidebar_x = page_width - sidebar_width
            main_x = margins.left
            main_width = page_width - sidebar_width - sidebar_gap - margins.left

    font_scale = _clamp(config.font_scale, FONT_SCALE_RANGE)
    line_height = _clamp(config.line_height, LINE_HEIGHT_RANGE)
    font_sizes = FontSizes(**{name: size * font_scale for name, size in BASE_FONT_SIZES.items()})

    spacing = Spacing(**{name: pt_to_px(value) for name, value in density.items()})

    line_color = config.accent_color if config.section_line_color == "accent" else config.section_line_color
    line_style = "none" if config.header_style == "minimal" else config.section_line_style

    return ResolvedTheme(
        paper=paper,
        page_width=page_width,
        page_height=page_height,
        margins=margins,
        sidebar_side=sidebar_side,
        sidebar_width=sidebar_width,
        sidebar_ratio=sidebar_ratio,
        sidebar_x=sidebar_x,
        sidebar_gap=sidebar_gap,
        sidebar_padding=pt_to_px(SIDEBAR_PADDING),
        sidebar_padding_top=pt_to_px(SIDEBAR_PADDING + SIDEBAR_TOP_EXTRA),
        main_x=main_x,
        main_width=main_width,
        font_family=config.font_pairing,
        font_scale=font_scale,
        line_height=line_height,
        font_sizes=font_sizes,
        spacing=spacing,
        accent_color=config.accent_color,
        line_color=line_color,
        line_width=styling["line_width"],
        line_style=line_style,
        bullet_char=BULLET_CHARS[config.bullet_style],
        header_style=config.header_style,
        show_photo=config.show_photo,
        photo_size=pt_to_px(PHOTO_SIZE),
        photo_radius=pt_to_px(styling["photo_radius"]),
    )
