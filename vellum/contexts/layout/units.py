"""
Unit conversions and page-size constants.

Device units are CSS pixels at 96 DPI. Print points are 1/72 inch. Every
measurement the paginator and layout calculator produce is in device units;
resolved font sizes stay in points and are converted where heights are derived.
"""

from enum import Enum

MM_TO_PX = 3.7795
PT_TO_PX = 96 / 72
MM_TO_PT = 72 / 25.4


class PaperFormat(str, Enum):
    A4 = "A4"
    LETTER = "LETTER"


class HeaderMode(str, Enum):
    FULL = "full"
    MINI = "mini"


# (width, height) in millimeters
PAPER_SIZES_MM = {
    PaperFormat.A4: (210.0, 297.0),
    PaperFormat.LETTER: (215.9, 279.4),
}

# Vertical reservations used by the paginator (device units)
FULL_HEADER_HEIGHT = 180
MINI_HEADER_HEIGHT = 50
PAGE_MARGINS = 60  # top + bottom

HEADER_HEIGHTS = {
    HeaderMode.FULL: FULL_HEADER_HEIGHT,
    HeaderMode.MINI: MINI_HEADER_HEIGHT,
}


def mm_to_px(mm: float) -> float:
    return mm * MM_TO_PX


def px_to_mm(px: float) -> float:
    return px / MM_TO_PX


def pt_to_px(pt: float) -> float:
    return pt * PT_TO_PX


def px_to_pt(px: float) -> float:
    return px / PT_TO_PX


def mm_to_pt(mm: float) -> float:
    return mm * MM_TO_PT


def pt_to_mm(pt: float) -> float:
    return pt / MM_TO_PT


def page_width_px(paper: PaperFormat) -> float:
    """Physical page width in device units."""
    return mm_to_px(PAPER_SIZES_MM[PaperFormat(paper)][0])


def page_height_px(paper: PaperFormat) -> float:
    """Physical page height in device units."""
    return mm_to_px(PAPER_SIZES_MM[PaperFormat(paper)][1])


def available_height(paper: PaperFormat, header_mode: HeaderMode) -> float:
    """
    Height budget for section content on one page.

    The physical page height minus the header reservation for the page's
    header mode and the fixed top/bottom margins.
    """
    return page_height_px(paper) - HEADER_HEIGHTS[HeaderMode(header_mode)] - PAGE_MARGINS
