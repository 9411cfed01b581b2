"""
Default values for VELLUM theme resolution.

Provides the shared tables used by:
- theme_mapper.py (resolve a ThemeConfig into a ResolvedTheme)
- theme_guard.py (validation limits)
- config_resolver.py (presets override the persisted design keys below)

Geometry values are in print points; the mapper converts them to device units.
"""

from typing import Any, Dict

# Persisted design configuration (stored document "design" block)
DEFAULT_DESIGN: Dict[str, Any] = {
    "accentColor": "#3b82f6",
    "fontPairing": "sans",
    "fontSize": 1.0,
    "lineHeight": 1.5,
    "headerStyle": "modern",
    "density": "comfortable",
    "sidebarPosition": "left",
    "sectionLineStyle": "solid",
    "sectionLineColor": "accent",
    "bulletStyle": "disc",
    "showPhoto": True,
    "paperFormat": "A4",
}

FONT_PAIRINGS = ("sans", "serif", "mono")
HEADER_STYLES = ("modern", "classic", "minimal")
DENSITIES = ("compact", "comfortable", "spacious")
SIDEBAR_POSITIONS = ("left", "right", "none")
SECTION_LINE_STYLES = ("solid", "dashed", "dotted", "none", "gradient")
BULLET_STYLES = ("disc", "square", "dash", "arrow", "check", "none")

# Clamp ranges
FONT_SCALE_RANGE = (0.7, 1.3)
LINE_HEIGHT_RANGE = (1.2, 2.0)
# Optional sidebarRatio override; the guard flags values outside 0.15-0.45
SIDEBAR_RATIO_RANGE = (0.1, 0.6)

# Base font sizes in points, before font scale
BASE_FONT_SIZES = {
    "sidebar_name": 14,
    "sidebar_title": 9,
    "sidebar_section_title": 8,
    "sidebar_text": 8,
    "section_title": 11,
    "body": 9,
    "small": 8,
}

# Header style -> geometry (points)
HEADER_GEOMETRY = {
    "modern": {"sidebar_ratio": 0.302, "margin": 40, "sidebar_gap": 40},
    "classic": {"sidebar_ratio": 0.30, "margin": 45, "sidebar_gap": 40},
    "minimal": {"sidebar_ratio": 0.28, "margin": 50, "sidebar_gap": 25},
}

# Header style -> styling (points)
HEADER_STYLING = {
    "modern": {"photo_radius": 35, "line_width": 1.5},
    "classic": {"photo_radius": 4, "line_width": 1.0},
    "minimal": {"photo_radius": 0, "line_width": 0.0},
}

# Density -> vertical rhythm (points)
DENSITY_SPACING = {
    "compact": {
        "photo_margin_bottom": 10,
        "section_margin_bottom": 12,
        "section_title_margin_bottom": 6,
        "exp_item_margin_bottom": 8,
        "edu_item_margin_bottom": 6,
        "sidebar_section_margin_bottom": 10,
    },
    "comfortable": {
        "photo_margin_bottom": 15,
        "section_margin_bottom": 18,
        "section_title_margin_bottom": 10,
        "exp_item_margin_bottom": 12,
        "edu_item_margin_bottom": 10,
        "sidebar_section_margin_bottom": 15,
    },
    "spacious": {
        "photo_margin_bottom": 20,
        "section_margin_bottom": 24,
        "section_title_margin_bottom": 14,
        "exp_item_margin_bottom": 16,
        "edu_item_margin_bottom": 14,
        "sidebar_section_margin_bottom": 20,
    },
}

SIDEBAR_PADDING = 20
SIDEBAR_TOP_EXTRA = 10
PHOTO_SIZE = 70

# Glyphs available in the standard PDF fonts
BULLET_CHARS = {
    "disc": "•",
    "square": "-",
    "dash": "–",
    "arrow": ">",
    "check": "*",
    "none": "",
}


def get_default_design() -> Dict[str, Any]:
    """Fresh copy of the default persisted design block."""
    return DEFAULT_DESIGN.copy()
