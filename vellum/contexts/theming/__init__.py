"""
Theming Context

Responsibilities:
- Holds the persisted design knobs (ThemeConfig) and their defaults
- Resolves a config into complete page geometry and typography
- Applies named presets loaded from YAML
- Validates theme/content combinations before layout

Owns: Theme configuration, presets, resolved themes
Never: Places fields, paginates content
"""

from vellum.contexts.theming.config_resolver import apply_presets, load_theme_presets
from vellum.contexts.theming.theme_guard import auto_fix_config, validate_theme
from vellum.contexts.theming.theme_mapper import ResolvedTheme, ThemeConfig, resolve_theme

__all__ = [
    "ResolvedTheme",
    "ThemeConfig",
    "apply_presets",
    "auto_fix_config",
    "load_theme_presets",
    "resolve_theme",
    "validate_theme",
]
