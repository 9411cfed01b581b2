"""
Theme Preset Resolution

Applies named presets to a stored design block. Presets are composable and can
override each other, allowing flexible combination of style, colors and paper.

Examples:
    # Apply multiple presets (later overrides earlier)
    >>> apply_presets(design, ["style_classic", "colors_ocean"])

    # Compact spacing on top of the minimal style, on Letter paper
    >>> apply_presets(design, ["style_minimal", "style_compact", "paper_letter"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_THEME_PRESETS_PATH = Path(__file__).resolve().parents[2] / "configs" / "theme_presets.yaml"
THEME_PRESETS_PATH = Path(os.getenv("VELLUM_THEME_PRESETS_PATH", str(DEFAULT_THEME_PRESETS_PATH)))


def load_theme_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load theme_presets.yaml and flatten to single-level dict.

    Collapses nested structure: style.compact -> style_compact

    Args:
        config_path: Optional path to config file (defaults to VELLUM_THEME_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to design overrides
        Example: {"style_compact": {...}, "colors_ocean": {...}}
    """
    if config_path is None:
        config_path = THEME_PRESETS_PATH

    nested = load_preset_categories(config_path)

    # Flatten: category.name -> category_name
    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def load_preset_categories(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """Load the presets file keeping its category nesting."""
    if config_path is None:
        config_path = THEME_PRESETS_PATH
    return OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)


def apply_presets(
    design: Dict[str, Any],
    preset_names: List[str],
    config_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Apply named presets to a stored design block.

    Presets are applied in order, with later presets overriding earlier ones.
    The input dict is not modified.

    Args:
        design: Stored design block (camelCase keys)
        preset_names: Preset names to apply (e.g., ["style_compact", "colors_ocean"])
        config_path: Optional path to theme_presets.yaml

    Returns:
        New design dict with presets applied

    Raises:
        ValueError: If a preset is not found
    """
    presets_dict = load_theme_presets(config_path)

    result = dict(design)
    for preset_name in preset_names:
        if preset_name not in presets_dict:
            available = sorted(presets_dict.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")

        result.update(presets_dict[preset_name])

    return result
