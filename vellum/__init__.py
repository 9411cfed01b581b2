"""
VELLUM - Visual Editing Layout for Linked, Uniform Markup

A deterministic layout and pagination engine for résumé documents. The same pure
computation feeds both the click-to-edit overlay and the print pipeline, so the two
never disagree about where a field sits on the page.

Architecture:
- Content Context: Content tree, section order normalization, path updates, persistence
- Theming Context: Theme configuration, presets, resolution and validation
- Layout Context: Units, height estimation, pagination, frame calculation, diagnostics
- Overlay Context: Editable field zone catalog for the interactive surface
"""

__version__ = "0.1.0"
