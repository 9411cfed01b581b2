"""
Layout Engine

Wires the stages together:

    ThemeConfig --resolve_theme--> ResolvedTheme
    (order, content) --paginate--> PagePlan
    (theme, content, plan) --compute_layout--> LayoutGeometry
    (geometry, content) --build_zones--> zones

`compose_document` is the pure pipeline. `LayoutEngine` adds memoization of
the last result (keyed on the frozen inputs) and logging; neither changes the
output.
"""

import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from vellum.contexts.content.content_tree import ContentTree
from vellum.contexts.layout.height_estimator import CostFunction
from vellum.contexts.layout.layout_calculator import LayoutGeometry, compute_layout
from vellum.contexts.layout.layout_diagnostics import DocumentDiagnostics, diagnose_layout
from vellum.contexts.layout.logger import _log_debug, log_layout_result, log_pagination_result
from vellum.contexts.layout.paginator import PagePlan, paginate
from vellum.contexts.overlay.zone_catalog import FieldZone, OverlayPayload, build_zones, scale_zones
from vellum.contexts.theming.theme_mapper import ResolvedTheme, ThemeConfig, resolve_theme


@dataclass(frozen=True)
class ComposedDocument:
    """Everything both renderers need for one (content, order, theme) input."""

    theme: ResolvedTheme
    page_plan: PagePlan
    layout: LayoutGeometry
    zones: Tuple[FieldZone, ...]
    diagnostics: DocumentDiagnostics

    def overlay(self, zoom: float = 1.0) -> OverlayPayload:
        return OverlayPayload(zones=scale_zones(self.zones, zoom), accent_color=self.theme.accent_color, zoom=zoom)


def compose_document(
    content: ContentTree,
    section_order: Sequence[str],
    config: Optional[ThemeConfig] = None,
    estimator: Optional[CostFunction] = None,
    max_pages: Optional[int] = None,
) -> ComposedDocument:
    """
    Run the full pipeline.

    Args:
        content: Content tree snapshot
        section_order: Normalized section order
        config: Theme config (defaults when None)
        estimator: Cost function for pagination (heuristic default)
        max_pages: Optional page cap passed to the paginator

    Returns:
        ComposedDocument

    Raises:
        LayoutInvariantError: On malformed input reaching the core
    """
    theme = resolve_theme(config)
    page_plan = paginate(section_order, content, theme.paper, estimator=estimator, max_pages=max_pages)
    layout = compute_layout(theme, content, page_plan)
    zones = build_zones(layout, content)
    return ComposedDocument(
        theme=theme,
        page_plan=page_plan,
        layout=layout,
        zones=zones,
        diagnostics=diagnose_layout(layout, page_plan),
    )


class LayoutEngine:
    """
    Memoizing, logging front end to `compose_document`.

    Only the most recent result is kept: the editor recomposes after every
    edit, so older inputs are never asked for again.
    """

    def __init__(self, estimator: Optional[CostFunction] = None, max_pages: Optional[int] = None, verbose: bool = False):
        self.estimator = estimator
        self.max_pages = max_pages
        self.verbose = verbose
        self._last_key = None
        self._last_result: Optional[ComposedDocument] = None
        self.compositions = 0

    def compose(
        self,
        content: ContentTree,
        section_order: Sequence[str],
        config: Optional[ThemeConfig] = None,
    ) -> ComposedDocument:
        key = (content, tuple(section_order), config or ThemeConfig())
        if self._last_result is not None and key == self._last_key:
            _log_debug("Inputs unchanged, reusing last layout")
            return self._last_result

        start = time.perf_counter()
        result = compose_document(
            content, section_order, config, estimator=self.estimator, max_pages=self.max_pages
        )
        elapsed = time.perf_counter() - start

        log_pagination_result(result.page_plan)
        log_layout_result(result.layout, result.diagnostics, elapsed, verbose=self.verbose)

        self._last_key = key
        self._last_result = result
        self.compositions += 1
        return result

    def compose_snapshot(self, snapshot) -> ComposedDocument:
        """Compose from a ContentStore snapshot (content, order, theme)."""
        return self.compose(snapshot.content, snapshot.section_order, snapshot.theme)

    def invalidate(self) -> None:
        self._last_key = None
        self._last_result = None
