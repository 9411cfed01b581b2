#!/usr/bin/env python3
"""
Layout Composition CLI

Runs the layout engine over a stored document and reports what the overlay and
print pipeline will see.

Commands:
    plan     - Show the page plan (which sections land on which page)
    zones    - List the editable field zones with their frames
    validate - Check the theme and the computed layout for problems
    presets  - List available theme presets
    apply    - Apply theme presets to a stored document

Examples:\n

    compose_layout.py plan documents/cv.yaml                    # Page plan

    compose_layout.py plan documents/cv.yaml --paper LETTER     # Plan on Letter paper

    compose_layout.py zones documents/cv.yaml --zoom 1.5        # Zones at 150%

    compose_layout.py validate documents/cv.yaml --fix          # Validate and auto-fix theme

    compose_layout.py apply documents/cv.yaml style_compact colors_ocean
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.content.exceptions import DocumentLoadError
from vellum.contexts.content.store import ContentStore
from vellum.contexts.layout.logger import setup_layout_logger
from vellum.contexts.layout.units import PaperFormat
from vellum.contexts.theming.config_resolver import apply_presets, load_preset_categories
from vellum.contexts.theming.theme_guard import auto_fix_config, validate_theme
from vellum.contexts.theming.theme_mapper import resolve_theme
from vellum.engine import LayoutEngine
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("VELLUM_LOGS_PATH", "outs/logs"))


def load_store(document_path: Path) -> ContentStore:
    """Load a stored document or exit with an error."""
    try:
        return ContentStore.from_file(document_path)
    except DocumentLoadError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def start_logging(command: str) -> Path:
    log_dir = LOGS_PATH / f"{command}_{now()}"
    return setup_layout_logger(log_dir)


app = typer.Typer(
    help="Compose page plans and editable field zones from stored résumé documents",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("plan")
def plan_command(
    document: Annotated[
        Path,
        typer.Argument(help="Stored document YAML"),
    ],
    paper: Annotated[
        Optional[str],
        typer.Option(
            "--paper",
            "-p",
            help="Override the document's paper format (A4 or LETTER)",
        ),
    ] = None,
    max_pages: Annotated[
        Optional[int],
        typer.Option(
            "--max-pages",
            help="Force remaining sections onto the last page after this many pages",
            min=1,
        ),
    ] = None,
    log: Annotated[
        bool,
        typer.Option(
            "--log",
            help="Write a session log under VELLUM_LOGS_PATH",
        ),
    ] = False,
):
    """
    Show which sections land on which page.

    Examples:\n

        $ compose_layout.py plan documents/cv.yaml

        $ compose_layout.py plan documents/cv.yaml --paper LETTER --max-pages 2
    """
    store = load_store(document)
    if paper:
        if paper.upper() not in PaperFormat.__members__:
            typer.secho(f"Unknown paper format '{paper}'. Use A4 or LETTER.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        store.update_design({"paperFormat": paper.upper()})
    if log:
        typer.echo(f"Log: {start_logging('plan')}")

    snapshot = store.snapshot()
    result = LayoutEngine(max_pages=max_pages).compose_snapshot(snapshot)

    typer.secho(
        f"\n{document.name}: {result.page_plan.page_count} page(s) on {result.theme.paper.value}",
        fg=typer.colors.BLUE,
        bold=True,
    )
    for page in result.page_plan.pages:
        marker = typer.style(" (overflowing)", fg=typer.colors.YELLOW) if page.is_overflowing else ""
        typer.echo(
            f"  Page {page.page_index + 1} [{page.header_mode.value}]: "
            f"{', '.join(page.sections)} ({page.used_height:.0f}px){marker}"
        )
    typer.echo("")


@app.command("zones")
def zones_command(
    document: Annotated[
        Path,
        typer.Argument(help="Stored document YAML"),
    ],
    zoom: Annotated[
        float,
        typer.Option(
            "--zoom",
            "-z",
            help="Overlay zoom factor",
            min=0.1,
            max=5.0,
        ),
    ] = 1.0,
    page: Annotated[
        Optional[int],
        typer.Option(
            "--page",
            help="Only list zones on this page (1-based)",
            min=1,
        ),
    ] = None,
):
    """
    List editable field zones and their frames.

    Examples:\n

        $ compose_layout.py zones documents/cv.yaml

        $ compose_layout.py zones documents/cv.yaml --zoom 1.5 --page 2
    """
    store = load_store(document)
    result = LayoutEngine().compose_snapshot(store.snapshot())
    overlay = result.overlay(zoom)

    zones = [zone for zone in overlay.zones if page is None or zone.frame.page == page - 1]
    typer.secho(f"\n{len(zones)} zone(s) at zoom {zoom:g}", fg=typer.colors.BLUE, bold=True)
    for zone in zones:
        frame = zone.frame
        typer.echo(
            f"  {zone.zone_id:<40} {zone.kind.value:<9} p{frame.page + 1} "
            f"({frame.x:.1f}, {frame.y:.1f}) {frame.width:.1f}x{frame.height:.1f}  {zone.path}"
        )
    typer.echo("")


@app.command("validate")
def validate_command(
    document: Annotated[
        Path,
        typer.Argument(help="Stored document YAML"),
    ],
    fix: Annotated[
        bool,
        typer.Option(
            "--fix",
            "-f",
            help="Apply available theme fixes and save the document",
        ),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Where to save the fixed document (defaults to overwriting input file)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show suggestions and every layout issue",
        ),
    ] = False,
):
    """
    Validate the theme and the computed layout.

    Exits with code 1 when the theme has errors or the layout overflows.

    Examples:\n

        $ compose_layout.py validate documents/cv.yaml

        $ compose_layout.py validate documents/cv.yaml --fix -o documents/cv_fixed.yaml
    """
    store = load_store(document)
    snapshot = store.snapshot()

    if fix:
        fixed = auto_fix_config(snapshot.theme, snapshot.content)
        if fixed != snapshot.theme:
            store.set_theme(fixed)
            output_path = store.save(output or document)
            typer.secho("✓ Theme fixes applied", fg=typer.colors.GREEN, bold=True)
            typer.echo(f"  Output: {output_path}")
            snapshot = store.snapshot()

    validation = validate_theme(resolve_theme(snapshot.theme), snapshot.content)
    result = LayoutEngine(verbose=verbose).compose_snapshot(snapshot)
    layout_issues = result.diagnostics.get_inherited_issues()

    typer.secho(f"\nValidating: {document.name}", fg=typer.colors.BLUE, bold=True)
    for issue in validation.errors:
        typer.secho(f"  ✗ [{issue.code}] {issue.message}", fg=typer.colors.RED)
    for issue in validation.warnings:
        typer.secho(f"  ! [{issue.code}] {issue.message}", fg=typer.colors.YELLOW)

    issue_limit = len(layout_issues) if verbose else 10
    for issue in layout_issues[:issue_limit]:
        typer.secho(f"  ! {issue}", fg=typer.colors.YELLOW)
    if len(layout_issues) > issue_limit:
        typer.echo(f"  ... and {len(layout_issues) - issue_limit} more")

    if verbose:
        for suggestion in validation.suggestions:
            typer.echo(f"  → {suggestion}")

    is_valid = validation.is_valid and not layout_issues
    if is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
    typer.echo(f"  Page count: {result.page_plan.page_count}")
    typer.echo("")

    raise typer.Exit(code=0 if is_valid else 1)


@app.command("presets")
def presets_command(
    category: Annotated[
        Optional[str],
        typer.Argument(help="Category to filter (e.g., 'style', 'colors')"),
    ] = None,
):
    """
    List available theme presets.

    Examples:\n

        $ compose_layout.py presets            # All categories and presets

        $ compose_layout.py presets colors     # Only color presets
    """
    nested = load_preset_categories()

    if category:
        if category not in nested:
            typer.secho(
                f"Unknown category '{category}'. Available: {', '.join(nested.keys())}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        for name in nested[category]:
            typer.echo(f"{category}_{name}")
    else:
        for cat, presets in nested.items():
            typer.secho(cat, bold=True)
            for name in presets:
                typer.echo(f"  {name}")


@app.command("apply")
def apply_command(
    document: Annotated[
        Path,
        typer.Argument(help="Stored document YAML"),
    ],
    presets: Annotated[
        List[str],
        typer.Argument(help="Preset names to apply (e.g., style_compact colors_ocean)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output path (defaults to overwriting input file)",
        ),
    ] = None,
):
    """
    Apply theme presets to a stored document.

    Presets are applied in order, with later presets overriding earlier ones.

    Examples:\n

        $ compose_layout.py apply documents/cv.yaml style_classic colors_forest
    """
    store = load_store(document)

    typer.echo(f"Applying presets: {', '.join(presets)}")
    try:
        design = apply_presets(store.theme.to_dict(), presets)
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    store.update_design(design)
    output_path = store.save(output or document)

    typer.secho("✓ Presets applied successfully", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output_path}")


if __name__ == "__main__":
    app()
