"""
IconScope CLI Main Entry Point.

Command-line front end for browsing installed icon themes.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import humanize
from rich.console import Console
from rich.table import Table

from iconscope import __version__
from iconscope.core.config import IconScopeConfig, load_config
from iconscope.core.models import IconView
from iconscope.core.resolver import IconNotFoundError
from iconscope.core.session import IconSession
from iconscope.platform import NullImageProbe

console = Console()


def get_session(ctx: click.Context) -> IconSession:
    """Get or create session from context."""
    if "session" not in ctx.obj:
        config = ctx.obj.get("config") or load_config()
        search_paths = ctx.obj.get("search_paths") or None
        probe = NullImageProbe() if ctx.obj.get("no_measure") else None
        session = IconSession(config=config, search_paths=search_paths, probe=probe)

        if ctx.obj.get("quiet") or ctx.obj.get("json_output"):
            session.load()
        else:
            with console.status("Scanning icon themes..."):
                session.load()
        ctx.obj["session"] = session
    return ctx.obj["session"]


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def dimension_text(width: int, height: int) -> str:
    if width <= 0 or height <= 0:
        return ""
    return f"{width}×{height}"


def bound_text(value: int) -> str:
    return "" if value < 0 else str(value)


@click.group()
@click.version_option(version=__version__, prog_name="IconScope")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--search-path",
    "-p",
    "search_paths",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Icon search path (repeatable, replaces the defaults)",
)
@click.option("--no-measure", is_flag=True, help="Do not load images to measure them")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    search_paths: tuple[Path, ...],
    no_measure: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """
    IconScope - Freedesktop icon theme browser.

    Lists installed icon themes and shows every image a theme provides
    for an icon name, grouped by scale and ordered by size.
    """
    ctx.ensure_object(dict)

    if config:
        ctx.obj["config"] = IconScopeConfig.load(config)
    else:
        ctx.obj["config"] = load_config()

    ctx.obj["search_paths"] = list(search_paths)
    ctx.obj["no_measure"] = no_measure
    ctx.obj["json_output"] = json_output
    ctx.obj["quiet"] = quiet


@cli.command("paths")
@click.pass_context
def list_paths(ctx: click.Context) -> None:
    """Show the icon search paths in lookup order."""
    config: IconScopeConfig = ctx.obj["config"]
    paths = ctx.obj.get("search_paths") or config.resolved_search_paths()

    if ctx.obj.get("json_output"):
        echo_json([{"path": str(p), "exists": p.is_dir()} for p in paths])
        return

    table = Table(title="Icon Search Paths")
    table.add_column("#", style="dim")
    table.add_column("Path", style="cyan")
    table.add_column("Exists", style="green")
    for i, path in enumerate(paths, 1):
        table.add_row(str(i), str(path), "Yes" if path.is_dir() else "")
    console.print(table)


@cli.command("themes")
@click.pass_context
def list_themes(ctx: click.Context) -> None:
    """List discovered icon themes."""
    session = get_session(ctx)

    summary = session.discovery_summary()

    if ctx.obj.get("json_output"):
        echo_json(summary)
        return

    table = Table(title="Icon Themes")
    table.add_column("Name", style="cyan")
    table.add_column("Directory", style="white")
    table.add_column("Roots", style="yellow")
    table.add_column("Sections", style="magenta")
    table.add_column("Icons", style="green")

    for theme in session.themes:
        table.add_row(
            theme.name,
            theme.identifier or "",
            str(len(theme.directories)),
            str(len(theme.index.sections)) if theme.index else "",
            str(len(theme.icon_names)),
        )
    console.print(table)

    problems = len(summary["errors"]) + len(summary["syntax_errors"])
    if problems and not ctx.obj.get("quiet"):
        console.print(f"[yellow]{problems} problem(s) found while scanning; see the log[/yellow]")


@cli.command("icons")
@click.argument("theme")
@click.option("--search", "-s", "search_text", default="", help="Only names containing TEXT")
@click.pass_context
def list_icons(ctx: click.Context, theme: str, search_text: str) -> None:
    """List the icon names THEME provides ("All" for every theme)."""
    session = get_session(ctx)

    try:
        names = session.search(search_text, theme_name=theme)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)

    if ctx.obj.get("json_output"):
        echo_json(names)
        return

    for name in names:
        click.echo(name)
    if not ctx.obj.get("quiet"):
        console.print(f"[dim]{len(names)} icon(s)[/dim]")


@cli.command("owner")
@click.argument("icon")
@click.pass_context
def icon_owner(ctx: click.Context, icon: str) -> None:
    """Show which theme provides ICON in the All view."""
    session = get_session(ctx)

    try:
        theme = session.owner_of(icon)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)

    if ctx.obj.get("json_output"):
        echo_json({"icon": icon, "theme": theme.name, "identifier": theme.identifier})
    else:
        click.echo(theme.name)


def print_icon_view(view: IconView) -> None:
    if view.is_empty:
        console.print("[yellow]No images found[/yellow]")
        return

    for scale in view.scales:
        table = Table(title=f"{view.icon_name} in {view.theme_name} @{scale}x")
        table.add_column("Label", style="cyan")
        table.add_column("Min", style="dim")
        table.add_column("Max", style="dim")
        table.add_column("Context", style="yellow")
        table.add_column("Type", style="magenta")
        table.add_column("Pixels", style="green")
        table.add_column("File Size", style="green")
        table.add_column("Path", style="white")

        for image in view.bucket(scale):
            table.add_row(
                image.label or "",
                bound_text(image.min_size),
                bound_text(image.max_size),
                image.context or "",
                image.type or "",
                dimension_text(image.width, image.height),
                humanize.naturalsize(image.file_size, binary=True),
                image.path,
            )
        console.print(table)
        console.print()


@cli.command("resolve")
@click.argument("theme")
@click.argument("icon")
@click.pass_context
def resolve(ctx: click.Context, theme: str, icon: str) -> None:
    """Show every image THEME provides for ICON ("All" picks the owning theme)."""
    session = get_session(ctx)

    try:
        view = session.select_theme(theme, icon)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)
    except IconNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if view is None:
        console.print(f"[yellow]{theme} has no icons[/yellow]")
    elif ctx.obj.get("json_output"):
        echo_json(view.to_dict())
    else:
        print_icon_view(view)


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
