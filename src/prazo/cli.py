"""Command-line interface for prazo."""

from __future__ import annotations

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from .backends import JsonBackend, TextBackend
from .config import PrazoConfig, discover_config
from .exceptions import PrazoError
from .loader import Workspace, load_workspace
from .logger import setup_logger
from .pipeline import eligible_projects
from .timeline import build_timeline

app = typer.Typer(
    name="prazo",
    help="Project timeline layout - bars, deadlines and checkpoints on a day grid",
    add_completion=False,
)


class OutputFormat(str, Enum):
    """Output formats for the timeline command."""

    TEXT = "text"
    JSON = "json"


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=summary, 2=placement decisions, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: prazo_config.yaml next to the workspace)",
        ),
    ] = None,
) -> None:
    """Global options for prazo commands."""
    setup_logger(verbose)
    ctx.obj = config


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD CLI option, exiting with an error on bad input."""
    if date_str is None:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid date format '{date_str}' for --{option_name}. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _load(ctx: typer.Context, file: Path) -> tuple[Workspace, PrazoConfig]:
    """Load the workspace and its config, reporting failures as CLI errors."""
    try:
        workspace = load_workspace(file)
        config = discover_config(file, ctx.obj)
    except PrazoError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: Invalid config: {e}", err=True)
        raise typer.Exit(1) from None
    return workspace, config


@app.command()
def timeline(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the workspace YAML/JSON file")] = Path(
        "workspace.yaml"
    ),
    *,
    today: Annotated[
        str | None,
        typer.Option("--today", "-t", help="Reference date (YYYY-MM-DD). Defaults to today"),
    ] = None,
    category: Annotated[
        list[str] | None,
        typer.Option(
            "--category",
            "-k",
            help="Show only projects whose primary category matches (repeatable)",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Lay out the project timeline and print it."""
    reference_day = _parse_date_option(today, "today")
    workspace, config = _load(ctx, file)

    view = build_timeline(
        workspace.projects,
        workspace.categories,
        workspace.stages,
        selected_categories=category,
        now=reference_day,
        config=config,
    )

    if output_format is OutputFormat.JSON:
        rendered = JsonBackend().render(view)
    else:
        rendered = TextBackend(config.render).render(view)

    if output:
        if not rendered.endswith("\n"):
            rendered += "\n"
        output.write_text(rendered, encoding="utf-8")
        typer.echo(f"Timeline written to {output}")
    else:
        typer.echo(rendered)


@app.command()
def validate(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the workspace YAML/JSON file")] = Path(
        "workspace.yaml"
    ),
) -> None:
    """Check a workspace file and report how many projects reach the timeline."""
    workspace, _ = _load(ctx, file)
    eligible = eligible_projects(workspace.projects, workspace.categories)
    typer.echo(
        f"{file}: {len(workspace.projects)} projects, {len(workspace.categories)} categories, "
        f"{len(workspace.stages)} stages"
    )
    typer.echo(f"{len(eligible)} projects eligible for the timeline")


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    main()
