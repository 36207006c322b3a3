"""Command-line interface for Cascade."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .config import CascadeConfig, discover_config
from .exceptions import CascadeError
from .logger import setup_logger
from .models import DependencyType
from .service import ScheduleService
from .store import YamlProjectStore

app = typer.Typer(
    name="cascade",
    help="Cascade - dependency-driven schedule recalculation for Waterfall and Hybrid projects",
    add_completion=False,
)

FileArgument = Annotated[Path, typer.Argument(help="Path to the project YAML file")]
ProjectOption = Annotated[
    str | None,
    typer.Option("--project", "-p", help="Project ID (default: config default_project)"),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: cascade_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for cascade commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _load(file: Path, *, dry_run: bool = False) -> tuple[CascadeConfig, ScheduleService]:
    try:
        config = discover_config(file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    if dry_run:
        config.engine.dry_run = True
    store = YamlProjectStore(file)
    return (config, ScheduleService(store, config.engine))


def _resolve_project(project: str | None, config: CascadeConfig) -> str:
    project_id = project or config.default_project
    if not project_id:
        typer.echo("Error: --project is required (no default_project configured)", err=True)
        raise typer.Exit(1)
    return project_id


def _parse_date(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        typer.echo(f"Error: Invalid {option} '{value}'. Use YYYY-MM-DD format.", err=True)
        raise typer.Exit(1) from e


@app.command()
def recalculate(
    file: FileArgument = Path("project.yaml"),
    *,
    project: ProjectOption = None,
    today: Annotated[
        str | None,
        typer.Option("--today", help="Reference date for root tasks (YYYY-MM-DD, default: today)"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show changes without writing the file")
    ] = False,
) -> None:
    """Recalculate task dates from dependencies and constraints."""
    reference_date = _parse_date(today, "--today")
    try:
        config, service = _load(file, dry_run=dry_run)
        project_id = _resolve_project(project, config)
        result = service.recalculate_schedule(project_id, reference_date)
    except CascadeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if dry_run:
        for update in result.updates:
            typer.echo(f"{update.task_id}\t{update.start_date}\t{update.end_date}")
        typer.echo(
            f"Would update {len(result.updates)} of {result.total_count} tasks "
            f"({result.ordered_count} ordered)"
        )
    else:
        typer.echo(
            f"Updated {result.updated_count} of {result.total_count} tasks "
            f"({result.ordered_count} ordered)"
        )

    if result.skipped_task_ids:
        typer.echo(
            f"Could not schedule {len(result.skipped_task_ids)} tasks: "
            f"{', '.join(result.skipped_task_ids)}",
            err=True,
        )


@app.command()
def baseline(
    file: FileArgument = Path("project.yaml"),
    *,
    project: ProjectOption = None,
) -> None:
    """Save current dates as the project baseline."""
    try:
        config, service = _load(file)
        project_id = _resolve_project(project, config)
        saved = service.save_baseline(project_id)
    except CascadeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"Saved baseline for {saved} tasks")


@app.command()
def link(
    predecessor: Annotated[str, typer.Argument(help="Task that must come first")],
    successor: Annotated[str, typer.Argument(help="Task that depends on it")],
    file: Annotated[
        Path, typer.Option("--file", "-f", help="Path to the project YAML file")
    ] = Path("project.yaml"),
    *,
    dep_type: Annotated[
        DependencyType, typer.Option("--type", "-t", help="Dependency type")
    ] = DependencyType.FS,
    lag: Annotated[int, typer.Option("--lag", help="Lag in days (negative for lead)")] = 0,
) -> None:
    """Add a dependency between two tasks."""
    try:
        _, service = _load(file)
        created = service.create_dependency(predecessor, successor, dep_type.value, lag)
    except CascadeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"{successor} now depends on {created}")


@app.command()
def show(
    file: FileArgument = Path("project.yaml"),
    *,
    project: ProjectOption = None,
) -> None:
    """Print the project's tasks with their current dates."""
    try:
        config, service = _load(file)
        project_id = _resolve_project(project, config)
        found = service.store.get_project(project_id)
    except CascadeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if found is None:
        typer.echo(f"Error: Project not found: {project_id}", err=True)
        raise typer.Exit(1)

    typer.echo("id\tstart\tend\tduration\tdepends_on")
    for task in found.active_tasks():
        start = task.start_date.isoformat() if task.start_date else "-"
        end = task.end_date.isoformat() if task.end_date else "-"
        deps = ", ".join(str(dep) for dep in task.predecessors)
        duration = "milestone" if task.is_milestone and task.duration == 0 else f"{task.duration}d"
        typer.echo(f"{task.id}\t{start}\t{end}\t{duration}\t{deps}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
