"""CLI command implementations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Annotated, Literal

import typer

from library_resources.cli import CliContext, app
from library_resources.cli.errors import handle_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from library_resources.engine.manager import ProgressCallback
    from library_resources.engine.types import BatchResult

ResourceName = Annotated[str, typer.Argument(help="Resource name.")]


@contextmanager
def _exit_on_error(cli: CliContext) -> Iterator[None]:
    """Turn any failure inside the block into a stderr message and exit code."""
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=cli.color)) from exc


def _batch_with_progress(
    run: Callable[[ProgressCallback], BatchResult], *, verb: str, color: bool
) -> BatchResult:
    """Run a batch operation behind a Rich spinner, one status line per resource."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn

    console = Console(no_color=not color, stderr=True)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(verb, total=None)

        def on_progress(name: str, event: Literal["start", "done"]) -> None:
            if event == "start":
                progress.update(task, description=f"{name}: {verb}...")
            elif event == "done":
                progress.advance(task)

        return run(on_progress)


def _report_batch(result: BatchResult, *, empty_msg: str, header: str, color: bool) -> None:
    from library_resources.cli.formatting import format_batch, format_batch_summary

    typer.echo(format_batch(result, empty_msg=empty_msg, color=color))
    if result.items:
        typer.echo()
        typer.echo(format_batch_summary(result, header=header, color=color))
    if result.failed:
        raise typer.Exit(1)


@app.command()
def add(
    ctx: typer.Context,
    name: ResourceName,
    url: Annotated[str, typer.Argument(help="Git repository URL.")],
    branch: Annotated[
        str | None,
        typer.Option("--branch", "-b", help="Branch to clone (default: main)."),
    ] = None,
    notes: Annotated[str, typer.Option("--notes", help="Notes about the resource.")] = "",
    project: Annotated[
        bool,
        typer.Option("--project", help="Store in project scope instead of global."),
    ] = False,
) -> None:
    """Clone a repository and register it."""
    from library_resources.cli.formatting import format_added
    from library_resources.config import build_manager
    from library_resources.core.registry import Scope

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        result = build_manager(cli.settings()).add(
            name,
            url,
            branch=branch,
            notes=notes,
            scope=Scope.PROJECT if project else Scope.GLOBAL,
        )
    typer.echo(format_added(result))


@app.command()
def remove(ctx: typer.Context, name: ResourceName) -> None:
    """Remove a resource and its working copy."""
    from library_resources.cli.formatting import format_removed
    from library_resources.config import build_manager

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        resource = build_manager(cli.settings()).remove(name)
    typer.echo(format_removed(resource))


@app.command(name="list")
def list_cmd(ctx: typer.Context) -> None:
    """List all resources (global and project merged)."""
    from library_resources.cli.formatting import format_list
    from library_resources.config import build_manager

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        statuses = build_manager(cli.settings()).list()
    typer.echo(format_list(statuses, color=cli.color))


@app.command()
def update(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(help="Resource to pull (default: all)."),
    ] = None,
) -> None:
    """Pull the latest changes for one or all resources."""
    from library_resources.config import build_manager

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        manager = build_manager(cli.settings())
        result = _batch_with_progress(
            lambda cb: manager.update(name, progress=cb), verb="Pulling", color=cli.color
        )
    _report_batch(
        result, empty_msg="No resources to update.", header="Update complete", color=cli.color
    )


@app.command()
def restore(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(help="Resource to re-clone (default: all missing)."),
    ] = None,
) -> None:
    """Re-clone working copies that are registered but missing on disk."""
    from library_resources.config import build_manager

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        manager = build_manager(cli.settings())
        result = _batch_with_progress(
            lambda cb: manager.restore(name, progress=cb), verb="Cloning", color=cli.color
        )
    _report_batch(
        result,
        empty_msg="No resources in registry to restore.",
        header="Restore complete",
        color=cli.color,
    )


@app.command()
def info(ctx: typer.Context, name: ResourceName) -> None:
    """Show resource details."""
    from library_resources.cli.formatting import format_info
    from library_resources.config import build_manager

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        details = build_manager(cli.settings()).info(name)
    typer.echo(format_info(details, color=cli.color))


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search pattern (grep regex).")],
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Resource to search (default: all)."),
    ] = None,
    include: Annotated[
        str | None,
        typer.Option("--include", "-i", help="File pattern to include (e.g. '*.md')."),
    ] = None,
) -> None:
    """Search for content within resources."""
    from library_resources.cli.formatting import format_search
    from library_resources.config import build_content

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        result = build_content(cli.settings()).search(query, name=name, include=include)
    typer.echo(format_search(result))


@app.command()
def read(
    ctx: typer.Context,
    name: ResourceName,
    file_path: Annotated[str, typer.Argument(help="File path relative to the resource root.")],
) -> None:
    """Print a file from a resource."""
    from library_resources.cli.formatting import format_file
    from library_resources.config import build_content

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        content = build_content(cli.settings()).read(name, file_path)
    typer.echo(format_file(content))


@app.command()
def tree(
    ctx: typer.Context,
    name: ResourceName,
    subpath: Annotated[str, typer.Argument(help="Subdirectory to list.")] = "",
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", min=1, help="Max depth (default: 3)."),
    ] = None,
) -> None:
    """List files in a resource."""
    from library_resources.cli.formatting import format_tree
    from library_resources.config import build_content

    cli: CliContext = ctx.obj
    with _exit_on_error(cli):
        listing = build_content(cli.settings()).tree(name, subpath, depth)
    typer.echo(format_tree(listing))
