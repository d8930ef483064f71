"""Command-line interface: ``library-resources [OPTIONS] COMMAND``."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from library_resources import __version__

if TYPE_CHECKING:
    from library_resources.config.schema import Settings

app = typer.Typer(
    name="library-resources",
    help="Manage cloned documentation repositories, globally or per project.",
    no_args_is_help=True,
    add_completion=False,
)

LOG_ENV_VAR = "LIBRARY_RESOURCES_LOG"
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
# Index is the number of -v flags.
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


@dataclass(frozen=True)
class CliContext:
    """Options shared by every command, parsed once by the app callback."""

    project_root: Path | None
    color: bool

    def settings(self) -> Settings:
        from library_resources.config import load_settings

        return load_settings(self.project_root)


def _log_level(verbose: int) -> int | None:
    """Level for the ``library_resources`` logger, or None to leave logging alone.

    ``LIBRARY_RESOURCES_LOG`` wins over ``-v`` flags.
    """
    requested = os.environ.get(LOG_ENV_VAR, "").strip().upper()
    if requested:
        level = logging.getLevelNamesMapping().get(requested)
        if level is None:
            typer.echo(f"WARNING: ignoring {LOG_ENV_VAR}={requested!r}, using INFO", err=True)
            return logging.INFO
        return level
    if verbose <= 0:
        return None
    return _VERBOSITY_LEVELS[min(verbose, len(_VERBOSITY_LEVELS) - 1)]


def _configure_logging(verbose: int) -> None:
    level = _log_level(verbose)
    if level is None:
        return
    # Other libraries stay at WARNING; only our package gets the requested level.
    logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger("library_resources").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"library-resources {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    project_root: Annotated[
        Path | None,
        typer.Option(
            "--project-root",
            "-C",
            file_okay=False,
            help="Project directory holding the project-scope registry (default: cwd).",
        ),
    ] = None,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable colored output (NO_COLOR is honored too)."),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="-v for INFO, -vv for DEBUG logs."),
    ] = 0,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    _ = version
    _configure_logging(verbose)
    ctx.obj = CliContext(
        project_root=project_root,
        color=not (no_color or os.environ.get("NO_COLOR")),
    )


# Commands register themselves on ``app``.
from library_resources.cli import commands as _commands  # noqa: E402, F401
