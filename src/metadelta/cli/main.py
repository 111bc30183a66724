"""Metadelta CLI — main entry point and shared utilities."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console

from metadelta.core.logging import Verbosity
from metadelta.core.models import Classification

console = Console()

# Color scheme per classification
STATUS_COLORS = {
    Classification.ADDED: "green",
    Classification.REMOVED: "red",
    Classification.CHANGED: "yellow",
    Classification.UNCHANGED: "dim",
}

STATUS_MARKS = {
    Classification.ADDED: "+",
    Classification.REMOVED: "-",
    Classification.CHANGED: "~",
    Classification.UNCHANGED: "=",
}


def get_status_style(status: Classification | None) -> str:
    """Return Rich style string for a classification."""
    if status is None:
        return "white"
    return STATUS_COLORS.get(status, "white")


def setup_logging(verbosity: Verbosity) -> None:
    """Configure library logging based on verbosity."""
    level = {
        Verbosity.DEFAULT: logging.WARNING,
        Verbosity.VERBOSE: logging.INFO,
    }.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def fail(message: str, error: Exception | None = None) -> None:
    """Print an error in the CLI style and exit 1."""
    if error is not None:
        console.print(f"[red]{message}:[/red] {error}")
    else:
        console.print(f"[red]{message}[/red]")
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase output (-v progress, -vv debug)")
@click.pass_context
def main(ctx: click.Context, verbose: int):
    """Metadelta — compare metadata snapshots and build deployable packages."""
    ctx.ensure_object(dict)
    verbosity = Verbosity(min(verbose, Verbosity.DEBUG))
    ctx.obj["verbosity"] = verbosity
    setup_logging(verbosity)


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from metadelta.cli.compare_commands import compare, diff  # noqa: E402
from metadelta.cli.package_commands import package  # noqa: E402

# Register commands
main.add_command(compare)
main.add_command(diff)
main.add_command(package)
