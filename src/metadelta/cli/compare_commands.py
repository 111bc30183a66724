"""Comparison commands — metadelta compare, metadelta diff."""

from __future__ import annotations

import click
from rich import box
from rich.table import Table
from rich.text import Text

from metadelta.cli.main import STATUS_MARKS, console, fail, get_status_style
from metadelta.core.errors import MetadeltaError
from metadelta.core.logging import CompareLogger
from metadelta.core.models import Classification, ComparisonResult

STATUS_CHOICES = [c.value for c in Classification]


def load_comparison(left_path: str, right_path: str, logger: CompareLogger | None = None) -> ComparisonResult:
    """Load both snapshot files and reconcile them, exiting on bad input."""
    from metadelta.compare.reconcile import reconcile
    from metadelta.snapshots.loader import load_snapshot

    try:
        left = load_snapshot(left_path, "left")
        right = load_snapshot(right_path, "right")
        if logger is not None:
            logger.compare_start(len(left), len(right))
        result = reconcile(left, right)
    except MetadeltaError as e:
        fail("Cannot compare snapshots", e)

    if logger is not None:
        logger.compare_finish(result.counts())
    return result


def _summary_table(result: ComparisonResult) -> Table:
    table = Table(title="Comparison summary", box=box.ROUNDED, show_header=True)
    table.add_column("Status")
    table.add_column("Count", justify="right")
    for status, count in result.counts().items():
        style = get_status_style(Classification(status))
        table.add_row(f"[{style}]{status}[/{style}]", str(count))
    return table


@click.command()
@click.argument("left", type=click.Path(exists=True, dir_okay=False))
@click.argument("right", type=click.Path(exists=True, dir_okay=False))
@click.option("--type", "artifact_types", multiple=True, help="Only show this artifact type (repeatable)")
@click.option(
    "--status", "statuses", multiple=True, type=click.Choice(STATUS_CHOICES),
    help="Only show this classification (repeatable; default: added, removed, changed)",
)
@click.option("--search", default="", help="Case-insensitive filter on name, key or type")
@click.pass_context
def compare(ctx: click.Context, left: str, right: str, artifact_types: tuple[str, ...],
            statuses: tuple[str, ...], search: str):
    """Compare two snapshots and list what differs.

    LEFT is the source snapshot and RIGHT the target snapshot (JSON or YAML).
    """
    from metadelta.compare.filters import DEFAULT_STATUSES, CompareFilter, filter_items
    from metadelta.config import get_settings

    logger = CompareLogger(ctx.obj["verbosity"], log_dir=get_settings().log_dir, console=console)
    try:
        result = load_comparison(left, right, logger)

        console.print(_summary_table(result))

        compare_filter = CompareFilter(
            artifact_types=artifact_types,
            statuses=tuple(Classification(s) for s in statuses) or DEFAULT_STATUSES,
            search_term=search,
        )
        items = filter_items(result.all_items(), compare_filter)

        if not items:
            console.print("[dim]No artifacts match the filter.[/dim]")
            return

        table = Table(box=box.SIMPLE, show_header=True)
        table.add_column("", no_wrap=True)
        table.add_column("Type", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("Modified", style="dim")
        for item in items:
            style = get_status_style(item.classification)
            mark = STATUS_MARKS.get(item.classification, "?")
            modified = " by ".join(p for p in (item.modified_at, item.modified_by) if p)
            table.add_row(f"[{style}]{mark}[/{style}]", item.artifact_type, item.name, modified or "-")
        console.print(table)
    finally:
        logger.finish()


@click.command()
@click.argument("left", type=click.Path(exists=True, dir_okay=False))
@click.argument("right", type=click.Path(exists=True, dir_okay=False))
@click.argument("key")
def diff(left: str, right: str, key: str):
    """Show a side-by-side line diff for one artifact.

    KEY is the artifact key, e.g. ApexClass/AccountService.
    """
    from metadelta.compare.linediff import diff_artifact, diff_stats

    result = load_comparison(left, right)
    item = result.get(key)
    if item is None:
        fail(f"Artifact not found: {key}")

    style = get_status_style(item.classification)
    console.print(f"\n[bold]Diff for:[/bold] {key} [{style}]({item.classification.value})[/{style}]")

    if item.left_content is None or item.right_content is None:
        console.print("[dim]Content not available on both sides; showing what is present.[/dim]")

    lines = diff_artifact(item)
    table = Table(box=box.MINIMAL, show_header=True, expand=True)
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Left")
    table.add_column("Right")
    for line in lines:
        line_style = get_status_style(line.classification)
        table.add_row(
            str(line.line_number),
            Text(line.left_text, style=line_style),
            Text(line.right_text, style=line_style),
        )
    console.print(table)

    stats = diff_stats(lines)
    if not stats.has_changes:
        console.print("[green]No changes[/green]")
        return
    console.print(
        f"[green]{stats.added} added[/green], [red]{stats.removed} removed[/red], "
        f"[yellow]{stats.changed} changed[/yellow], {stats.unchanged} unchanged"
    )
