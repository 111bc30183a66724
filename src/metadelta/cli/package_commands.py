"""Packaging command — metadelta package."""

from __future__ import annotations

from pathlib import Path

import click
from rich.syntax import Syntax

from metadelta.cli.compare_commands import load_comparison
from metadelta.cli.main import console, fail
from metadelta.core.errors import MetadeltaError, atomic_write
from metadelta.core.logging import CompareLogger


@click.command()
@click.argument("left", type=click.Path(exists=True, dir_okay=False))
@click.argument("right", type=click.Path(exists=True, dir_okay=False))
@click.argument("keys", nargs=-1)
@click.option("--changed", "include_changed", is_flag=True, default=False,
              help="Select every added and changed artifact")
@click.option("--output-dir", type=click.Path(file_okay=False), default=None,
              help="Write package.xml and artifact files here")
@click.option("--api-version", default=None, help="Manifest version (default: METADELTA_API_VERSION or 58.0)")
@click.option("--rules", "rules_file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="YAML type rule table")
@click.pass_context
def package(ctx: click.Context, left: str, right: str, keys: tuple[str, ...], include_changed: bool,
            output_dir: str | None, api_version: str | None, rules_file: str | None):
    """Expand a selection with its dependencies and build a package manifest.

    KEYS are artifact keys to select, e.g. CustomField/Account.Phone.
    """
    from metadelta.compare.expand import expand_selection
    from metadelta.compare.manifest import build_manifest
    from metadelta.config import get_settings, load_rules
    from metadelta.package.layout import plan_package

    settings = get_settings()
    logger = CompareLogger(ctx.obj["verbosity"], log_dir=settings.log_dir, console=console)

    try:
        try:
            rules = load_rules(settings, rules_file)
        except MetadeltaError as e:
            fail("Cannot load type rules", e)

        result = load_comparison(left, right, logger)

        for key in keys:
            item = result.get(key)
            if item is None:
                fail(f"Artifact not found: {key}")
            item.selected = True
        if include_changed:
            for item in [*result.added, *result.changed]:
                item.selected = True

        seed = result.selected_items()
        if not seed:
            fail("Nothing selected. Pass artifact keys or --changed.")

        items = expand_selection(result, rules)
        seed_keys = {item.key for item in seed}
        for item in items:
            if item.key not in seed_keys:
                logger.auto_wired(item.key)
        logger.expand_finish(len(seed), [item.key for item in items])

        manifest = build_manifest(items, version=api_version or settings.api_version)
        logger.manifest_built(len(manifest.types), manifest.member_count)

        console.print(Syntax(manifest.to_xml(), "xml", theme="monokai"))

        if output_dir:
            out = Path(output_dir)
            try:
                files = plan_package(items, rules, manifest, root=settings.package_root)
            except MetadeltaError as e:
                fail("Cannot plan package", e)
            for planned in files:
                target = out / planned.path
                target.parent.mkdir(parents=True, exist_ok=True)
                atomic_write(target, planned.content)
            logger.files_written(len(files), out)
            console.print(f"[green]Package written:[/green] {out} ({len(files)} files)")

        console.print(
            f"[bold]{len(items)}[/bold] artifacts "
            f"([dim]{len(items) - len(seed)} auto-wired[/dim])"
        )
    finally:
        logger.finish()
