"""Export and import commands."""

from __future__ import annotations

import asyncio

import click

from daybook.journal.files import export_to_file, import_file

from .common import fail, open_store


@click.command()
@click.option("--out", "out_dir", type=click.Path(file_okay=False), help="Directory for the export file.")
@click.pass_context
def export(ctx: click.Context, out_dir: str | None) -> None:
    """Export all entries to a JSON file."""
    config, store = open_store(ctx)
    path = export_to_file(store, out_dir or config.get("paths.export_dir"))
    if path is None:
        fail("Export failed. Check the log for details.")
    click.echo(f"Exported {len(store.load_all())} entries to {path}")


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_entries(ctx: click.Context, file: str) -> None:
    """Merge entries from an exported JSON file. Existing entries are kept."""
    _, store = open_store(ctx)
    before = len(store.load_all())
    if not asyncio.run(import_file(store, file)):
        fail("Import failed: the file is not a daybook export or could not be saved.")
    added = len(store.load_all()) - before
    click.echo(f"Imported {added} new entries")
