"""Entry commands: add, list, show, edit, delete."""

from __future__ import annotations

import click

from daybook.journal.models import Entry, Mood
from daybook.journal.search import filter_entries
from daybook.journal.utils import normalize_tags

from .common import fail, format_entry_detail, format_entry_line, open_store, truncate_text

_MOOD_HELP = "Mood label, e.g. " + ", ".join(m.value for m in Mood) + "."


@click.command()
@click.option("--title", "-t", default="", help="Entry title.")
@click.option("--content", "-c", default="", help="Entry text.")
@click.option("--tags", default="", help="Comma-separated tags (max 10).")
@click.option("--mood", "-m", default="", help=_MOOD_HELP)
@click.pass_context
def add(ctx: click.Context, title: str, content: str, tags: str, mood: str) -> None:
    """Add a new journal entry."""
    entry = Entry.create(title=title.strip(), content=content.strip(), tags=tags, mood=mood)
    if not entry.has_text:
        fail("An entry needs a title or some content.")

    _, store = open_store(ctx)
    if not store.add_entry(entry):
        fail("Could not save the entry. Check the log for details.")
    click.echo(f"Added {entry.id}")


@click.command("list")
@click.option("--query", "-q", default="", help="Search title, content and tags.")
@click.option("--mood", "-m", default="", help="Only entries with this mood.")
@click.option("--preview/--no-preview", default=False, help="Show a content preview under each entry.")
@click.pass_context
def list_entries(ctx: click.Context, query: str, mood: str, preview: bool) -> None:
    """List entries, newest first."""
    _, store = open_store(ctx)
    entries = filter_entries(store.load_all(), query=query, mood=mood)
    if not entries:
        click.echo("No entries.")
        return
    for entry in entries:
        click.echo(format_entry_line(entry))
        if preview and entry.content:
            click.echo(f"    {truncate_text(entry.content)}")


@click.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx: click.Context, entry_id: str) -> None:
    """Show one entry in full."""
    _, store = open_store(ctx)
    entry = store.get_entry(entry_id)
    if entry is None:
        fail(f"Entry not found: {entry_id}")
    click.echo(format_entry_detail(entry))


@click.command()
@click.argument("entry_id")
@click.option("--title", "-t", default=None, help="New title.")
@click.option("--content", "-c", default=None, help="New text.")
@click.option("--tags", default=None, help="New comma-separated tags (replaces existing).")
@click.option("--mood", "-m", default=None, help=_MOOD_HELP)
@click.pass_context
def edit(
    ctx: click.Context,
    entry_id: str,
    title: str | None,
    content: str | None,
    tags: str | None,
    mood: str | None,
) -> None:
    """Change fields of an existing entry. Unspecified fields are kept."""
    changes: dict[str, object] = {}
    if title is not None:
        changes["title"] = title.strip()
    if content is not None:
        changes["content"] = content.strip()
    if tags is not None:
        changes["tags"] = normalize_tags(tags)
    if mood is not None:
        changes["mood"] = mood
    if not changes:
        fail("Nothing to change. Pass --title, --content, --tags or --mood.")

    _, store = open_store(ctx)
    existing = store.get_entry(entry_id)
    if existing is None:
        fail(f"Entry not found: {entry_id}")
    if not existing.merged_with(changes).has_text:
        fail("An entry needs a title or some content.")
    if not store.update_entry(entry_id, changes):
        fail("Could not save the entry. Check the log for details.")
    click.echo(f"Updated {entry_id}")


@click.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, entry_id: str, yes: bool) -> None:
    """Delete an entry."""
    _, store = open_store(ctx)
    if store.get_entry(entry_id) is None:
        fail(f"Entry not found: {entry_id}")
    if not yes:
        click.confirm(f"Delete {entry_id}?", abort=True)
    if not store.delete_entry(entry_id):
        fail("Could not delete the entry. Check the log for details.")
    click.echo(f"Deleted {entry_id}")
