"""Shared setup and formatting for CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from daybook.core.config import Config
from daybook.core.exceptions import ConfigurationError
from daybook.core.storage import create_storage
from daybook.core.utils.logging import setup_logging_from_config
from daybook.journal.models import Entry, mood_emoji
from daybook.journal.store import EntryStore
from daybook.journal.utils import parse_timestamp

DAYBOOK_DIR = Path.home() / ".daybook"
CONFIG_PATH = DAYBOOK_DIR / "config.yaml"


def fail(message: str) -> NoReturn:
    click.echo(message, err=True)
    sys.exit(1)


def load_config(ctx: click.Context) -> Config:
    """Config from ``--config`` (or ~/.daybook/config.yaml) and ``--data-dir``."""
    obj = ctx.find_root().obj or {}
    config_file = obj.get("config_file") or (str(CONFIG_PATH) if CONFIG_PATH.exists() else None)
    try:
        return Config(config_file=config_file, data_dir=obj.get("data_dir"))
    except ConfigurationError as e:
        fail(f"Configuration error: {e}")


def open_store(ctx: click.Context) -> tuple[Config, EntryStore]:
    """Set up logging and build the entry store the config describes."""
    config = load_config(ctx)
    setup_logging_from_config(config)
    try:
        storage = create_storage(config)
    except ConfigurationError as e:
        fail(f"Configuration error: {e}")
    return config, EntryStore(storage, key=config.get("storage.key"))


def short_date(iso: str) -> str:
    """``Oct 19`` style date, or the raw value if it does not parse."""
    parsed = parse_timestamp(iso)
    if parsed is None:
        return iso or "?"
    return f"{parsed:%b} {parsed.day}"


def truncate_text(text: str, max_length: int = 80, ellipsis: str = "...") -> str:
    """Single-line preview, truncated to max_length."""
    text = " ".join(text.split())
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ellipsis)] + ellipsis


def format_entry_line(entry: Entry) -> str:
    title = entry.title or short_date(entry.created_at)
    tags = f"  [{', '.join(entry.tags)}]" if entry.tags else ""
    return f"{entry.id}  {short_date(entry.created_at):>6}  {mood_emoji(entry.mood)}  {title}{tags}"


def format_entry_detail(entry: Entry) -> str:
    lines = [
        f"id:      {entry.id}",
        f"created: {entry.created_at}",
        f"title:   {entry.title}",
        f"mood:    {entry.mood or '-'} {mood_emoji(entry.mood)}",
        f"tags:    {', '.join(entry.tags) or '-'}",
    ]
    if entry.content:
        lines += ["", entry.content]
    return "\n".join(lines)
