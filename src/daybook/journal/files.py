"""Export and import journal files.

Exports are written synchronously. Imports read the file asynchronously
(aiofiles) and then run the merge synchronously, so two overlapping imports
may interleave their merges; the last save wins.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import aiofiles
from loguru import logger

from .codec import export_filename
from .store import EntryStore


def export_to_file(store: EntryStore, directory: str | Path, day: date | None = None) -> Path | None:
    """Write the export envelope to ``directory``. Returns the file path, or None on failure."""
    target_dir = Path(directory).expanduser()
    path = target_dir / export_filename(day)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(store.export_json(), encoding="utf-8")
    except OSError as e:
        logger.error(f"Export to {path} failed: {e}")
        return None
    logger.info(f"Exported journal to {path}")
    return path


async def read_import_file(path: str | Path) -> str:
    """Read an import file as UTF-8 text."""
    async with aiofiles.open(Path(path).expanduser(), encoding="utf-8") as f:
        return await f.read()


async def import_file(store: EntryStore, path: str | Path) -> bool:
    """Read ``path`` and merge it into ``store``. False if unreadable or rejected."""
    try:
        text = await read_import_file(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read import file {path}: {e}")
        return False
    return store.merge_import(text)
