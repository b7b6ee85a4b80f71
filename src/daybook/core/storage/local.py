"""
Local filesystem storage medium.

Each key is one UTF-8 file under ``base_path``. Writes go to a temporary
file in the same directory and are swapped in with ``os.replace`` so a failed
write never leaves a truncated value behind.
"""

import errno
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from ..exceptions import StoragePermissionError, StorageQuotaError, StorageUnavailableError
from .base import KeyValueStore

_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC), errno.EFBIG}
_TMP_PREFIX = ".tmp-"


def _translate_os_error(action: str, path: Path, e: OSError) -> Exception:
    if isinstance(e, PermissionError):
        return StoragePermissionError(f"Cannot {action} {path}: {e}")
    if e.errno in _QUOTA_ERRNOS:
        return StorageQuotaError(f"Cannot {action} {path}: {e}")
    return StorageUnavailableError(f"Cannot {action} {path}: {e}")


class LocalStorage(KeyValueStore):
    """File-per-key storage medium rooted at ``base_path``."""

    def __init__(self, base_path: str = "~/.daybook-data/storage", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()

    def _get_full_path(self, key: str) -> Path:
        """Resolve a storage key to an absolute path under ``base_path``.

        Keys are flat names: empty keys, path separators, null bytes and
        dot-only names are rejected so nothing is written outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "/" in raw_key or "\\" in raw_key:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path separators are not allowed.")
        if raw_key in (".", "..") or raw_key.startswith(_TMP_PREFIX):
            raise StoragePermissionError(f"Unsafe storage key '{key}'.")
        return self.base_path / raw_key

    def get_item(self, key: str) -> str | None:
        path = self._get_full_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise StorageUnavailableError(f"Cannot decode {path} as UTF-8: {e}") from e
        except OSError as e:
            raise _translate_os_error("read", path, e) from e

    def set_item(self, key: str, value: str) -> None:
        path = self._get_full_path(key)
        tmp_name = None
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=_TMP_PREFIX, dir=self.base_path)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise _translate_os_error("write", path, e) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError as e:
                    logger.warning(f"Could not remove temp file {tmp_name}: {e}")

    def remove_item(self, key: str) -> None:
        path = self._get_full_path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise _translate_os_error("remove", path, e) from e

    def keys(self) -> Iterator[str]:
        if not self.base_path.is_dir():
            return
        for entry in sorted(self.base_path.iterdir()):
            if entry.is_file() and not entry.name.startswith(_TMP_PREFIX):
                yield entry.name
