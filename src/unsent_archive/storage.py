"""Durable key-value storage for reading mode and drafts."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from platformdirs import user_data_dir

from unsent_archive.errors import StorageError
from unsent_archive.models import CONFIG_APP_NAME

logger = logging.getLogger(__name__)

STORAGE_FILENAME = "storage.json"


def get_storage_path() -> Path:
    """Get the path to the durable key-value store.

    Uses platformdirs for cross-platform data directory:
    - Linux: ~/.local/share/unsent-archive/storage.json
    - macOS: ~/Library/Application Support/unsent-archive/storage.json
    - Windows: %LOCALAPPDATA%/unsent-archive/storage.json
    """
    return Path(user_data_dir(CONFIG_APP_NAME)) / STORAGE_FILENAME


def write_json_atomic(path: Path, data: object, *, prefix: str) -> None:
    """Serialize data as JSON into path via a sibling temp file and os.replace().

    A crash mid-write leaves either the old file or the new one, never a
    truncated mix. The temp file is removed when anything fails.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=prefix)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


@runtime_checkable
class KeyValueStore(Protocol):
    """String-keyed, string-valued store. Absent keys read as None."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Durably store value under key.

        Raises:
            StorageError: If the value could not be persisted.
        """
        ...


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """Store backed by one JSON object file of string values.

    The file is re-read on every ``get`` so that the in-memory view can never
    drift from what is on disk, and written atomically on every ``set``.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or get_storage_path()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read the whole file. Missing or corrupt files read as empty."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Storage file has invalid JSON, ignoring it: %s", e)
            return {}
        except OSError as e:
            logger.warning("Could not read storage file, ignoring it: %s", e)
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "Storage file root is %s, not an object; ignoring it", type(data).__name__
            )
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """Write value under key atomically.

        Raises:
            StorageError: If the directory or file cannot be written.
        """
        data = self._read_all()
        data[key] = value
        try:
            write_json_atomic(self._path, data, prefix=".storage-")
        except OSError as e:
            logger.error("Failed to write storage key %r: %s", key, e)
            raise StorageError(f"Could not save {key!r} to {self._path}: {e}") from e


__all__ = [
    "STORAGE_FILENAME",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "get_storage_path",
    "write_json_atomic",
]
