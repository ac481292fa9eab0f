"""Durable key-value storage and the document attribute side channel."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from loguru import logger

from fleetview.constants import DEFAULT_STORAGE_PATH
from fleetview.core.exceptions import StorageError

log = logger.bind(component="storage")


class KeyValueStore(Protocol):
    """String key-value store that survives across sessions.

    Write failures should surface as StorageError; ConfigStore also
    tolerates a raw OSError.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class DocumentAttributes(Protocol):
    """Write-only channel for document-level attributes read by styling."""

    def set_attribute(self, name: str, value: str) -> None: ...


# =============================================================================
# Key-value stores
# =============================================================================


class MemoryStore:
    """In-process store, lost when the process exits."""

    __slots__ = ("_data",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store backed by a single JSON object file.

    The file is re-read on every get so concurrent dashboards see each
    other's writes. A missing or corrupt file reads as empty; writes
    replace the file atomically.
    """

    __slots__ = ("_path",)

    def __init__(self, path: Path = DEFAULT_STORAGE_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            log.warning("Ignoring unreadable storage file {path}: {err}", path=self._path, err=e)
            return {}
        if not isinstance(raw, dict):
            log.warning("Ignoring storage file {path}: not a JSON object", path=self._path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e


# =============================================================================
# Document side channel
# =============================================================================


class DocumentRoot:
    """In-memory document root whose attributes a styling layer can read."""

    __slots__ = ("_attributes",)

    def __init__(self) -> None:
        self._attributes: dict[str, str] = {}

    @property
    def attributes(self) -> MappingProxyType[str, str]:
        return MappingProxyType(self._attributes)

    def set_attribute(self, name: str, value: str) -> None:
        self._attributes[name] = value
