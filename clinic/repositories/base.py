"""Key-value storage contract shared by every persistence adapter."""
from __future__ import annotations

from typing import Optional, Protocol

from clinic.core.config import Settings, get_settings


class StorageError(Exception):
    """Raised by adapters when the backing store cannot be read or written."""


class KeyValueStorage(Protocol):
    def load(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None when absent."""

    def save(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value."""


class MemoryStorage:
    """Dict-backed storage; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> None:
        self._data[key] = value


def get_storage(settings: Settings | None = None) -> KeyValueStorage:
    """Build the adapter selected by CLINIC_STORAGE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.storage_backend
    if backend == "json":
        from .json_storage import JsonFileStorage

        return JsonFileStorage(settings.data_file)
    if backend == "sql":
        from .sql_repository import SQLStorage

        return SQLStorage()
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend!r}")
