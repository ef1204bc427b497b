"""
Persistence adapters.

These modules encapsulate how serialized collections are stored/retrieved
(a JSON file, a SQL table, or plain memory). The store depends on the
KeyValueStorage contract rather than touching files or sessions directly.
"""

from .base import KeyValueStorage, MemoryStorage, StorageError, get_storage

__all__ = ["KeyValueStorage", "MemoryStorage", "StorageError", "get_storage"]
