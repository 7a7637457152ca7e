"""
Repositories
Persistence-agnostic store interface and its backends
"""

from typing import Optional

from careernest.config import settings
from careernest.repositories.base import COLLECTIONS, UNIQUE_KEYS, DuplicateKeyError, Store
from careernest.repositories.memory import MemoryStore

_store: Optional[Store] = None


def create_store(backend: str = None) -> Store:
    """Build the store selected by STORAGE_BACKEND"""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "sql":
        from careernest.database import database
        from careernest.repositories.sql import SqlStore
        return SqlStore(database)
    raise ValueError(f"Unknown storage backend: {backend}")


def get_store() -> Store:
    """Return the process-wide store (FastAPI dependency)"""
    global _store
    if _store is None:
        _store = create_store()
    return _store


def set_store(store: Optional[Store]) -> None:
    """Replace the process-wide store"""
    global _store
    _store = store


__all__ = [
    "COLLECTIONS",
    "UNIQUE_KEYS",
    "DuplicateKeyError",
    "Store",
    "MemoryStore",
    "create_store",
    "get_store",
    "set_store",
]
