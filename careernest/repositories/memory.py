"""
In-Memory Store
Dict-backed collections for tests and single-process development
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from careernest.repositories.base import COLLECTIONS, UNIQUE_KEYS, DuplicateKeyError, Store


def _matches(document: dict, where: Optional[dict], any_of: Optional[List[dict]]) -> bool:
    if where:
        for key, value in where.items():
            if document.get(key) != value:
                return False
    if any_of is not None:
        return any(
            all(document.get(key) == value for key, value in clause.items())
            for clause in any_of
        )
    return True


def _sort_key(field: str):
    def key(document: dict):
        value = document.get(field)
        # None sorts first; mixed types compare by their string form
        return (value is not None, value if isinstance(value, (int, float, datetime)) else str(value or ""))
    return key


class MemoryStore(Store):
    """Store implementation keeping every collection in a dict keyed by id"""

    def __init__(self):
        self._collections: Dict[str, Dict[str, dict]] = {name: {} for name in COLLECTIONS}

    def _table(self, collection: str) -> Dict[str, dict]:
        if collection not in self._collections:
            raise KeyError(f"Unknown collection: {collection}")
        return self._collections[collection]

    def _check_unique(self, collection: str, candidate: dict, ignore_id: Optional[str] = None) -> None:
        for fields in UNIQUE_KEYS.get(collection, []):
            values = tuple(candidate.get(f) for f in fields)
            if any(v is None for v in values):
                continue
            for other in self._table(collection).values():
                if other["id"] == ignore_id:
                    continue
                if tuple(other.get(f) for f in fields) == values:
                    raise DuplicateKeyError(collection, fields)

    async def insert(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        table = self._table(collection)
        if document.get("id") in table:
            raise DuplicateKeyError(collection, ("id",))
        stored = copy.deepcopy(document)
        stored.setdefault("created_at", datetime.now(timezone.utc))
        self._check_unique(collection, stored)
        table[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def find(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        any_of: Optional[List[Dict[str, Any]]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        rows = [doc for doc in self._table(collection).values() if _matches(doc, where, any_of)]
        if order_by:
            rows.sort(key=_sort_key(order_by), reverse=descending)
        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return [copy.deepcopy(doc) for doc in rows]

    async def count(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        any_of: Optional[List[Dict[str, Any]]] = None,
    ) -> int:
        return sum(1 for doc in self._table(collection).values() if _matches(doc, where, any_of))

    async def update(self, collection: str, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        table = self._table(collection)
        current = table.get(document_id)
        if current is None:
            return None
        updated = {**current, **copy.deepcopy(changes), "id": document_id}
        self._check_unique(collection, updated, ignore_id=document_id)
        table[document_id] = updated
        return copy.deepcopy(updated)

    async def delete(self, collection: str, where: Dict[str, Any]) -> int:
        table = self._table(collection)
        doomed = [doc_id for doc_id, doc in table.items() if _matches(doc, where, None)]
        for doc_id in doomed:
            del table[doc_id]
        return len(doomed)
