"""
Store Interface
Persistence-agnostic document access shared by the SQL and in-memory backends
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

# Unique keys enforced by every backend, per collection
UNIQUE_KEYS: Dict[str, List[tuple]] = {
    "users": [("username",), ("email",), ("roll_number",)],
    "organization_students": [("organization_id", "student_id")],
    "events": [("event_code",)],
    "event_registrations": [("event_id", "student_id")],
    "courses": [],
    "course_enrollments": [("course_id", "student_id")],
    "announcements": [],
    "organization_requests": [],
}

COLLECTIONS = tuple(UNIQUE_KEYS)


class DuplicateKeyError(Exception):
    """Raised when an insert or update violates a unique key"""

    def __init__(self, collection: str, fields: Sequence[str] = ()):
        self.collection = collection
        self.fields = tuple(fields)
        detail = ", ".join(self.fields) if self.fields else "unique key"
        super().__init__(f"Duplicate {detail} in {collection}")


class Store(ABC):
    """
    Minimal document store used by every service

    Criteria are equality matches. ``any_of`` is a list of criteria dicts OR-ed
    together and AND-ed with ``where``; an empty ``any_of`` list matches
    nothing while ``None`` disables the clause.
    """

    async def connect(self) -> None:
        """Open connections (no-op by default)"""

    async def disconnect(self) -> None:
        """Close connections (no-op by default)"""

    @abstractmethod
    async def insert(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document (must carry ``id``) and return the stored copy"""

    @abstractmethod
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
        """Return matching documents"""

    @abstractmethod
    async def count(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        any_of: Optional[List[Dict[str, Any]]] = None,
    ) -> int:
        """Count matching documents"""

    @abstractmethod
    async def update(self, collection: str, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply changes to one document and return it, or None if absent"""

    @abstractmethod
    async def delete(self, collection: str, where: Dict[str, Any]) -> int:
        """Delete matching documents and return how many were removed"""

    async def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a document by id"""
        return await self.find_one(collection, {"id": document_id})

    async def find_one(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        any_of: Optional[List[Dict[str, Any]]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """Fetch the first matching document"""
        rows = await self.find(collection, where, any_of, order_by=order_by, descending=descending, limit=1)
        return rows[0] if rows else None

    async def exists(self, collection: str, where: Dict[str, Any]) -> bool:
        return await self.count(collection, where) > 0
