"""
Shared fixtures: an in-memory store and helpers that seed records directly
"""

import asyncio
import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from careernest.auth import ADMIN, ORGANIZATION, STUDENT, Caller
from careernest.repositories import MemoryStore

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def run(coro):
    """Drive a coroutine to completion"""
    return asyncio.run(coro)


def caller_for(user: dict) -> Caller:
    return Caller(user_id=user["id"], role=user["role"], username=user["username"])


class Seeder:
    """Inserts fully-formed records straight into a store"""

    def __init__(self, store: MemoryStore):
        self.store = store
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def user(self, role: str, **fields) -> dict:
        n = self._next()
        record = {
            "id": str(uuid.uuid4()),
            "username": f"{role}{n}",
            "email": f"{role}{n}@example.com",
            "password_hash": "not-a-real-hash",
            "name": f"{role.capitalize()} {n}",
            "role": role,
            "phone": None,
            "roll_number": None,
            "course": None,
            "year": None,
            "is_active": True,
            "created_at": NOW + timedelta(seconds=n),
        }
        record.update(fields)
        return run(self.store.insert("users", record))

    def admin(self, **fields) -> dict:
        return self.user(ADMIN, **fields)

    def organization(self, **fields) -> dict:
        return self.user(ORGANIZATION, **fields)

    def student(self, organization: dict = None, **fields) -> dict:
        student = self.user(STUDENT, **fields)
        if organization is not None:
            self.membership(organization, student)
        return student

    def membership(self, organization: dict, student: dict, status: str = "active", joined: datetime = None) -> dict:
        return run(self.store.insert("organization_students", {
            "id": str(uuid.uuid4()),
            "organization_id": organization["id"],
            "student_id": student["id"],
            "status": status,
            "joined_date": joined or NOW + timedelta(seconds=self._next()),
        }))

    def event(self, creator: dict, organization: dict = None, **fields) -> dict:
        n = self._next()
        record = {
            "id": str(uuid.uuid4()),
            "organization_id": organization["id"] if organization else None,
            "title": f"Event {n}",
            "description": None,
            "type": "workshop",
            "start_date": NOW + timedelta(days=10),
            "end_date": NOW + timedelta(days=11),
            "registration_deadline": NOW + timedelta(days=5),
            "venue": "Main Hall",
            "max_participants": None,
            "visibility": "public",
            "event_code": None,
            "approval_status": "approved",
            "created_by_role": creator["role"],
            "created_by_id": creator["id"],
            "created_at": NOW + timedelta(seconds=n),
        }
        record.update(fields)
        return run(self.store.insert("events", record))

    def course(self, creator: dict, organization: dict = None, **fields) -> dict:
        n = self._next()
        record = {
            "id": str(uuid.uuid4()),
            "organization_id": organization["id"] if organization else None,
            "title": f"Course {n}",
            "description": "Learn things",
            "instructor": "Someone",
            "duration": "Self-paced",
            "level": "beginner",
            "category": "General",
            "video_url": None,
            "quiz_data": None,
            "created_by_id": creator["id"],
            "created_by_role": creator["role"],
            "is_active": True,
            "created_at": NOW + timedelta(seconds=n),
        }
        record.update(fields)
        return run(self.store.insert("courses", record))

    def announcement(self, creator: dict, organization: dict = None, **fields) -> dict:
        n = self._next()
        record = {
            "id": str(uuid.uuid4()),
            "organization_id": organization["id"] if organization else None,
            "title": f"Announcement {n}",
            "content": "Hello",
            "priority": "normal",
            "created_by_id": creator["id"],
            "created_by_role": creator["role"],
            "author": creator.get("name") or "Admin",
            "is_active": True,
            "created_at": NOW + timedelta(seconds=n),
        }
        record.update(fields)
        return run(self.store.insert("announcements", record))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def seed(store):
    return Seeder(store)


@pytest.fixture
def campus(seed):
    """Two organizations, one student each, an unaffiliated student and an admin"""
    admin = seed.admin()
    org1 = seed.organization(name="Org One")
    org2 = seed.organization(name="Org Two")
    return {
        "admin": admin,
        "org1": org1,
        "org2": org2,
        "student1": seed.student(org1),
        "student2": seed.student(org2),
        "loner": seed.student(),
    }
