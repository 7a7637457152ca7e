"""
Announcement Service
Posting and scoped listing of announcements
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from careernest.auth import ADMIN, ORGANIZATION, Caller
from careernest.errors import Forbidden, ValidationFailed
from careernest.repositories import Store
from careernest.services.visibility import ANNOUNCEMENTS, VisibilityPolicy

logger = logging.getLogger(__name__)

PRIORITIES = ("low", "normal", "high", "urgent")


class AnnouncementService:
    """Service for announcements"""

    def __init__(self, store: Store, policy: VisibilityPolicy = None):
        self.store = store
        self.policy = policy or VisibilityPolicy(store)

    async def list_announcements(self, caller: Caller, limit: int = None) -> List[dict]:
        """Active announcements visible to the caller, newest first"""
        scope = await self.policy.scope_for(caller, ANNOUNCEMENTS)
        return await self.store.find(
            "announcements",
            {"is_active": True},
            any_of=scope.as_any_of(),
            order_by="created_at",
            descending=True,
            limit=limit,
        )

    async def create_announcement(self, caller: Caller, title: str, content: str, priority: str = None) -> dict:
        """Organizations post to their members; admin announcements are global"""
        if caller.role not in (ADMIN, ORGANIZATION):
            raise Forbidden("Only admins and organizations can post announcements")
        if not (title or "").strip() or not (content or "").strip():
            raise ValidationFailed("Title and content are required")

        priority = priority or "normal"
        if priority not in PRIORITIES:
            raise ValidationFailed(f"Priority must be one of: {', '.join(PRIORITIES)}")

        author = await self.store.get("users", caller.user_id)
        if caller.role == ADMIN:
            author_name = "Admin"
        else:
            author_name = (author.get("name") or author.get("username")) if author else "Organization"

        announcement = {
            "id": str(uuid.uuid4()),
            "organization_id": caller.user_id if caller.role == ORGANIZATION else None,
            "title": title.strip(),
            "content": content,
            "priority": priority,
            "created_by_id": caller.user_id,
            "created_by_role": caller.role,
            "author": author_name,
            "is_active": True,
            "created_at": datetime.now(timezone.utc),
        }
        created = await self.store.insert("announcements", announcement)
        logger.info("%s %s posted announcement %s", caller.role, caller.user_id, created["id"])
        return created
