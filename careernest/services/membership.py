"""
Membership Resolver
Finds the organization a student currently belongs to
"""

import logging
from typing import Optional

from careernest.repositories import Store

logger = logging.getLogger(__name__)

ACTIVE = "active"


class MembershipResolver:
    """Resolves a student's single active organization"""

    def __init__(self, store: Store):
        self.store = store

    async def get_active_membership(self, student_id: str) -> Optional[dict]:
        """
        Return the student's active membership record, or None

        When several active memberships exist the most recently joined one
        wins and a warning is logged.
        """
        memberships = await self.store.find(
            "organization_students",
            {"student_id": student_id, "status": ACTIVE},
            order_by="joined_date",
            descending=True,
        )
        if len(memberships) > 1:
            logger.warning(
                "Student %s has %d active memberships; using organization %s",
                student_id, len(memberships), memberships[0]["organization_id"]
            )
        return memberships[0] if memberships else None

    async def resolve_active_organization(self, student_id: str) -> Optional[str]:
        """
        Return the id of the student's active organization

        Never raises: a failed lookup is logged and treated as "no organization".
        """
        try:
            membership = await self.get_active_membership(student_id)
        except Exception as e:
            logger.warning("Organization lookup failed for student %s: %s", student_id, e)
            return None
        return membership["organization_id"] if membership else None
