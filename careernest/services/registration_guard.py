"""
Event Registration Guard
Admits a student to an event only after deadline, duplicate, capacity and membership checks
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from careernest.errors import (
    AlreadyRegistered,
    DeadlineExpired,
    EventCodeRequired,
    EventFull,
    EventNotFound,
    Forbidden,
    InvalidEventCode,
    NotAMember,
)
from careernest.repositories import DuplicateKeyError, Store
from careernest.services.membership import ACTIVE, MembershipResolver

logger = logging.getLogger(__name__)

REGISTERED = "registered"
APPROVED = "approved"
PRIVATE = "private"


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class EventRegistrationGuard:
    """Creates event registrations for students"""

    def __init__(self, store: Store, resolver: MembershipResolver = None):
        self.store = store
        self.resolver = resolver or MembershipResolver(store)

    async def registered_count(self, event_id: str) -> int:
        return await self.store.count("event_registrations", {"event_id": event_id, "status": REGISTERED})

    def _check_deadline(self, event: dict, now: datetime) -> None:
        deadline = as_utc(event.get("registration_deadline"))
        if deadline is not None and as_utc(now) > deadline:
            raise DeadlineExpired()

    async def _check_not_registered(self, event: dict, student_id: str) -> None:
        # Any row counts, including cancelled ones
        if await self.store.exists("event_registrations", {"event_id": event["id"], "student_id": student_id}):
            raise AlreadyRegistered()

    async def _check_capacity(self, event: dict) -> None:
        limit = event.get("max_participants")
        if limit is None:
            return
        if await self.registered_count(event["id"]) >= limit:
            raise EventFull()

    async def _admit(self, event: dict, student_id: str, now: datetime) -> dict:
        registration = {
            "id": str(uuid.uuid4()),
            "event_id": event["id"],
            "student_id": student_id,
            "status": REGISTERED,
            "registered_at": now,
        }
        try:
            created = await self.store.insert("event_registrations", registration)
        except DuplicateKeyError:
            raise AlreadyRegistered()
        logger.info("Student %s registered for event %s", student_id, event["id"])
        return created

    async def _load_approved_event(self, event_id: str) -> dict:
        event = await self.store.get("events", event_id)
        if not event or event.get("approval_status") != APPROVED:
            raise EventNotFound()
        return event

    async def register(self, event_id: str, student_id: str, now: datetime = None) -> dict:
        """
        Register a student for a public event

        Checks run in a fixed order: existence and approval, deadline,
        duplicate registration, capacity, then organization membership.
        """
        now = now or datetime.now(timezone.utc)
        try:
            event = await self._load_approved_event(event_id)
            if event.get("visibility") == PRIVATE:
                raise EventCodeRequired()
            self._check_deadline(event, now)
            await self._check_not_registered(event, student_id)
            await self._check_capacity(event)

            if event.get("organization_id") is not None:
                active_org_id = await self.resolver.resolve_active_organization(student_id)
                if active_org_id != event["organization_id"]:
                    raise NotAMember()
        except (EventNotFound, EventCodeRequired, DeadlineExpired, AlreadyRegistered, EventFull, NotAMember) as e:
            logger.debug("Registration rejected: event=%s student=%s reason=%s", event_id, student_id, type(e).__name__)
            raise

        return await self._admit(event, student_id, now)

    async def join_private_event(self, event_code: str, student_id: str, now: datetime = None) -> dict:
        """Register a student for a private event by its exact code"""
        now = now or datetime.now(timezone.utc)
        event = None
        if event_code:
            event = await self.store.find_one("events", {"event_code": event_code, "visibility": PRIVATE})
        if not event or event.get("approval_status") != APPROVED:
            logger.debug("Private event join rejected: student=%s reason=InvalidEventCode", student_id)
            raise InvalidEventCode()

        self._check_deadline(event, now)
        await self._check_not_registered(event, student_id)
        await self._check_capacity(event)
        return await self._admit(event, student_id, now)

    async def register_member(self, event_id: str, student_id: str, organization_id: str, now: datetime = None) -> dict:
        """Register one of the organization's active members for an event"""
        now = now or datetime.now(timezone.utc)
        is_member = await self.store.exists(
            "organization_students",
            {"organization_id": organization_id, "student_id": student_id, "status": ACTIVE}
        )
        if not is_member:
            raise Forbidden("Student does not belong to your organization")

        event = await self._load_approved_event(event_id)
        if event.get("organization_id") not in (None, organization_id):
            raise Forbidden("Not authorized to register students for this event")
        self._check_deadline(event, now)
        await self._check_not_registered(event, student_id)
        await self._check_capacity(event)
        return await self._admit(event, student_id, now)
