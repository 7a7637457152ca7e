"""
Event Service
Event creation, scoped listing, review and registration flows
"""

import logging
import random
import string
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from careernest.auth import ORGANIZATION, STUDENT, Caller
from careernest.errors import Forbidden, NotFound, ValidationFailed
from careernest.repositories import DuplicateKeyError, Store
from careernest.services.membership import MembershipResolver
from careernest.services.registration_guard import (
    APPROVED,
    PRIVATE,
    REGISTERED,
    EventRegistrationGuard,
    as_utc,
)
from careernest.services.visibility import EVENTS, VisibilityPolicy, authorize_mutation

logger = logging.getLogger(__name__)

PENDING = "pending"
REJECTED = "rejected"
PUBLIC = "public"

EVENT_TYPES = ("hackathon", "quiz", "coding", "workshop", "seminar", "conference", "other")
EVENT_FIELDS = (
    "title", "description", "type", "start_date", "end_date", "registration_deadline",
    "venue", "max_participants", "requirements", "prizes", "visibility",
)
DATE_FIELDS = ("start_date", "end_date", "registration_deadline")

EVENT_CODE_LENGTH = 6
EVENT_CODE_ATTEMPTS = 5


def generate_event_code(length: int = EVENT_CODE_LENGTH) -> str:
    alphabet = string.ascii_uppercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(length))


def validate_event_fields(fields: dict) -> dict:
    """Normalize dates to UTC and check the event's basic shape"""
    cleaned = {key: fields[key] for key in EVENT_FIELDS if key in fields}
    for key in DATE_FIELDS:
        if cleaned.get(key) is not None:
            cleaned[key] = as_utc(cleaned[key])

    if "title" in cleaned and not (cleaned["title"] or "").strip():
        raise ValidationFailed("Title is required")
    if cleaned.get("type") is not None and cleaned["type"] not in EVENT_TYPES:
        raise ValidationFailed(f"Invalid event type: {cleaned['type']}")
    if cleaned.get("visibility") is not None and cleaned["visibility"] not in (PUBLIC, PRIVATE):
        raise ValidationFailed("Visibility must be public or private")
    if cleaned.get("max_participants") is not None and cleaned["max_participants"] < 1:
        raise ValidationFailed("Max participants must be at least 1")

    start, end = cleaned.get("start_date"), cleaned.get("end_date")
    if start and end and end < start:
        raise ValidationFailed("End date must be after start date")
    return cleaned


class EventService:
    """Service for events and event registrations"""

    def __init__(self, store: Store, resolver: MembershipResolver = None):
        self.store = store
        self.resolver = resolver or MembershipResolver(store)
        self.policy = VisibilityPolicy(store, self.resolver)
        self.guard = EventRegistrationGuard(store, self.resolver)

    # Creation

    async def _insert_event(self, document: dict) -> dict:
        """Insert an event, drawing a fresh code whenever a private code clashes"""
        for _ in range(EVENT_CODE_ATTEMPTS):
            if document.get("visibility") == PRIVATE:
                document["event_code"] = generate_event_code()
            try:
                return await self.store.insert("events", document)
            except DuplicateKeyError:
                if document.get("visibility") != PRIVATE:
                    raise
                logger.debug("Event code clash, retrying")
        raise ValidationFailed("Could not allocate a unique event code")

    def _new_event(self, fields: dict, organization_id: Optional[str], caller: Caller, approval_status: str) -> dict:
        cleaned = validate_event_fields(fields)
        if not cleaned.get("title") or not cleaned.get("start_date") or not cleaned.get("registration_deadline"):
            raise ValidationFailed("Title, start date and registration deadline are required")

        now = datetime.now(timezone.utc)
        document = {
            "id": str(uuid.uuid4()),
            "organization_id": organization_id,
            "type": "other",
            "visibility": PUBLIC,
            "max_participants": None,
            **cleaned,
            "event_code": None,
            "approval_status": approval_status,
            "approval_feedback": None,
            "approved_by": None,
            "approved_at": None,
            "created_by_role": caller.role,
            "created_by_id": caller.user_id,
            "created_at": now,
            "updated_at": now,
        }
        if approval_status == APPROVED:
            document["approved_by"] = caller.user_id
            document["approved_at"] = now
        return document

    async def create_organization_event(self, caller: Caller, fields: dict) -> dict:
        """Organization events are approved on creation"""
        event = await self._insert_event(self._new_event(fields, caller.user_id, caller, APPROVED))
        logger.info("Organization %s created event %s", caller.user_id, event["id"])
        return event

    async def create_admin_event(self, caller: Caller, fields: dict) -> dict:
        """Admin events are global, public and approved"""
        fields = {**fields, "visibility": PUBLIC}
        event = await self._insert_event(self._new_event(fields, None, caller, APPROVED))
        logger.info("Admin %s created global event %s", caller.user_id, event["id"])
        return event

    async def create_student_event(self, caller: Caller, fields: dict) -> dict:
        """Student events belong to the student's organization and await its review"""
        organization_id = await self.resolver.resolve_active_organization(caller.user_id)
        if not organization_id:
            raise NotFound("Student is not associated with any organization")
        event = await self._insert_event(self._new_event(fields, organization_id, caller, PENDING))
        logger.info("Student %s submitted event %s for review", caller.user_id, event["id"])
        return event

    # Listing

    async def _with_counts(self, events: List[dict], student_id: str = None) -> List[dict]:
        results = []
        for event in events:
            item = dict(event)
            item["registered_count"] = await self.guard.registered_count(event["id"])
            if student_id:
                item["is_registered"] = await self.store.exists(
                    "event_registrations",
                    {"event_id": event["id"], "student_id": student_id, "status": REGISTERED}
                )
            results.append(item)
        return results

    async def list_events(self, caller: Caller) -> List[dict]:
        """Events visible to the caller, with registration counts"""
        scope = await self.policy.scope_for(caller, EVENTS)
        if caller.role == STUDENT:
            events = await self.store.find(
                "events", {"approval_status": APPROVED}, any_of=scope.as_any_of(), order_by="start_date"
            )
            return await self._with_counts(events, student_id=caller.user_id)

        events = await self.store.find("events", any_of=scope.as_any_of(), order_by="created_at", descending=True)
        return await self._with_counts(events)

    async def list_all_events(self) -> List[dict]:
        """Every event with organization and creator names (admin view)"""
        events = await self._with_counts(
            await self.store.find("events", order_by="created_at", descending=True)
        )
        names = {}
        for event in events:
            for key in (event.get("organization_id"), event.get("created_by_id")):
                if key and key not in names:
                    user = await self.store.get("users", key)
                    names[key] = (user.get("name") or user.get("username")) if user else None
            event["organization_name"] = names.get(event.get("organization_id")) or "Global Admin Event"
            event["created_by_name"] = names.get(event.get("created_by_id"))
            event["is_global"] = event.get("organization_id") is None
        return events

    async def upcoming_events(self, caller: Caller, limit: int = 5, now: datetime = None) -> List[dict]:
        now = now or datetime.now(timezone.utc)
        events = await self.list_events(caller)
        upcoming = [e for e in events if e.get("start_date") and as_utc(e["start_date"]) >= now]
        upcoming.sort(key=lambda e: as_utc(e["start_date"]))
        return upcoming[:limit]

    async def pending_student_events(self, caller: Caller) -> List[dict]:
        events = await self.store.find(
            "events",
            {"organization_id": caller.user_id, "created_by_role": STUDENT, "approval_status": PENDING},
            order_by="created_at",
            descending=True,
        )
        results = []
        for event in events:
            creator = await self.store.get("users", event["created_by_id"])
            results.append({
                **event,
                "created_by_name": creator.get("username") if creator else None,
                "created_by_email": creator.get("email") if creator else None,
            })
        return results

    async def registered_events(self, caller: Caller) -> List[dict]:
        registrations = await self.store.find(
            "event_registrations",
            {"student_id": caller.user_id, "status": REGISTERED},
            order_by="registered_at",
            descending=True,
        )
        events = []
        for registration in registrations:
            event = await self.store.get("events", registration["event_id"])
            if event:
                events.append({
                    **event,
                    "registration_id": registration["id"],
                    "registered_at": registration["registered_at"],
                })
        return events

    async def created_events(self, caller: Caller) -> List[dict]:
        events = await self.store.find(
            "events",
            {"created_by_id": caller.user_id, "created_by_role": STUDENT},
            order_by="created_at",
            descending=True,
        )
        return await self._with_counts(events)

    # Review and mutation

    async def get_event(self, event_id: str) -> dict:
        event = await self.store.get("events", event_id)
        if not event:
            raise NotFound("Event not found")
        return event

    async def review_student_event(self, caller: Caller, event_id: str, decision: str, feedback: str = None) -> dict:
        if decision not in (APPROVED, REJECTED):
            raise ValidationFailed("Status must be approved or rejected")

        event = await self.store.find_one(
            "events",
            {"id": event_id, "organization_id": caller.user_id, "created_by_role": STUDENT}
        )
        if not event:
            raise NotFound("Event not found")

        changes = {
            "approval_status": decision,
            "approval_feedback": feedback,
            "approved_by": caller.user_id,
            "approved_at": datetime.now(timezone.utc),
        }
        updated = await self.store.update("events", event_id, changes)
        logger.info("Organization %s %s student event %s", caller.user_id, decision, event_id)
        return updated

    async def update_event(self, caller: Caller, event_id: str, fields: dict) -> dict:
        event = await self.get_event(event_id)
        authorize_mutation(caller, event, EVENTS)

        changes = validate_event_fields(fields)
        if not changes:
            raise ValidationFailed("No updatable fields provided")

        start = changes.get("start_date", as_utc(event.get("start_date")))
        end = changes.get("end_date", as_utc(event.get("end_date")))
        if start and end and end < start:
            raise ValidationFailed("End date must be after start date")

        if event.get("organization_id") is None and changes.get("visibility") == PRIVATE:
            raise ValidationFailed("Global events must stay public")

        visibility = changes.get("visibility")
        if visibility == PUBLIC:
            changes["event_code"] = None
        elif visibility == PRIVATE and not event.get("event_code"):
            for _ in range(EVENT_CODE_ATTEMPTS):
                try:
                    return await self.store.update("events", event_id, {**changes, "event_code": generate_event_code()})
                except DuplicateKeyError:
                    logger.debug("Event code clash, retrying")
            raise ValidationFailed("Could not allocate a unique event code")

        return await self.store.update("events", event_id, changes)

    async def delete_event(self, caller: Caller, event_id: str) -> None:
        event = await self.get_event(event_id)
        authorize_mutation(caller, event, EVENTS)

        await self.store.delete("event_registrations", {"event_id": event_id})
        await self.store.delete("events", {"id": event_id})
        logger.info("%s %s deleted event %s", caller.role, caller.user_id, event_id)

    # Registration

    async def register(self, caller: Caller, event_id: str) -> dict:
        if caller.role != STUDENT:
            raise Forbidden("Only students can register for events")
        registration = await self.guard.register(event_id, caller.user_id)
        return {"registration": registration, "event": await self.get_event(event_id)}

    async def join_private_event(self, caller: Caller, event_code: str) -> dict:
        if caller.role != STUDENT:
            raise Forbidden("Only students can join events")
        registration = await self.guard.join_private_event(event_code, caller.user_id)
        return {"registration": registration, "event": await self.get_event(registration["event_id"])}

    async def register_member(self, caller: Caller, event_id: str, student_id: str) -> dict:
        if caller.role != ORGANIZATION:
            raise Forbidden("Only organizations can register their students")
        return await self.guard.register_member(event_id, student_id, caller.user_id)
