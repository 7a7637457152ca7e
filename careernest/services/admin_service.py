"""
Admin Service
Platform oversight: organization approval, global content and user management
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List

from careernest.auth import (
    ADMIN,
    ORGANIZATION,
    STUDENT,
    AdjectiveNounCredentialGenerator,
    Caller,
    CredentialGenerator,
    hash_password,
)
from careernest.errors import Conflict, Forbidden, NotFound, ValidationFailed
from careernest.repositories import DuplicateKeyError, Store
from careernest.services.announcement_service import AnnouncementService
from careernest.services.email_service import email_service
from careernest.services.event_service import EventService
from careernest.services.identity_service import IdentityService, public_user
from careernest.services.membership import ACTIVE, MembershipResolver
from careernest.services.registration_guard import REGISTERED

logger = logging.getLogger(__name__)

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"

USERNAME_ATTEMPTS = 5

# Fire-and-forget email tasks stay referenced here until they finish
pending_notifications = set()


class AdminService:
    """Service for admin operations"""

    def __init__(
        self,
        store: Store,
        generator: CredentialGenerator = None,
        notifier=None,
        resolver: MembershipResolver = None,
    ):
        self.store = store
        self.generator = generator or AdjectiveNounCredentialGenerator()
        self.notifier = notifier or email_service
        self.resolver = resolver or MembershipResolver(store)
        self.identity = IdentityService(store, self.resolver)
        self.events = EventService(store, self.resolver)
        self.announcements = AnnouncementService(store, self.events.policy)
        self.notifications = pending_notifications

    async def dashboard(self) -> dict:
        return {
            "total_organizations": await self.store.count("users", {"role": ORGANIZATION}),
            "total_students": await self.store.count("users", {"role": STUDENT}),
            "total_events": await self.store.count("events"),
            "total_announcements": await self.store.count("announcements"),
            "pending_requests": await self.store.count("organization_requests", {"status": PENDING}),
        }

    async def _organization_counts(self, organization_id: str) -> dict:
        return {
            "student_count": await self.store.count(
                "organization_students", {"organization_id": organization_id, "status": ACTIVE}
            ),
            "event_count": await self.store.count("events", {"organization_id": organization_id}),
            "announcement_count": await self.store.count("announcements", {"organization_id": organization_id}),
        }

    async def list_organizations(self) -> List[dict]:
        organizations = await self.store.find(
            "users", {"role": ORGANIZATION}, order_by="created_at", descending=True
        )
        results = []
        for organization in organizations:
            item = public_user(organization)
            item.update(await self._organization_counts(organization["id"]))
            results.append(item)
        return results

    async def pending_requests(self) -> List[dict]:
        return await self.store.find(
            "organization_requests", {"status": PENDING}, order_by="requested_at", descending=True
        )

    # Approval

    async def _create_organization_user(self, request: dict) -> tuple:
        """Create the organization account, drawing new credentials on a username clash"""
        for _ in range(USERNAME_ATTEMPTS):
            credentials = self.generator.generate()
            if await self.store.exists("users", {"username": credentials.username}):
                continue
            user = await self.identity.create_user({
                "username": credentials.username,
                "email": request["email"],
                "name": request["organization_name"],
                "phone": request.get("phone"),
                "password": credentials.password,
                "role": ORGANIZATION,
            })
            return user, credentials
        raise Conflict("Could not generate a unique username")

    async def _send_credentials(self, to: str, organization_name: str, username: str, password: str) -> None:
        try:
            sent = await self.notifier.send_credentials_email(to, organization_name, username, password)
        except Exception as e:
            logger.warning("Failed to send credentials email to %s: %s", to, e)
            return
        if not sent:
            logger.warning("Credentials email to %s was not delivered", to)

    def _notify(self, *args) -> None:
        task = asyncio.create_task(self._send_credentials(*args))
        self.notifications.add(task)
        task.add_done_callback(self.notifications.discard)

    async def approve_organization(self, caller: Caller, request_id: str) -> dict:
        """
        Approve a pending request

        Creates the organization account with generated credentials, records
        them on the request and emails them in the background. An email
        failure never fails the approval.
        """
        request = await self.store.find_one("organization_requests", {"id": request_id, "status": PENDING})
        if not request:
            raise NotFound("Organization request not found or already processed")

        organization, credentials = await self._create_organization_user(request)

        await self.store.update("organization_requests", request_id, {
            "status": APPROVED,
            "reviewed_by": caller.user_id,
            "reviewed_at": datetime.now(timezone.utc),
            "username": credentials.username,
            "generated_password": credentials.password,
        })
        logger.info("Organization request %s approved as %s", request_id, credentials.username)

        self._notify(request["email"], request["organization_name"], credentials.username, credentials.password)

        return {
            "organization_id": organization["id"],
            "organization_name": request["organization_name"],
            "username": credentials.username,
            "password": credentials.password,
            "email": request["email"],
        }

    async def reject_organization(self, caller: Caller, request_id: str, reason: str = None) -> dict:
        request = await self.store.get("organization_requests", request_id)
        if not request:
            raise NotFound("Organization request not found")
        if request["status"] != PENDING:
            raise Conflict("Organization request has already been processed")

        updated = await self.store.update("organization_requests", request_id, {
            "status": REJECTED,
            "reviewed_by": caller.user_id,
            "reviewed_at": datetime.now(timezone.utc),
            "rejection_reason": reason or "No reason provided",
        })
        logger.info("Organization request %s rejected", request_id)
        return updated

    # Users

    async def list_students(self) -> List[dict]:
        students = await self.store.find("users", {"role": STUDENT}, order_by="created_at", descending=True)
        results = []
        for student in students:
            membership = await self.store.find_one(
                "organization_students", {"student_id": student["id"]}, order_by="joined_date", descending=True
            )
            organization = await self.store.get("users", membership["organization_id"]) if membership else None
            item = public_user(student)
            item.update({
                "organization_id": membership["organization_id"] if membership else None,
                "organization_name": (organization.get("name") or organization.get("username")) if organization else None,
                "membership_status": membership["status"] if membership else None,
                "events_count": await self.store.count("event_registrations", {"student_id": student["id"]}),
            })
            results.append(item)
        return results

    async def _get_organization(self, organization_id: str) -> dict:
        organization = await self.store.get("users", organization_id)
        if not organization:
            raise NotFound("Organization not found")
        if organization["role"] != ORGANIZATION:
            raise ValidationFailed("User is not an organization")
        return organization

    async def organization_details(self, organization_id: str) -> dict:
        organization = await self._get_organization(organization_id)

        memberships = await self.store.find(
            "organization_students",
            {"organization_id": organization_id, "status": ACTIVE},
            order_by="joined_date",
            descending=True,
            limit=10,
        )
        recent_students = []
        for membership in memberships:
            student = await self.store.get("users", membership["student_id"])
            if student:
                recent_students.append({
                    "id": student["id"],
                    "name": student.get("name"),
                    "email": student["email"],
                    "roll_number": student.get("roll_number"),
                    "course": student.get("course"),
                    "year": student.get("year"),
                    "joined_at": membership.get("joined_date"),
                })

        return {
            "organization": public_user(organization),
            "stats": await self._organization_counts(organization_id),
            "recent_students": recent_students,
            "recent_events": await self.store.find(
                "events", {"organization_id": organization_id}, order_by="created_at", descending=True, limit=10
            ),
            "recent_announcements": await self.store.find(
                "announcements", {"organization_id": organization_id}, order_by="created_at", descending=True, limit=10
            ),
        }

    async def update_organization(self, organization_id: str, fields: dict) -> dict:
        organization = await self._get_organization(organization_id)

        changes = {}
        if fields.get("name"):
            changes["name"] = fields["name"]
        if fields.get("phone"):
            changes["phone"] = fields["phone"]
        email = (fields.get("email") or "").strip().lower()
        if email and email != organization["email"]:
            if await self.store.exists("users", {"email": email}):
                raise Conflict("Email already in use")
            changes["email"] = email
        if not changes:
            return public_user(organization)

        try:
            updated = await self.store.update("users", organization_id, changes)
        except DuplicateKeyError:
            raise Conflict("Email already in use")
        return public_user(updated)

    async def user_details(self, user_id: str) -> dict:
        user = public_user(await self.identity.get_user(user_id))

        if user["role"] == ORGANIZATION:
            user.update(await self._organization_counts(user_id))
        elif user["role"] == STUDENT:
            organization = None
            organization_id = await self.resolver.resolve_active_organization(user_id)
            if organization_id:
                record = await self.store.get("users", organization_id)
                if record:
                    organization = {
                        "id": record["id"],
                        "name": record.get("name") or record.get("username"),
                        "email": record["email"],
                    }
            user["organization"] = organization
            user["registered_events"] = await self.store.count(
                "event_registrations", {"student_id": user_id, "status": REGISTERED}
            )
            user["enrolled_courses"] = await self.store.count("course_enrollments", {"student_id": user_id})
        return user

    async def change_password(self, user_id: str, new_password: str) -> dict:
        if not new_password or len(new_password) < 6:
            raise ValidationFailed("Password must be at least 6 characters")
        await self.identity.get_user(user_id)
        updated = await self.store.update("users", user_id, {"password_hash": hash_password(new_password)})
        logger.info("Password changed for user %s", user_id)
        return {"user_id": updated["id"], "username": updated["username"], "email": updated["email"]}

    async def toggle_status(self, user_id: str) -> dict:
        user = await self.identity.get_user(user_id)
        if user["role"] == ADMIN:
            raise Forbidden("Cannot deactivate admin users")

        is_active = not user.get("is_active", True)
        await self.store.update("users", user_id, {"is_active": is_active})
        logger.info("User %s %s", user_id, "activated" if is_active else "deactivated")
        return {"user_id": user_id, "username": user["username"], "is_active": is_active}
