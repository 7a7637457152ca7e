"""
Organization Service
Registration requests, dashboards and student roster management
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from careernest.auth import STUDENT, Caller, generate_random_password
from careernest.errors import Conflict, DomainError, NotFound, ValidationFailed
from careernest.repositories import Store
from careernest.services.announcement_service import AnnouncementService
from careernest.services.credentials_report import build_credentials_pdf
from careernest.services.event_service import EventService
from careernest.services.identity_service import IdentityService
from careernest.services.membership import ACTIVE, MembershipResolver
from careernest.services.visibility import STUDENTS, scope_filter

logger = logging.getLogger(__name__)

PENDING = "pending"


class OrganizationService:
    """Service for organization-facing operations"""

    def __init__(self, store: Store, resolver: MembershipResolver = None):
        self.store = store
        self.resolver = resolver or MembershipResolver(store)
        self.identity = IdentityService(store, self.resolver)
        self.events = EventService(store, self.resolver)
        self.announcements = AnnouncementService(store, self.events.policy)

    async def submit_request(self, fields: dict) -> dict:
        """Public registration request; an admin approves or rejects it later"""
        email = (fields.get("email") or "").strip().lower()
        if not email or not (fields.get("organization_name") or "").strip():
            raise ValidationFailed("Organization name and email are required")

        if await self.store.exists("users", {"email": email}):
            raise Conflict("An organization with this email already exists")
        if await self.store.exists("organization_requests", {"email": email, "status": PENDING}):
            raise Conflict("A registration request with this email is already pending approval")

        request = {
            "id": str(uuid.uuid4()),
            "organization_name": fields["organization_name"].strip(),
            "contact_person": fields.get("contact_person"),
            "email": email,
            "phone": fields.get("phone") or "",
            "address": fields.get("address") or "",
            "description": fields.get("description"),
            "status": PENDING,
            "requested_at": datetime.now(timezone.utc),
            "reviewed_by": None,
            "reviewed_at": None,
            "rejection_reason": None,
            "username": None,
            "generated_password": None,
        }
        created = await self.store.insert("organization_requests", request)
        logger.info("Organization request submitted: %s", email)
        return created

    async def dashboard(self, caller: Caller) -> dict:
        organization_id = caller.user_id
        return {
            "total_students": await self.store.count(
                "organization_students", {"organization_id": organization_id, "status": ACTIVE}
            ),
            "total_events": await self.store.count("events", {"organization_id": organization_id}),
            "total_announcements": await self.store.count("announcements", {"organization_id": organization_id}),
            "upcoming_events": await self.events.upcoming_events(caller),
            "recent_announcements": await self.announcements.list_announcements(caller, limit=5),
        }

    # Roster

    async def list_students(self, caller: Caller) -> List[dict]:
        """Active members, joined with their user records"""
        scope = scope_filter(caller, STUDENTS)
        memberships = await self.store.find(
            "organization_students",
            {"status": ACTIVE},
            any_of=scope.as_any_of(),
            order_by="joined_date",
            descending=True,
        )
        students = []
        for membership in memberships:
            student = await self.store.get("users", membership["student_id"])
            if not student:
                continue
            students.append({
                "id": student["id"],
                "username": student["username"],
                "email": student["email"],
                "name": student.get("name"),
                "roll_number": student.get("roll_number"),
                "course": student.get("course"),
                "year": student.get("year"),
                "is_active": student.get("is_active", True),
                "organization_id": membership["organization_id"],
                "joined_at": membership.get("joined_date"),
            })
        return students

    async def _link(self, organization_id: str, student: dict) -> dict:
        active = await self.resolver.get_active_membership(student["id"])
        if active and active["organization_id"] != organization_id:
            raise Conflict("Student already belongs to another organization")
        if await self.store.exists(
            "organization_students", {"organization_id": organization_id, "student_id": student["id"]}
        ):
            raise Conflict("Student is already linked to your organization")

        membership = {
            "id": str(uuid.uuid4()),
            "organization_id": organization_id,
            "student_id": student["id"],
            "roll_number": student.get("roll_number"),
            "course": student.get("course"),
            "year": student.get("year"),
            "status": ACTIVE,
            "joined_date": datetime.now(timezone.utc),
        }
        return await self.store.insert("organization_students", membership)

    async def add_student(self, caller: Caller, fields: dict) -> dict:
        """
        Create a student account and make it an active member

        The username defaults to the roll number, then to the email's local
        part. Returns the student with its temporary password.
        """
        email = (fields.get("email") or "").strip().lower()
        if not email or not (fields.get("name") or "").strip():
            raise ValidationFailed("Name and email are required")

        username = (fields.get("username") or "").strip() or fields.get("roll_number") or email.split("@")[0]
        temporary_password = generate_random_password()

        student = await self.identity.create_user({
            "username": username,
            "email": email,
            "name": fields["name"].strip(),
            "password": temporary_password,
            "role": STUDENT,
            "roll_number": fields.get("roll_number") or None,
            "course": fields.get("course"),
            "year": fields.get("year"),
        })
        try:
            await self._link(caller.user_id, student)
        except Exception:
            await self.store.delete("users", {"id": student["id"]})
            raise

        logger.info("Organization %s added student %s", caller.user_id, student["id"])
        return {
            "id": student["id"],
            "username": student["username"],
            "email": student["email"],
            "name": student["name"],
            "roll_number": student.get("roll_number"),
            "course": student.get("course"),
            "year": student.get("year"),
            "temporary_password": temporary_password,
        }

    async def add_students_bulk(self, caller: Caller, rows: List[dict]) -> dict:
        """Add each row independently; one bad row never blocks the others"""
        if not rows:
            raise ValidationFailed("Students list is required and must not be empty")

        successful, failed = [], []
        seen_rolls = set()
        for position, row in enumerate(rows, start=1):
            row_number = row.get("row", position)
            roll = row.get("roll_number")
            if roll and roll in seen_rolls:
                failed.append({**row, "row": row_number, "reason": f"Duplicate roll number {roll} found in file"})
                continue
            if roll:
                seen_rolls.add(roll)
            try:
                successful.append(await self.add_student(caller, row))
            except DomainError as e:
                failed.append({**row, "row": row_number, "reason": e.message})

        logger.info(
            "Bulk upload for organization %s: %d successful, %d failed",
            caller.user_id, len(successful), len(failed)
        )
        return {"successful": successful, "failed": failed}

    async def link_student_by_email(self, caller: Caller, email: str) -> dict:
        student = await self.store.find_one("users", {"email": (email or "").strip().lower(), "role": STUDENT})
        if not student:
            raise NotFound("Student not found with this email")
        await self._link(caller.user_id, student)
        logger.info("Organization %s linked student %s", caller.user_id, student["id"])
        return {
            "id": student["id"],
            "username": student["username"],
            "email": student["email"],
            "name": student.get("name"),
        }

    async def _remove_orphan(self, student_id: str) -> bool:
        """Delete a student account once no organization references it"""
        if await self.store.exists("organization_students", {"student_id": student_id}):
            return False
        await self.store.delete("event_registrations", {"student_id": student_id})
        await self.store.delete("course_enrollments", {"student_id": student_id})
        await self.store.delete("users", {"id": student_id, "role": STUDENT})
        return True

    async def delete_student(self, caller: Caller, student_id: str) -> None:
        removed = await self.store.delete(
            "organization_students", {"organization_id": caller.user_id, "student_id": student_id}
        )
        if not removed:
            raise NotFound("Student not found in your organization")
        await self._remove_orphan(student_id)
        logger.info("Organization %s removed student %s", caller.user_id, student_id)

    async def delete_all_students(self, caller: Caller) -> int:
        memberships = await self.store.find("organization_students", {"organization_id": caller.user_id})
        await self.store.delete("organization_students", {"organization_id": caller.user_id})
        for membership in memberships:
            await self._remove_orphan(membership["student_id"])
        logger.info("Organization %s removed all %d students", caller.user_id, len(memberships))
        return len(memberships)

    async def credentials_report(self, caller: Caller, credentials: List[dict]) -> bytes:
        """PDF listing the credentials handed out in a bulk upload"""
        organization = await self.store.get("users", caller.user_id)
        name = (organization.get("name") or organization.get("username")) if organization else None
        return build_credentials_pdf(credentials, name or "Organization")
