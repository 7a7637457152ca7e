"""
Identity Service
User lookup, creation, login and profile management
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from careernest.auth import ROLES, STUDENT, Caller, hash_password, issue_token, verify_password
from careernest.errors import Conflict, Forbidden, NotFound, Unauthorized, ValidationFailed
from careernest.repositories import DuplicateKeyError, Store
from careernest.services.membership import MembershipResolver

logger = logging.getLogger(__name__)

DASHBOARDS = {
    "admin": "/Admin_Dashboard",
    "organization": "/Organization_Dashboard",
    "student": "/Student_Dashboard",
}

DUPLICATE_MESSAGES = {
    "username": "Username already taken",
    "email": "Email already registered",
    "roll_number": "Roll number already registered",
}


def public_user(user: Optional[dict]) -> Optional[dict]:
    """User record without its password hash"""
    if user is None:
        return None
    return {key: value for key, value in user.items() if key != "password_hash"}


class IdentityService:
    """Service for user accounts"""

    def __init__(self, store: Store, resolver: MembershipResolver = None):
        self.store = store
        self.resolver = resolver or MembershipResolver(store)

    async def find_user_by_credential(self, identifier: str, role: str) -> Optional[dict]:
        """
        Look up a login identifier

        Students may sign in with username, email or roll number; the other
        roles only with their username.
        """
        if not identifier:
            return None
        if role == STUDENT:
            return await self.store.find_one(
                "users",
                {"role": STUDENT},
                any_of=[
                    {"username": identifier},
                    {"email": identifier.lower()},
                    {"roll_number": identifier},
                ],
            )
        return await self.store.find_one("users", {"username": identifier, "role": role})

    async def create_user(self, fields: dict) -> dict:
        """
        Create a user from plain fields plus a plaintext ``password``

        Raises Conflict when the username, email or roll number is taken.
        """
        role = fields.get("role")
        if role not in ROLES:
            raise ValidationFailed(f"Invalid role: {role}")
        if not fields.get("username") or not fields.get("email") or not fields.get("password"):
            raise ValidationFailed("Username, email and password are required")

        now = datetime.now(timezone.utc)
        user = {
            "id": str(uuid.uuid4()),
            "username": fields["username"].strip(),
            "email": fields["email"].strip().lower(),
            "password_hash": hash_password(fields["password"]),
            "name": fields.get("name"),
            "role": role,
            "phone": fields.get("phone"),
            "roll_number": fields.get("roll_number") or None,
            "course": fields.get("course"),
            "year": fields.get("year"),
            "is_active": fields.get("is_active", True),
            "created_at": now,
            "updated_at": now,
        }

        try:
            return await self.store.insert("users", user)
        except DuplicateKeyError as e:
            field = e.fields[0] if e.fields else None
            raise Conflict(DUPLICATE_MESSAGES.get(field, "User already exists with this username or email"))

    async def get_user(self, user_id: str) -> dict:
        user = await self.store.get("users", user_id)
        if not user:
            raise NotFound("User not found")
        return user

    async def _organization_info(self, user: dict) -> dict:
        """Soft lookup of a student's organization for login and profile responses"""
        if user.get("role") != STUDENT:
            return {}
        organization_id = await self.resolver.resolve_active_organization(user["id"])
        if not organization_id:
            return {}
        organization = await self.store.get("users", organization_id)
        return {
            "organization_id": organization_id,
            "organization_name": organization.get("name") or organization.get("username") if organization else None,
        }

    async def register(self, fields: dict) -> dict:
        """Self-registration; only students may sign themselves up"""
        if fields.get("role", STUDENT) != STUDENT:
            raise Forbidden("Only students can self-register")

        user = await self.create_user({**fields, "role": STUDENT})
        logger.info("Student registered: %s", user["username"])
        return {"token": issue_token(user), "user": public_user(user)}

    async def login(self, identifier: str, password: str, role: str) -> dict:
        user = await self.find_user_by_credential(identifier, role)
        if not user:
            raise Unauthorized("Invalid credentials or role")

        if not verify_password(password, user.get("password_hash")):
            raise Unauthorized("Invalid credentials")

        if not user.get("is_active", True):
            raise Forbidden("Account is deactivated. Contact support.")

        profile = public_user(user)
        profile.update(await self._organization_info(user))

        return {
            "token": issue_token(user),
            "redirect": DASHBOARDS.get(user["role"], "/"),
            "user": profile,
        }

    async def get_profile(self, caller: Caller) -> dict:
        user = await self.get_user(caller.user_id)
        profile = public_user(user)
        profile.update(await self._organization_info(user))
        return profile

    async def update_profile(self, caller: Caller, username: Optional[str]) -> dict:
        """Only the username can be changed"""
        username = (username or "").strip()
        if not username:
            raise ValidationFailed("No updatable fields provided")

        taken = await self.store.find_one("users", {"username": username})
        if taken and taken["id"] != caller.user_id:
            raise Conflict("Username already taken")

        try:
            user = await self.store.update("users", caller.user_id, {"username": username})
        except DuplicateKeyError:
            raise Conflict("Username already taken")
        if not user:
            raise NotFound("User not found")
        return public_user(user)
