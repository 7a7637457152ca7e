"""
Student Service
Student dashboard and membership views
"""

from careernest.auth import Caller
from careernest.errors import NotFound
from careernest.repositories import Store
from careernest.services.announcement_service import AnnouncementService
from careernest.services.event_service import EventService
from careernest.services.membership import MembershipResolver


class StudentService:
    """Read-side views composed for the student dashboard"""

    def __init__(self, store: Store, resolver: MembershipResolver = None):
        self.store = store
        self.resolver = resolver or MembershipResolver(store)
        self.events = EventService(store, self.resolver)
        self.announcements = AnnouncementService(store, self.events.policy)

    async def _organization(self, organization_id: str) -> dict:
        organization = await self.store.get("users", organization_id)
        if not organization:
            return {"id": organization_id, "name": None, "email": None}
        return {
            "id": organization["id"],
            "name": organization.get("name") or organization.get("username"),
            "email": organization["email"],
        }

    async def dashboard(self, caller: Caller) -> dict:
        organization_id = await self.resolver.resolve_active_organization(caller.user_id)
        if not organization_id:
            raise NotFound("Student is not associated with any organization")

        registered = await self.events.registered_events(caller)
        return {
            "organization": await self._organization(organization_id),
            "upcoming_events": await self.events.upcoming_events(caller),
            "registered_events": registered[:5],
            "announcements": await self.announcements.list_announcements(caller, limit=5),
        }

    async def membership(self, caller: Caller) -> dict:
        membership = await self.resolver.get_active_membership(caller.user_id)
        if not membership:
            raise NotFound("No membership found")

        organization = await self._organization(membership["organization_id"])
        return {
            **membership,
            "organization_name": organization["name"],
            "organization_email": organization["email"],
            "joined_at": membership.get("joined_date"),
        }
