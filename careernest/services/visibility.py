"""
Visibility Policy
Decides which records a caller may see, and which ones it may change
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from careernest.auth.caller import ADMIN, ORGANIZATION, STUDENT, Caller
from careernest.errors import Forbidden
from careernest.repositories import Store
from careernest.services.membership import MembershipResolver

EVENTS = "events"
COURSES = "courses"
ANNOUNCEMENTS = "announcements"
STUDENTS = "students"

RESOURCE_CLASSES = (EVENTS, COURSES, ANNOUNCEMENTS, STUDENTS)
OWNED_RESOURCES = (EVENTS, COURSES)


@dataclass(frozen=True)
class ScopeFilter:
    """
    OR-ed equality clauses a record must satisfy

    ``clauses is None`` means unrestricted. An empty tuple matches nothing.
    """
    clauses: Optional[Tuple[Dict[str, object], ...]] = None

    @property
    def unrestricted(self) -> bool:
        return self.clauses is None

    def matches(self, record: dict) -> bool:
        if self.clauses is None:
            return True
        return any(
            all(record.get(key) == value for key, value in clause.items())
            for clause in self.clauses
        )

    def as_any_of(self) -> Optional[List[Dict[str, object]]]:
        """Clauses in the shape Store.find(any_of=...) expects"""
        if self.clauses is None:
            return None
        return [dict(clause) for clause in self.clauses]


UNRESTRICTED = ScopeFilter()


def is_global(resource: dict) -> bool:
    """Admin-authored content with no owning organization"""
    return resource.get("organization_id") is None and resource.get("created_by_role") == ADMIN


def scope_filter(caller: Caller, resource_class: str, active_org_id: Optional[str] = None) -> ScopeFilter:
    """
    Build the filter restricting ``resource_class`` to what ``caller`` may see

    ``active_org_id`` is the student's resolved organization; None means the
    student belongs nowhere and only admin content remains visible.
    """
    if resource_class not in RESOURCE_CLASSES:
        raise ValueError(f"Unknown resource class: {resource_class}")

    if caller.role == ADMIN:
        return UNRESTRICTED

    if resource_class == STUDENTS:
        if caller.role == ORGANIZATION:
            return ScopeFilter(({"organization_id": caller.user_id},))
        raise Forbidden("Students cannot list other students")

    admin_content = {"created_by_role": ADMIN}

    if caller.role == ORGANIZATION:
        return ScopeFilter((admin_content, {"organization_id": caller.user_id}))

    if caller.role == STUDENT:
        if active_org_id is None:
            return ScopeFilter((admin_content,))
        return ScopeFilter((admin_content, {"organization_id": active_org_id}))

    return ScopeFilter(())


def owns(caller: Caller, resource: dict, resource_class: str) -> bool:
    """True if the caller is the organization owning the resource"""
    if caller.role != ORGANIZATION:
        return False
    if resource.get("organization_id") == caller.user_id:
        return True
    return (
        resource_class == COURSES
        and resource.get("created_by_role") == ORGANIZATION
        and resource.get("created_by_id") == caller.user_id
    )


def can_mutate(caller: Caller, resource: dict, resource_class: str) -> bool:
    """
    Update/delete rule for owned resources

    Admins may change anything; organizations what they own; a student only
    its own event while that event is still awaiting review.
    """
    if resource_class not in OWNED_RESOURCES:
        raise ValueError(f"{resource_class} is not an owned resource class")

    if caller.role == ADMIN:
        return True
    if owns(caller, resource, resource_class):
        return True
    return (
        resource_class == EVENTS
        and caller.role == STUDENT
        and resource.get("created_by_role") == STUDENT
        and resource.get("created_by_id") == caller.user_id
        and resource.get("approval_status") == "pending"
    )


def authorize_mutation(caller: Caller, resource: dict, resource_class: str) -> None:
    """Raise Forbidden unless can_mutate allows the change"""
    if not can_mutate(caller, resource, resource_class):
        noun = resource_class.rstrip("s")
        raise Forbidden(f"Not authorized to modify this {noun}")


class VisibilityPolicy:
    """Scope builder that resolves student organizations through the store"""

    def __init__(self, store: Store, resolver: MembershipResolver = None):
        self.store = store
        self.resolver = resolver or MembershipResolver(store)

    async def scope_for(self, caller: Caller, resource_class: str) -> ScopeFilter:
        active_org_id = None
        if caller.role == STUDENT:
            active_org_id = await self.resolver.resolve_active_organization(caller.user_id)
        return scope_filter(caller, resource_class, active_org_id)

    async def is_visible(self, caller: Caller, resource_class: str, record: dict) -> bool:
        scope = await self.scope_for(caller, resource_class)
        return scope.matches(record)
