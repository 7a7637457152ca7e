"""
Service Dependencies
FastAPI providers wiring each service to the shared store
"""

from fastapi import Depends

from careernest.repositories import Store, get_store
from careernest.services.admin_service import AdminService
from careernest.services.announcement_service import AnnouncementService
from careernest.services.course_progress import CourseProgressService
from careernest.services.course_service import CourseService
from careernest.services.event_service import EventService
from careernest.services.identity_service import IdentityService
from careernest.services.organization_service import OrganizationService
from careernest.services.student_service import StudentService


def get_identity_service(store: Store = Depends(get_store)) -> IdentityService:
    return IdentityService(store)


def get_event_service(store: Store = Depends(get_store)) -> EventService:
    return EventService(store)


def get_announcement_service(store: Store = Depends(get_store)) -> AnnouncementService:
    return AnnouncementService(store)


def get_course_service(store: Store = Depends(get_store)) -> CourseService:
    return CourseService(store)


def get_course_progress_service(store: Store = Depends(get_store)) -> CourseProgressService:
    return CourseProgressService(store)


def get_organization_service(store: Store = Depends(get_store)) -> OrganizationService:
    return OrganizationService(store)


def get_student_service(store: Store = Depends(get_store)) -> StudentService:
    return StudentService(store)


def get_admin_service(store: Store = Depends(get_store)) -> AdminService:
    return AdminService(store)
