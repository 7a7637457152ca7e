"""
Database Models
Import all models here for Alembic migrations
"""

from careernest.models.user import User
from careernest.models.membership import OrganizationStudent
from careernest.models.event import Event, EventRegistration
from careernest.models.course import Course, CourseEnrollment
from careernest.models.announcement import Announcement
from careernest.models.organization_request import OrganizationRequest

__all__ = [
    "User",
    "OrganizationStudent",
    "Event",
    "EventRegistration",
    "Course",
    "CourseEnrollment",
    "Announcement",
    "OrganizationRequest",
]
