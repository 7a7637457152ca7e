"""
Pydantic schemas for request/response validation
"""

from careernest.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    UpdateProfileRequest,
    UserResponse,
    AuthResponse,
    ProfileResponse,
)
from careernest.schemas.event import (
    CreateEventRequest,
    UpdateEventRequest,
    RegisterEventRequest,
    RegisterMemberRequest,
    JoinPrivateEventRequest,
    ReviewEventRequest,
)
from careernest.schemas.course import (
    QuizQuestion,
    CreateCourseRequest,
    UpdateCourseRequest,
    QuizAnswer,
    SubmitQuizRequest,
    VideoProgressRequest,
    QuizResultResponse,
)
from careernest.schemas.organization import (
    OrganizationRegistrationRequest,
    AddStudentRequest,
    LinkStudentRequest,
    CreateAnnouncementRequest,
    StudentCredential,
    CredentialsReportRequest,
)
from careernest.schemas.admin import (
    ApproveOrganizationRequest,
    RejectOrganizationRequest,
    UpdateOrganizationRequest,
    ChangePasswordRequest,
    AdminDashboardStats,
    AdminDashboardResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UpdateProfileRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    "CreateEventRequest",
    "UpdateEventRequest",
    "RegisterEventRequest",
    "RegisterMemberRequest",
    "JoinPrivateEventRequest",
    "ReviewEventRequest",
    "QuizQuestion",
    "CreateCourseRequest",
    "UpdateCourseRequest",
    "QuizAnswer",
    "SubmitQuizRequest",
    "VideoProgressRequest",
    "QuizResultResponse",
    "OrganizationRegistrationRequest",
    "AddStudentRequest",
    "LinkStudentRequest",
    "CreateAnnouncementRequest",
    "StudentCredential",
    "CredentialsReportRequest",
    "ApproveOrganizationRequest",
    "RejectOrganizationRequest",
    "UpdateOrganizationRequest",
    "ChangePasswordRequest",
    "AdminDashboardStats",
    "AdminDashboardResponse",
]
