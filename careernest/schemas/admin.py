"""
Admin Request/Response Models
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ApproveOrganizationRequest(BaseModel):
    request_id: str


class RejectOrganizationRequest(BaseModel):
    request_id: str
    reason: Optional[str] = Field(None, max_length=1000)


class UpdateOrganizationRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)


class ChangePasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=6, max_length=128)


class AdminDashboardStats(BaseModel):
    total_organizations: int
    total_students: int
    total_events: int
    total_announcements: int
    pending_requests: int


class AdminDashboardResponse(BaseModel):
    success: bool = True
    stats: AdminDashboardStats
