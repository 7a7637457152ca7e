"""
Organization Request Models
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class OrganizationRegistrationRequest(BaseModel):
    """Public request to join the platform as an organization"""
    organization_name: str = Field(..., min_length=1, max_length=255)
    contact_person: Optional[str] = Field(None, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    description: Optional[str] = None


class AddStudentRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    roll_number: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=100)
    year: Optional[str] = Field(None, max_length=20)


class LinkStudentRequest(BaseModel):
    email: EmailStr


class CreateAnnouncementRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    priority: Literal["low", "normal", "high", "urgent"] = "normal"


class StudentCredential(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    roll_number: Optional[str] = None
    password: Optional[str] = None
    course: Optional[str] = None
    year: Optional[str] = None


class CredentialsReportRequest(BaseModel):
    credentials: List[StudentCredential] = Field(..., min_length=1)
