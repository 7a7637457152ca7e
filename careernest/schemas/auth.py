"""
Auth Request/Response Models
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Student self-registration"""
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: Optional[str] = Field(None, max_length=255)
    role: Literal["student"] = "student"
    roll_number: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=100)
    year: Optional[str] = Field(None, max_length=20)


class LoginRequest(BaseModel):
    """Students may use username, email or roll number as the identifier"""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    role: Literal["student", "organization", "admin"]


class UpdateProfileRequest(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50)


class UserResponse(BaseModel):
    """User details without credentials"""
    id: str
    username: str
    email: str
    name: Optional[str] = None
    role: str
    phone: Optional[str] = None
    roll_number: Optional[str] = None
    course: Optional[str] = None
    year: Optional[str] = None
    is_active: bool = True
    organization_id: Optional[str] = None
    organization_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    redirect: Optional[str] = None
    user: UserResponse


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserResponse
