"""
Authentication Routes
Registration, login and profile endpoints
"""

from fastapi import APIRouter, Depends, status

from careernest.auth import Caller, get_current_user
from careernest.dependencies import get_identity_service
from careernest.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UpdateProfileRequest,
)
from careernest.services.identity_service import IdentityService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    identity: IdentityService = Depends(get_identity_service)
):
    """
    Student self-registration

    Organizations join through a registration request; the admin account is
    created with scripts/create_admin.py.
    """
    result = await identity.register(request.model_dump())
    return AuthResponse(message="User registered successfully", **result)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    identity: IdentityService = Depends(get_identity_service)
):
    """
    Login for every role

    - **username**: username (students may also use email or roll number)
    - **password**: account password
    - **role**: student, organization or admin
    """
    result = await identity.login(credentials.username, credentials.password, credentials.role)
    return AuthResponse(message=f"Login successful as {credentials.role}", **result)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: Caller = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service)
):
    return ProfileResponse(user=await identity.get_profile(current_user))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: Caller = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service)
):
    """Change the caller's username"""
    return ProfileResponse(user=await identity.update_profile(current_user, request.username))


@router.post("/logout")
async def logout():
    """
    Logout endpoint (client should delete token)
    """
    return {
        "success": True,
        "message": "Logged out successfully"
    }
