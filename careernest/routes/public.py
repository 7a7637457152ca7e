"""
Public Routes
Organization registration requests (no authentication)
"""

from fastapi import APIRouter, Depends, status

from careernest.dependencies import get_organization_service
from careernest.schemas.organization import OrganizationRegistrationRequest
from careernest.services.organization_service import OrganizationService

router = APIRouter()


@router.post("/register-request", status_code=status.HTTP_201_CREATED)
async def submit_registration_request(
    request: OrganizationRegistrationRequest,
    organizations: OrganizationService = Depends(get_organization_service)
):
    """Request an organization account; credentials are emailed once an admin approves"""
    created = await organizations.submit_request(request.model_dump())
    return {
        "success": True,
        "message": "Registration request submitted successfully. You will receive credentials via email once approved.",
        "data": {
            "id": created["id"],
            "organization_name": created["organization_name"],
            "email": created["email"],
            "status": created["status"],
        }
    }
