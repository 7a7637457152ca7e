"""
Admin Routes
Platform administration: organization approval, global content and users
"""

from fastapi import APIRouter, Depends, status

from careernest.auth import Caller, get_admin
from careernest.dependencies import get_admin_service
from careernest.schemas.admin import (
    AdminDashboardResponse,
    ApproveOrganizationRequest,
    ChangePasswordRequest,
    RejectOrganizationRequest,
    UpdateOrganizationRequest,
)
from careernest.schemas.event import CreateEventRequest
from careernest.schemas.organization import CreateAnnouncementRequest
from careernest.services.admin_service import AdminService

router = APIRouter()


@router.get("/dashboard", response_model=AdminDashboardResponse)
async def get_dashboard(
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    """Platform-wide counts"""
    return AdminDashboardResponse(stats=await admin.dashboard())


@router.get("/organizations")
async def list_organizations(
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    return {"success": True, "data": await admin.list_organizations()}


@router.get("/pending-organizations")
async def list_pending_organizations(
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    return {"success": True, "data": await admin.pending_requests()}


@router.post("/approve-organization")
async def approve_organization(
    request: ApproveOrganizationRequest,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    """
    Approve a pending organization request

    Generates credentials, creates the organization account and emails the
    credentials in the background.
    """
    result = await admin.approve_organization(current_admin, request.request_id)
    return {"success": True, "message": "Organization approved successfully", "data": result}


@router.post("/reject-organization")
async def reject_organization(
    request: RejectOrganizationRequest,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    await admin.reject_organization(current_admin, request.request_id, request.reason)
    return {"success": True, "message": "Organization request rejected successfully"}


@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_global_event(
    request: CreateEventRequest,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    """Create a public event visible to every organization and student"""
    event = await admin.events.create_admin_event(current_admin, request.model_dump())
    return {"success": True, "message": "Global admin event created successfully", "data": event}


@router.get("/events")
async def list_all_events(
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    return {"success": True, "data": await admin.events.list_all_events()}


@router.post("/announcements", status_code=status.HTTP_201_CREATED)
async def create_global_announcement(
    request: CreateAnnouncementRequest,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    announcement = await admin.announcements.create_announcement(
        current_admin, request.title, request.content, request.priority
    )
    return {"success": True, "message": "Announcement created successfully", "data": announcement}


@router.get("/students")
async def list_all_students(
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    return {"success": True, "data": await admin.list_students()}


@router.get("/organizations/{organization_id}")
async def get_organization_details(
    organization_id: str,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    return {"success": True, "data": await admin.organization_details(organization_id)}


@router.put("/organizations/{organization_id}")
async def update_organization_details(
    organization_id: str,
    request: UpdateOrganizationRequest,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    organization = await admin.update_organization(organization_id, request.model_dump(exclude_none=True))
    return {"success": True, "message": "Organization details updated successfully", "data": organization}


@router.get("/users/{user_id}")
async def get_user_details(
    user_id: str,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    return {"success": True, "data": await admin.user_details(user_id)}


@router.put("/users/{user_id}/password")
async def change_user_password(
    user_id: str,
    request: ChangePasswordRequest,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    result = await admin.change_password(user_id, request.new_password)
    return {"success": True, "message": "Password changed successfully", "data": result}


@router.put("/users/{user_id}/toggle-status")
async def toggle_user_status(
    user_id: str,
    current_admin: Caller = Depends(get_admin),
    admin: AdminService = Depends(get_admin_service)
):
    result = await admin.toggle_status(user_id)
    state = "activated" if result["is_active"] else "deactivated"
    return {"success": True, "message": f"User {state} successfully", "data": result}
