"""
Organization Routes
Dashboard, roster, announcements and events for organization accounts
"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from careernest.auth import Caller, get_organization
from careernest.config import settings
from careernest.dependencies import get_organization_service
from careernest.errors import ValidationFailed
from careernest.schemas.event import CreateEventRequest, RegisterMemberRequest, ReviewEventRequest
from careernest.schemas.organization import (
    AddStudentRequest,
    CreateAnnouncementRequest,
    CredentialsReportRequest,
    LinkStudentRequest,
)
from careernest.services.import_parser import StudentImportParser
from careernest.services.organization_service import OrganizationService

router = APIRouter()


@router.get("/dashboard")
async def get_dashboard(
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    return {"success": True, "data": await organizations.dashboard(current_org)}


@router.get("/students")
async def list_students(
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    students = await organizations.list_students(current_org)
    return {"success": True, "data": students, "count": len(students)}


@router.get("/announcements")
async def list_announcements(
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    """Own announcements plus global admin announcements"""
    return {"success": True, "data": await organizations.announcements.list_announcements(current_org)}


@router.post("/announcements", status_code=status.HTTP_201_CREATED)
async def create_announcement(
    request: CreateAnnouncementRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    announcement = await organizations.announcements.create_announcement(
        current_org, request.title, request.content, request.priority
    )
    return {"success": True, "message": "Announcement created successfully", "data": announcement}


@router.get("/events")
async def list_events(
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    """Own events plus global admin events, with registration counts"""
    return {"success": True, "data": await organizations.events.list_events(current_org)}


@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    event = await organizations.events.create_organization_event(current_org, request.model_dump())
    return {"success": True, "message": "Event created successfully", "data": event}


@router.post("/register-event", status_code=status.HTTP_201_CREATED)
async def register_student_for_event(
    request: RegisterMemberRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    """Register one of the organization's active students for an event"""
    registration = await organizations.events.register_member(current_org, request.event_id, request.student_id)
    return {"success": True, "message": "Student registered for event successfully", "data": registration}


@router.get("/pending-student-events")
async def list_pending_student_events(
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    return {"success": True, "data": await organizations.events.pending_student_events(current_org)}


@router.post("/review-student-event")
async def review_student_event(
    request: ReviewEventRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    event = await organizations.events.review_student_event(
        current_org, request.event_id, request.status, request.feedback
    )
    return {"success": True, "message": f"Event {request.status} successfully", "data": event}


@router.post("/add-student", status_code=status.HTTP_201_CREATED)
async def add_student(
    request: AddStudentRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    """Create a student account with a temporary password and add it to the roster"""
    student = await organizations.add_student(current_org, request.model_dump())
    return {"success": True, "message": "Student added successfully", "data": student}


@router.post("/add-students-bulk", status_code=status.HTTP_201_CREATED)
async def add_students_bulk(
    file: UploadFile = File(...),
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    """
    Bulk-add students from a CSV or XLSX upload

    Columns are matched by name: Name, Email, Roll Number, Course, Year.
    Each row succeeds or fails on its own.
    """
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailed("File is too large")

    rows = StudentImportParser.parse(file.filename, content)
    results = await organizations.add_students_bulk(current_org, rows)
    return {
        "success": True,
        "message": (
            f"Bulk upload completed: {len(results['successful'])} successful, "
            f"{len(results['failed'])} failed"
        ),
        "data": results
    }


@router.post("/credentials-report")
async def download_credentials_report(
    request: CredentialsReportRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    """PDF of student credentials handed out in a bulk upload"""
    pdf_bytes = await organizations.credentials_report(
        current_org, [credential.model_dump() for credential in request.credentials]
    )
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="student-credentials.pdf"'}
    )


@router.post("/link-existing-student-by-email")
async def link_existing_student(
    request: LinkStudentRequest,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    student = await organizations.link_student_by_email(current_org, request.email)
    return {"success": True, "message": "Student linked successfully", "data": student}


@router.delete("/delete-student/{student_id}")
async def delete_student(
    student_id: str,
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    await organizations.delete_student(current_org, student_id)
    return {"success": True, "message": "Student removed successfully"}


@router.delete("/delete-all-students")
async def delete_all_students(
    current_org: Caller = Depends(get_organization),
    organizations: OrganizationService = Depends(get_organization_service)
):
    removed = await organizations.delete_all_students(current_org)
    return {"success": True, "message": f"All students removed successfully ({removed} students)"}
