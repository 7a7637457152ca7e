"""
Student Routes
Dashboard, announcements and event registration for students
"""

from fastapi import APIRouter, Depends, status

from careernest.auth import Caller, get_student
from careernest.dependencies import get_student_service
from careernest.schemas.event import CreateEventRequest, JoinPrivateEventRequest, RegisterEventRequest
from careernest.services.student_service import StudentService

router = APIRouter()


@router.get("/dashboard")
async def get_dashboard(
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    """Requires an active organization membership"""
    return {"success": True, "data": await students.dashboard(current_student)}


@router.get("/announcements")
async def list_announcements(
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    return {"success": True, "data": await students.announcements.list_announcements(current_student)}


@router.get("/membership")
async def get_membership(
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    return {"success": True, "data": await students.membership(current_student)}


@router.get("/events")
async def list_events(
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    """Approved events from the student's organization plus global admin events"""
    return {"success": True, "data": await students.events.list_events(current_student)}


@router.get("/registered-events")
async def list_registered_events(
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    return {"success": True, "data": await students.events.registered_events(current_student)}


@router.get("/created-events")
async def list_created_events(
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    return {"success": True, "data": await students.events.created_events(current_student)}


@router.post("/create-event", status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    """Submit an event to the student's organization for review"""
    event = await students.events.create_student_event(current_student, request.model_dump())
    return {"success": True, "message": "Event created successfully and sent for approval", "data": event}


@router.post("/join-private-event", status_code=status.HTTP_201_CREATED)
async def join_private_event(
    request: JoinPrivateEventRequest,
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    result = await students.events.join_private_event(current_student, request.event_code)
    return {"success": True, "message": "Successfully joined private event", "data": result}


@router.post("/register-event", status_code=status.HTTP_201_CREATED)
async def register_for_event(
    request: RegisterEventRequest,
    current_student: Caller = Depends(get_student),
    students: StudentService = Depends(get_student_service)
):
    result = await students.events.register(current_student, request.event_id)
    return {"success": True, "message": "Successfully registered for event", "data": result}
