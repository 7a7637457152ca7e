"""
Event Routes
Update and delete for any event the caller may modify
"""

from fastapi import APIRouter, Depends

from careernest.auth import Caller, get_current_user
from careernest.dependencies import get_event_service
from careernest.schemas.event import UpdateEventRequest
from careernest.services.event_service import EventService

router = APIRouter()


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    current_user: Caller = Depends(get_current_user),
    events: EventService = Depends(get_event_service)
):
    """Admins, the owning organization, or the student author while the event is pending"""
    event = await events.update_event(current_user, event_id, request.model_dump(exclude_unset=True))
    return {"success": True, "message": "Event updated successfully", "data": event}


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    current_user: Caller = Depends(get_current_user),
    events: EventService = Depends(get_event_service)
):
    await events.delete_event(current_user, event_id)
    return {"success": True, "message": "Event deleted successfully"}
