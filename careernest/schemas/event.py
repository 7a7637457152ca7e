"""
Event Request Models
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

EventType = Literal["hackathon", "quiz", "coding", "workshop", "seminar", "conference", "other"]


class CreateEventRequest(BaseModel):
    """New event; private events receive a join code"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: EventType = "other"
    start_date: datetime
    end_date: Optional[datetime] = None
    registration_deadline: datetime
    venue: Optional[str] = Field(None, max_length=255)
    max_participants: Optional[int] = Field(None, ge=1)
    requirements: Optional[str] = None
    prizes: Optional[str] = None
    visibility: Literal["public", "private"] = "public"

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class UpdateEventRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[EventType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    venue: Optional[str] = Field(None, max_length=255)
    max_participants: Optional[int] = Field(None, ge=1)
    requirements: Optional[str] = None
    prizes: Optional[str] = None
    visibility: Optional[Literal["public", "private"]] = None


class RegisterEventRequest(BaseModel):
    event_id: str


class RegisterMemberRequest(BaseModel):
    event_id: str
    student_id: str


class JoinPrivateEventRequest(BaseModel):
    event_code: str = Field(..., min_length=1, max_length=20)


class ReviewEventRequest(BaseModel):
    event_id: str
    status: Literal["approved", "rejected"]
    feedback: Optional[str] = None
