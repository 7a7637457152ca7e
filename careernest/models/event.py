"""
Event Models
Events and student registrations
"""

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from careernest.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True)
    organization_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    # Event info
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    registration_deadline = Column(DateTime(timezone=True), nullable=False)
    venue = Column(String(255), nullable=True)
    max_participants = Column(Integer, nullable=True)
    requirements = Column(Text, nullable=True)
    prizes = Column(Text, nullable=True)

    # Access
    visibility = Column(String(10), default="public")  # 'public' or 'private'
    event_code = Column(String(20), unique=True, nullable=True)

    # Review
    approval_status = Column(String(20), default="approved", index=True)
    approval_feedback = Column(Text, nullable=True)
    approved_by = Column(String(36), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)

    # Authorship
    created_by_role = Column(String(20), nullable=False)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    organization = relationship("User", foreign_keys=[organization_id])
    creator = relationship("User", foreign_keys=[created_by_id])


class EventRegistration(Base):
    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "student_id", name="uq_event_registration"),
    )

    id = Column(String(36), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), default="registered", index=True)  # 'registered', 'attended' or 'cancelled'
    registered_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    event = relationship("Event", backref="registrations")
