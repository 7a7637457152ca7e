"""
Organization Request Model
Public sign-up requests reviewed by an admin
"""

from sqlalchemy import Column, String, Text, DateTime, func
from careernest.database import Base


class OrganizationRequest(Base):
    __tablename__ = "organization_requests"

    id = Column(String(36), primary_key=True)
    organization_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    # Review
    status = Column(String(20), default="pending", index=True)
    requested_at = Column(DateTime(timezone=True), server_default=func.now())
    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)

    # Generated on approval
    username = Column(String(50), nullable=True)
    generated_password = Column(String(255), nullable=True)
