"""
Organization Membership Model
Links a student account to an organization account
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from careernest.database import Base


class OrganizationStudent(Base):
    __tablename__ = "organization_students"
    __table_args__ = (
        UniqueConstraint("organization_id", "student_id", name="uq_organization_student"),
    )

    id = Column(String(36), primary_key=True)
    organization_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Snapshot of academic details at join time
    roll_number = Column(String(50), nullable=True)
    course = Column(String(100), nullable=True)
    year = Column(String(20), nullable=True)

    status = Column(String(20), default="active", index=True)  # 'active', 'inactive' or 'graduated'
    joined_date = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    organization = relationship("User", foreign_keys=[organization_id])
    student = relationship("User", foreign_keys=[student_id])
