"""
Announcement Model
"""

from sqlalchemy import Column, String, Boolean, Text, DateTime, ForeignKey, func
from careernest.database import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(String(36), primary_key=True)
    organization_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    priority = Column(String(10), default="normal", index=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_by_role = Column(String(20), nullable=False)
    author = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
