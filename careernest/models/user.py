"""
User Model
Students, organizations and admins share one identity table
"""

from sqlalchemy import Column, String, Boolean, DateTime, func
from careernest.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, index=True)  # 'student', 'organization' or 'admin'
    phone = Column(String(20), nullable=True)

    # Student fields
    roll_number = Column(String(50), unique=True, nullable=True)
    course = Column(String(100), nullable=True)
    year = Column(String(20), nullable=True)

    # Status
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
