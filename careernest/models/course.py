"""
Course Models
Video courses with optional quizzes, and per-student enrollments
"""

from sqlalchemy import Column, String, Float, Boolean, Text, JSON, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from careernest.database import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True)
    organization_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    # Course info
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    instructor = Column(String(255), nullable=False)
    duration = Column(String(100), nullable=False)
    level = Column(String(20), nullable=False)  # 'beginner', 'intermediate' or 'advanced'
    category = Column(String(100), nullable=False)
    thumbnail = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)
    materials = Column(Text, nullable=True)

    # Ordered list of {question, options, correct_answer, points}
    quiz_data = Column(JSON, nullable=True)

    # Authorship
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_by_role = Column(String(20), nullable=False)

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class CourseEnrollment(Base):
    __tablename__ = "course_enrollments"
    __table_args__ = (
        UniqueConstraint("course_id", "student_id", name="uq_course_enrollment"),
    )

    id = Column(String(36), primary_key=True)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    enrolled_at = Column(DateTime(timezone=True), server_default=func.now())

    # Progress signals
    progress = Column(Float, default=0)
    quiz_score = Column(Float, nullable=True)

    completed = Column(Boolean, default=False, index=True)
    completion_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    course = relationship("Course", backref="enrollments")
