"""
Course Service
Course catalogue management and the student-facing course views
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from careernest.auth import ADMIN, ORGANIZATION, STUDENT, Caller
from careernest.errors import Forbidden, NotFound, ValidationFailed
from careernest.repositories import Store
from careernest.services.course_progress import quiz_questions
from careernest.services.visibility import COURSES, VisibilityPolicy, authorize_mutation

logger = logging.getLogger(__name__)

LEVELS = ("beginner", "intermediate", "advanced")
COURSE_FIELDS = (
    "title", "description", "instructor", "duration", "level", "category",
    "thumbnail", "video_url", "materials", "quiz_data",
)


def normalize_quiz(questions) -> Optional[list]:
    """Validate quiz questions and keep only the known keys"""
    if questions is None:
        return None
    if not isinstance(questions, list):
        raise ValidationFailed("Quiz questions must be a list")

    normalized = []
    for position, question in enumerate(questions, start=1):
        if not isinstance(question, dict) or not str(question.get("question") or "").strip():
            raise ValidationFailed(f"Quiz question {position} has no text")
        if question.get("correct_answer") is None:
            raise ValidationFailed(f"Quiz question {position} has no correct answer")
        item = {
            "question": question["question"],
            "options": list(question.get("options") or []),
            "correct_answer": question["correct_answer"],
            "points": question.get("points") or 1,
        }
        if question.get("id") is not None:
            item["id"] = question["id"]
        normalized.append(item)
    return normalized


def clean_course_fields(fields: dict) -> dict:
    cleaned = {key: fields[key] for key in COURSE_FIELDS if key in fields}
    if "level" in cleaned:
        cleaned["level"] = str(cleaned["level"] or "beginner").lower()
        if cleaned["level"] not in LEVELS:
            raise ValidationFailed(f"Level must be one of: {', '.join(LEVELS)}")
    if "category" in cleaned and not str(cleaned["category"] or "").strip():
        cleaned["category"] = "General"
    if "quiz_data" in cleaned:
        cleaned["quiz_data"] = normalize_quiz(cleaned["quiz_data"])
    return cleaned


def student_view(course: dict) -> dict:
    """Course as shown to students: quiz answers are withheld"""
    view = dict(course)
    view["quiz_questions"] = [
        {key: value for key, value in question.items() if key != "correct_answer"}
        for question in quiz_questions(course)
    ]
    view.pop("quiz_data", None)
    return view


def enrollment_fields(enrollment: Optional[dict]) -> dict:
    if not enrollment:
        return {"is_enrolled": False}
    return {
        "is_enrolled": True,
        "is_completed": bool(enrollment.get("completed")),
        "quiz_score": enrollment.get("quiz_score"),
        "video_watch_percentage": enrollment.get("progress") or 0,
        "completion_date": enrollment.get("completion_date"),
    }


class CourseService:
    """Service for course catalogue operations"""

    def __init__(self, store: Store, policy: VisibilityPolicy = None):
        self.store = store
        self.policy = policy or VisibilityPolicy(store)

    async def _user_names(self, ids) -> dict:
        names = {}
        for user_id in ids:
            if user_id and user_id not in names:
                user = await self.store.get("users", user_id)
                names[user_id] = (user.get("name") or user.get("username")) if user else None
        return names

    async def list_courses(self, caller: Caller) -> List[dict]:
        """Active courses visible to the caller; students also get their enrollment state"""
        scope = await self.policy.scope_for(caller, COURSES)
        courses = await self.store.find(
            "courses", {"is_active": True}, any_of=scope.as_any_of(), order_by="created_at", descending=True
        )
        names = await self._user_names(
            [c.get("created_by_id") for c in courses] + [c.get("organization_id") for c in courses]
        )

        enrollments = {}
        if caller.role == STUDENT:
            for enrollment in await self.store.find("course_enrollments", {"student_id": caller.user_id}):
                enrollments[enrollment["course_id"]] = enrollment

        results = []
        for course in courses:
            item = student_view(course) if caller.role == STUDENT else dict(course)
            item["created_by_name"] = names.get(course.get("created_by_id"))
            item["organization_name"] = names.get(course.get("organization_id"))
            if caller.role == STUDENT:
                item.update(enrollment_fields(enrollments.get(course["id"])))
            results.append(item)
        return results

    async def _active_course(self, course_id: str) -> dict:
        course = await self.store.find_one("courses", {"id": course_id, "is_active": True})
        if not course:
            raise NotFound("Course not found")
        return course

    async def get_course(self, caller: Caller, course_id: str) -> dict:
        course = await self._active_course(course_id)
        if not await self.policy.is_visible(caller, COURSES, course):
            raise NotFound("Course not found")

        names = await self._user_names([course.get("created_by_id")])
        if caller.role == STUDENT:
            details = student_view(course)
            enrollment = await self.store.find_one(
                "course_enrollments", {"course_id": course_id, "student_id": caller.user_id}
            )
            details.update(enrollment_fields(enrollment))
        else:
            details = dict(course)
            details["quiz_questions"] = quiz_questions(course)
        details["created_by_name"] = names.get(course.get("created_by_id"))
        return details

    async def create_course(self, caller: Caller, fields: dict) -> dict:
        if caller.role not in (ADMIN, ORGANIZATION):
            raise Forbidden("Only admins and organizations can create courses")

        cleaned = clean_course_fields(fields)
        if not str(cleaned.get("title") or "").strip() or not str(cleaned.get("description") or "").strip():
            raise ValidationFailed("Title and description are required")

        now = datetime.now(timezone.utc)
        course = {
            "id": str(uuid.uuid4()),
            "instructor": caller.username or "Anonymous",
            "duration": "Self-paced",
            "level": "beginner",
            "category": "General",
            "thumbnail": None,
            "video_url": None,
            "materials": None,
            "quiz_data": None,
            **{key: value for key, value in cleaned.items() if value is not None},
            "organization_id": caller.user_id if caller.role == ORGANIZATION else None,
            "created_by_id": caller.user_id,
            "created_by_role": caller.role,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }
        created = await self.store.insert("courses", course)
        logger.info("%s %s created course %s", caller.role, caller.user_id, created["id"])
        return created

    async def update_course(self, caller: Caller, course_id: str, fields: dict) -> dict:
        course = await self._active_course(course_id)
        authorize_mutation(caller, course, COURSES)

        changes = clean_course_fields(fields)
        # Blank values keep the existing ones for required columns
        for key in ("instructor", "duration", "video_url"):
            if key in changes and not changes[key]:
                changes.pop(key)
        if not changes:
            raise ValidationFailed("No updatable fields provided")
        return await self.store.update("courses", course_id, changes)

    async def delete_course(self, caller: Caller, course_id: str) -> None:
        """Soft delete: the course disappears from every listing"""
        course = await self._active_course(course_id)
        authorize_mutation(caller, course, COURSES)
        await self.store.update("courses", course_id, {"is_active": False})
        logger.info("%s %s deleted course %s", caller.role, caller.user_id, course_id)
