"""
Course Progress
Enrollment, video progress, quiz scoring and completion for students
"""

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import List, NamedTuple, Optional, Tuple

from careernest.auth.caller import Caller, STUDENT
from careernest.errors import Forbidden, NotFound
from careernest.repositories import DuplicateKeyError, Store
from careernest.services.visibility import COURSES, VisibilityPolicy

logger = logging.getLogger(__name__)

PASSING_SCORE = 70
FULL_PROGRESS = 100


class QuizResult(NamedTuple):
    score: float
    max_score: float
    percentage: float

    @property
    def passed(self) -> bool:
        return self.percentage >= PASSING_SCORE


def clamp_percentage(value) -> float:
    """Clamp any numeric input into [0, 100]; missing or non-finite values count as 0"""
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, min(100.0, number))


def quiz_questions(course: dict) -> list:
    questions = course.get("quiz_data")
    return questions if isinstance(questions, list) else []


def has_quiz(course: dict) -> bool:
    return len(quiz_questions(course)) > 0


def score_quiz(questions: List[dict], answers: List[dict]) -> QuizResult:
    """
    Score answers against a quiz definition

    Each answer names its question by the question's ``id``, or by position
    when the question has no id.
    A question is worth ``points`` (default 1) when the answer equals its
    ``correct_answer`` exactly. A quiz worth nothing scores 0%.
    """
    by_key = {}
    for answer in answers or []:
        if isinstance(answer, dict) and "question_id" in answer:
            by_key.setdefault(answer["question_id"], answer.get("answer"))

    score = 0.0
    max_score = 0.0
    for index, question in enumerate(questions or []):
        points = question.get("points") or 1
        max_score += points
        key = question.get("id")
        if key is None:
            key = index
        if key not in by_key:
            continue
        given = by_key[key]
        if given is not None and given == question.get("correct_answer"):
            score += points

    percentage = (score / max_score) * 100 if max_score > 0 else 0.0
    return QuizResult(score=score, max_score=max_score, percentage=percentage)


def meets_completion(enrollment: dict, course: dict) -> bool:
    """Full video progress, plus a passing quiz when the course has one"""
    if (enrollment.get("progress") or 0) < FULL_PROGRESS:
        return False
    if has_quiz(course):
        return (enrollment.get("quiz_score") or 0) >= PASSING_SCORE
    return True


def completion_changes(enrollment: dict, course: dict, now: datetime) -> dict:
    """Fields to set when the enrollment has just become complete"""
    if enrollment.get("completed"):
        return {}
    if meets_completion(enrollment, course):
        return {"completed": True, "completion_date": now}
    return {}


def new_enrollment(course_id: str, student_id: str, now: datetime) -> dict:
    return {
        "id": str(uuid.uuid4()),
        "course_id": course_id,
        "student_id": student_id,
        "enrolled_at": now,
        "progress": 0,
        "quiz_score": None,
        "completed": False,
        "completion_date": None,
    }


class CourseProgressService:
    """NotEnrolled -> Enrolled -> Completed, per student and course"""

    def __init__(self, store: Store, policy: VisibilityPolicy = None):
        self.store = store
        self.policy = policy or VisibilityPolicy(store)

    async def _visible_course(self, caller: Caller, course_id: str) -> dict:
        if caller.role != STUDENT:
            raise Forbidden("Only students can take courses")

        course = await self.store.find_one("courses", {"id": course_id, "is_active": True})
        if not course or not await self.policy.is_visible(caller, COURSES, course):
            raise NotFound("Course not found")
        return course

    async def get_enrollment(self, course_id: str, student_id: str) -> Optional[dict]:
        return await self.store.find_one(
            "course_enrollments",
            {"course_id": course_id, "student_id": student_id}
        )

    async def _ensure_enrollment(self, course_id: str, student_id: str, now: datetime) -> Tuple[dict, bool]:
        existing = await self.get_enrollment(course_id, student_id)
        if existing:
            return existing, False
        try:
            created = await self.store.insert("course_enrollments", new_enrollment(course_id, student_id, now))
        except DuplicateKeyError:
            # A concurrent request enrolled first
            return await self.get_enrollment(course_id, student_id), False
        return created, True

    async def enroll(self, caller: Caller, course_id: str, now: datetime = None) -> Tuple[dict, bool]:
        """
        Enroll the calling student

        Returns (enrollment, created). Enrolling twice is a successful no-op.
        """
        now = now or datetime.now(timezone.utc)
        await self._visible_course(caller, course_id)
        enrollment, created = await self._ensure_enrollment(course_id, caller.user_id, now)
        if created:
            logger.info("Student %s enrolled in course %s", caller.user_id, course_id)
        return enrollment, created

    async def update_video_progress(self, caller: Caller, course_id: str, percentage, now: datetime = None) -> dict:
        """Record watch progress, keeping the highest value seen"""
        now = now or datetime.now(timezone.utc)
        course = await self._visible_course(caller, course_id)
        enrollment, _ = await self._ensure_enrollment(course_id, caller.user_id, now)

        progress = max(enrollment.get("progress") or 0, clamp_percentage(percentage))
        changes = {"progress": progress}
        changes.update(completion_changes({**enrollment, **changes}, course, now))

        return await self.store.update("course_enrollments", enrollment["id"], changes)

    async def submit_quiz(self, caller: Caller, course_id: str, answers: list, now: datetime = None) -> Tuple[QuizResult, dict]:
        """Score a quiz attempt, keeping the best score seen"""
        now = now or datetime.now(timezone.utc)
        course = await self._visible_course(caller, course_id)
        questions = quiz_questions(course)
        if not questions:
            raise NotFound("No quiz questions found for this course")

        result = score_quiz(questions, answers)
        enrollment, _ = await self._ensure_enrollment(course_id, caller.user_id, now)

        best = max(enrollment.get("quiz_score") or 0, result.percentage)
        changes = {"quiz_score": best}
        changes.update(completion_changes({**enrollment, **changes}, course, now))

        updated = await self.store.update("course_enrollments", enrollment["id"], changes)
        logger.info(
            "Quiz submitted: student=%s course=%s percentage=%.2f completed=%s",
            caller.user_id, course_id, result.percentage, updated.get("completed")
        )
        return result, updated
