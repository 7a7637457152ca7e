"""
Course Routes
Course catalogue, enrollment, quiz and progress endpoints
"""

from fastapi import APIRouter, Depends, status

from careernest.auth import ADMIN, ORGANIZATION, Caller, get_current_user, get_student, require_roles
from careernest.dependencies import get_course_progress_service, get_course_service
from careernest.schemas.course import (
    CreateCourseRequest,
    QuizResultResponse,
    SubmitQuizRequest,
    UpdateCourseRequest,
    VideoProgressRequest,
)
from careernest.services.course_progress import CourseProgressService
from careernest.services.course_service import CourseService

router = APIRouter()

get_course_author = require_roles(ADMIN, ORGANIZATION)


@router.get("/")
async def list_courses(
    current_user: Caller = Depends(get_current_user),
    courses: CourseService = Depends(get_course_service)
):
    """Courses visible to the caller; students also get their enrollment state"""
    return {"success": True, "data": await courses.list_courses(current_user)}


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_course(
    request: CreateCourseRequest,
    current_user: Caller = Depends(get_course_author),
    courses: CourseService = Depends(get_course_service)
):
    course = await courses.create_course(current_user, request.model_dump(exclude_none=True))
    return {"success": True, "message": "Course created successfully", "data": course}


@router.get("/{course_id}")
async def get_course(
    course_id: str,
    current_user: Caller = Depends(get_current_user),
    courses: CourseService = Depends(get_course_service)
):
    return {"success": True, "data": await courses.get_course(current_user, course_id)}


@router.post("/{course_id}/enroll")
async def enroll(
    course_id: str,
    current_student: Caller = Depends(get_student),
    progress: CourseProgressService = Depends(get_course_progress_service)
):
    """Enrolling twice is not an error"""
    enrollment, created = await progress.enroll(current_student, course_id)
    message = "Successfully enrolled in course" if created else "Already enrolled in this course"
    return {"success": True, "message": message, "already_enrolled": not created, "data": enrollment}


@router.post("/{course_id}/quiz", response_model=QuizResultResponse)
async def submit_quiz(
    course_id: str,
    request: SubmitQuizRequest,
    current_student: Caller = Depends(get_student),
    progress: CourseProgressService = Depends(get_course_progress_service)
):
    """Score a quiz attempt; the best score counts towards completion"""
    answers = [answer.model_dump() for answer in request.answers]
    result, enrollment = await progress.submit_quiz(current_student, course_id, answers)
    return QuizResultResponse(
        score=result.score,
        max_score=result.max_score,
        percentage=round(result.percentage, 2),
        passed=result.passed,
        quiz_score=enrollment.get("quiz_score"),
        progress=enrollment.get("progress") or 0,
        completed=bool(enrollment.get("completed")),
    )


@router.post("/{course_id}/progress")
async def update_progress(
    course_id: str,
    request: VideoProgressRequest,
    current_student: Caller = Depends(get_student),
    progress: CourseProgressService = Depends(get_course_progress_service)
):
    enrollment = await progress.update_video_progress(current_student, course_id, request.percentage)
    return {
        "success": True,
        "message": "Progress updated",
        "data": {
            "progress": enrollment.get("progress"),
            "completed": bool(enrollment.get("completed")),
            "completion_date": enrollment.get("completion_date"),
        }
    }


@router.put("/{course_id}")
async def update_course(
    course_id: str,
    request: UpdateCourseRequest,
    current_user: Caller = Depends(get_course_author),
    courses: CourseService = Depends(get_course_service)
):
    course = await courses.update_course(current_user, course_id, request.model_dump(exclude_unset=True))
    return {"success": True, "message": "Course updated successfully", "data": course}


@router.delete("/{course_id}")
async def delete_course(
    course_id: str,
    current_user: Caller = Depends(get_course_author),
    courses: CourseService = Depends(get_course_service)
):
    """Soft delete"""
    await courses.delete_course(current_user, course_id)
    return {"success": True, "message": "Course deleted successfully"}
