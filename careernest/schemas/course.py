"""
Course Request/Response Models
"""

from typing import List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

Level = Literal["beginner", "intermediate", "advanced", "Beginner", "Intermediate", "Advanced"]


class QuizQuestion(BaseModel):
    id: Optional[Union[int, str]] = None
    question: str = Field(..., min_length=1)
    options: List[str] = []
    correct_answer: str = Field(..., validation_alias=AliasChoices("correct_answer", "correctAnswer"))
    points: Optional[float] = Field(None, gt=0)


class CreateCourseRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    instructor: Optional[str] = Field(None, max_length=255)
    duration: Optional[str] = Field(None, max_length=100)
    level: Optional[Level] = Field(None, validation_alias=AliasChoices("level", "difficulty_level"))
    category: Optional[str] = Field(None, max_length=100)
    thumbnail: Optional[str] = None
    video_url: Optional[str] = Field(None, validation_alias=AliasChoices("video_url", "youtube_url", "videoUrl"))
    materials: Optional[str] = None
    quiz_data: Optional[List[QuizQuestion]] = Field(
        None, validation_alias=AliasChoices("quiz_data", "quiz_questions", "quizData")
    )


class UpdateCourseRequest(CreateCourseRequest):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)


class QuizAnswer(BaseModel):
    """An answer names its question by the question's id, or by position when it has none"""
    question_id: Union[int, str] = Field(..., validation_alias=AliasChoices("question_id", "questionId"))
    answer: Optional[str] = None


class SubmitQuizRequest(BaseModel):
    answers: List[QuizAnswer]


class VideoProgressRequest(BaseModel):
    percentage: float = Field(
        ..., allow_inf_nan=False, validation_alias=AliasChoices("percentage", "watchPercentage", "progress")
    )


class QuizResultResponse(BaseModel):
    success: bool = True
    score: float
    max_score: float
    percentage: float
    passed: bool
    quiz_score: Optional[float] = None
    progress: float
    completed: bool
