from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class AnswerSubmission(BaseModel):
    question_id: int
    selected_option_id: str
    time_spent: Optional[int] = Field(default=None, ge=0)


class CompleteAttemptRequest(BaseModel):
    answers: List[AnswerSubmission] = []
    time_spent: int = Field(ge=0)  # seconds


class AnswerOut(BaseModel):
    question_id: int
    selected_option_id: str
    is_correct: bool
    time_spent: Optional[int] = None


class AttemptOut(BaseModel):
    id: int
    athlete_id: int
    quiz_id: int
    status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    score: Optional[int] = None
    time_spent: Optional[int] = None
    iq_level: Optional[str] = None
    is_passed: Optional[bool] = None
    answers: List[AnswerOut] = []

    class Config:
        from_attributes = True


class AttemptListItemOut(AttemptOut):
    quiz_title: str
    quiz_position: Optional[str] = None
    quiz_difficulty: Optional[str] = None


class AttemptQuizInfo(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    position: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    passing_score: Optional[int] = None


class ReviewedQuestionOut(BaseModel):
    id: int
    question_text: str
    question_type: str
    options: List[dict]
    points: int
    image_url: Optional[str] = None
    selected_option_id: Optional[str] = None
    is_correct: bool = False
    time_spent: Optional[int] = None


class AttemptDetailOut(AttemptOut):
    quiz: Optional[AttemptQuizInfo] = None
    questions: List[ReviewedQuestionOut] = []


class SweepResponse(BaseModel):
    abandoned: int
