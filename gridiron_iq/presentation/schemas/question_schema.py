# question_schema.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from gridiron_iq.domain.enums import QuestionType
from .quiz_schema import QuizOut


class OptionCreate(BaseModel):
    id: str = Field(min_length=1)
    text: str
    is_correct: bool
    explanation: Optional[str] = None


class OptionForTakingOut(BaseModel):
    id: str
    text: str


class QuestionCreate(BaseModel):
    question_text: str = Field(min_length=3, max_length=500)
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: List[OptionCreate] = Field(min_length=2)
    points: int = Field(default=1, ge=1)
    image_url: Optional[str] = None
    diagram_data: Optional[Any] = None
    order_index: int = 0  # 0 appends after the existing questions


class QuestionUpdate(BaseModel):
    question_text: Optional[str] = Field(default=None, min_length=3, max_length=500)
    question_type: Optional[QuestionType] = None
    options: Optional[List[OptionCreate]] = Field(default=None, min_length=2)
    points: Optional[int] = Field(default=None, ge=1)
    image_url: Optional[str] = None
    diagram_data: Optional[Any] = None
    order_index: Optional[int] = None


class QuestionOut(BaseModel):
    id: int
    quiz_id: int
    question_text: str
    question_type: str
    options: List[OptionCreate]  # Coaches see everything
    points: int
    image_url: Optional[str] = None
    diagram_data: Optional[Any] = None
    order_index: int

    class Config:
        from_attributes = True


class QuestionForTakingOut(BaseModel):
    id: int
    quiz_id: int
    question_text: str
    question_type: str
    options: List[OptionForTakingOut]
    points: int
    image_url: Optional[str] = None
    diagram_data: Optional[Any] = None
    order_index: int

    class Config:
        from_attributes = True


class QuizDetailOut(QuizOut):
    questions: List[QuestionOut] = []


class QuizForTakingOut(QuizOut):
    # Correct answers stripped
    questions: List[QuestionForTakingOut] = []

