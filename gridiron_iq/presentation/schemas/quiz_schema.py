from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional
from gridiron_iq.domain.enums import FootballPosition, QuizCategory, QuizDifficulty


class QuizCreate(BaseModel):
    title: str = Field(min_length=3, max_length=100)
    description: str = Field(default="", max_length=500)
    position: Optional[FootballPosition] = None  # None applies to all positions
    difficulty: QuizDifficulty
    category: QuizCategory
    time_limit: Optional[int] = Field(default=None, ge=1)
    passing_score: int = Field(default=70, ge=0, le=100)
    is_active: bool = True


class QuizUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    position: Optional[FootballPosition] = None
    difficulty: Optional[QuizDifficulty] = None
    category: Optional[QuizCategory] = None
    time_limit: Optional[int] = Field(default=None, ge=1)
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)
    is_active: Optional[bool] = None


class QuizOut(BaseModel):
    id: int
    title: str
    description: str
    position: Optional[str] = None
    difficulty: str
    category: str
    time_limit: Optional[int] = None
    passing_score: int
    is_active: bool
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuizSummaryOut(QuizOut):
    question_count: int = 0
