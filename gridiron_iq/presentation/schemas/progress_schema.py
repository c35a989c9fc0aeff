from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ProgressHistoryEntry(BaseModel):
    date: str
    quiz_id: int
    quiz_title: str
    score: int
    iq_level: str


class ProgressOut(BaseModel):
    id: int
    athlete_id: int
    position: str
    current_iq_level: str
    quizzes_completed: int
    quizzes_passed: int
    total_score: int
    average_score: int
    last_attempt_at: Optional[datetime] = None
    history: List[ProgressHistoryEntry] = []

    class Config:
        from_attributes = True


class ProgressSummaryOut(BaseModel):
    athlete_id: int
    overall_level: str
    quizzes_completed: int
    quizzes_passed: int
    positions: List[ProgressOut]
