from sqlalchemy import Column, Integer, ForeignKey, DateTime, Boolean, String, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base
from gridiron_iq.domain.enums import AttemptStatus


class QuizAttemptModel(Base):
    __tablename__ = "football_iq_quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)
    athlete_id = Column(Integer, ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("football_iq_quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String, nullable=False, default=AttemptStatus.STARTED.value)
    started_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    score = Column(Integer, nullable=True)  # 0-100
    time_spent = Column(Integer, nullable=True)  # seconds
    iq_level = Column(String, nullable=True)  # level of this attempt's score alone
    is_passed = Column(Boolean, nullable=True)
    # [{"question_id": 1, "selected_option_id": "a", "is_correct": true, "time_spent": 12}]
    answers = Column(JSON, nullable=False, default=list)

    # Relationships
    athlete = relationship("AthleteModel", back_populates="attempts")
    quiz = relationship("QuizModel", back_populates="attempts")
