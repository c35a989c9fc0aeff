from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from ..base import Base
from gridiron_iq.domain.enums import IqLevel


class ProgressModel(Base):
    __tablename__ = "football_iq_progress"

    id = Column(Integer, primary_key=True, index=True)
    athlete_id = Column(Integer, ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(String, nullable=False)
    current_iq_level = Column(String, nullable=False, default=IqLevel.ROOKIE.value)  # level of the running average
    quizzes_completed = Column(Integer, nullable=False, default=0)
    quizzes_passed = Column(Integer, nullable=False, default=0)
    total_score = Column(Integer, nullable=False, default=0)
    average_score = Column(Integer, nullable=False, default=0)
    last_attempt_at = Column(DateTime(timezone=True), nullable=True)
    # Newest first, capped: [{"date", "quiz_id", "quiz_title", "score", "iq_level"}]
    history = Column(JSON, nullable=False, default=list)

    athlete = relationship("AthleteModel", back_populates="progress")

    __table_args__ = (
        UniqueConstraint("athlete_id", "position", name="uq_progress_athlete_position"),
    )
