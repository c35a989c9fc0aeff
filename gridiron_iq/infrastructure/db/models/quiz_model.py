from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class QuizModel(Base):
    __tablename__ = "football_iq_quizzes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")
    position = Column(String, nullable=True, index=True)  # NULL applies to every position
    difficulty = Column(String, nullable=False)
    category = Column(String, nullable=False)
    time_limit = Column(Integer, nullable=True)  # seconds
    passing_score = Column(Integer, nullable=False, default=70)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    questions = relationship(
        "QuestionModel",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="QuestionModel.order_index",
    )
    attempts = relationship("QuizAttemptModel", back_populates="quiz", cascade="all, delete-orphan")
    author = relationship("UserModel", back_populates="quizzes")
