#user_model.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from ..base import Base
from sqlalchemy.orm import relationship
from sqlalchemy import UniqueConstraint


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(String, nullable=False)  # "ADMIN", "COACH" or "ATHLETE"
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    athlete = relationship("AthleteModel", back_populates="user", uselist=False, cascade="all, delete-orphan")
    quizzes = relationship("QuizModel", back_populates="author")

    __table_args__ = (
        UniqueConstraint("email", name="uq_email_user"),
    )
