from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from sqlalchemy.orm import relationship
from ..base import Base


class QuestionModel(Base):
    __tablename__ = "football_iq_questions"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("football_iq_quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    question_text = Column(String(500), nullable=False)
    question_type = Column(String, nullable=False)
    # [{"id": "a", "text": "...", "is_correct": true, "explanation": "..."}]
    options = Column(JSON, nullable=False, default=list)
    points = Column(Integer, nullable=False, default=1)
    image_url = Column(String, nullable=True)
    diagram_data = Column(JSON, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    # Relationships
    quiz = relationship("QuizModel", back_populates="questions")
