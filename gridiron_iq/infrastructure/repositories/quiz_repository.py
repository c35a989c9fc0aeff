from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from ..db.models.quiz_model import QuizModel
import logging

logger = logging.getLogger(__name__)


class QuizRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, quiz_id: int) -> Optional[QuizModel]:
        return self.db.query(QuizModel).filter(QuizModel.id == quiz_id).first()

    def list(
        self,
        position: Optional[str] = None,
        difficulty: Optional[str] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        created_by: Optional[int] = None,
    ) -> List[QuizModel]:
        query = self.db.query(QuizModel)
        if position:
            query = query.filter(QuizModel.position == position)
        if difficulty:
            query = query.filter(QuizModel.difficulty == difficulty)
        if category:
            query = query.filter(QuizModel.category == category)
        if is_active is not None:
            query = query.filter(QuizModel.is_active == is_active)
        if created_by is not None:
            query = query.filter(QuizModel.created_by == created_by)
        quizzes = query.order_by(QuizModel.id).all()
        logger.info(f"Retrieved {len(quizzes)} quizzes")
        return quizzes

    def create(self, data: Dict, created_by: int) -> QuizModel:
        try:
            quiz = QuizModel(**data, created_by=created_by)
            self.db.add(quiz)
            self.db.commit()
            self.db.refresh(quiz)
            logger.info(f"Created quiz {quiz.id} '{quiz.title}' by user {created_by}")
            return quiz
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Database integrity error creating quiz: {e}")
            raise ValueError(f"Database error: {str(e)}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Unexpected error creating quiz: {e}", exc_info=True)
            raise

    def update(self, quiz: QuizModel, updates: Dict) -> QuizModel:
        try:
            for field, value in updates.items():
                setattr(quiz, field, value)
            self.db.commit()
            self.db.refresh(quiz)
            logger.info(f"Updated quiz {quiz.id}: {sorted(updates)}")
            return quiz
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Database integrity error updating quiz {quiz.id}: {e}")
            raise ValueError(f"Database error: {str(e)}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Unexpected error updating quiz {quiz.id}: {e}", exc_info=True)
            raise

    def delete(self, quiz: QuizModel) -> None:
        """Delete a quiz together with its questions and attempts."""
        quiz_id = quiz.id
        try:
            self.db.delete(quiz)
            self.db.commit()
            logger.info(f"Deleted quiz {quiz_id} with its questions and attempts")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Unexpected error deleting quiz {quiz_id}: {e}", exc_info=True)
            raise
