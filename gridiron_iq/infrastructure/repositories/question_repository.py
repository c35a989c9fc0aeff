from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from ..db.models.question_model import QuestionModel
import logging

logger = logging.getLogger(__name__)


class QuestionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, question_id: int) -> Optional[QuestionModel]:
        return self.db.query(QuestionModel).filter(QuestionModel.id == question_id).first()

    def list_for_quiz(self, quiz_id: int) -> List[QuestionModel]:
        return (
            self.db.query(QuestionModel)
            .filter(QuestionModel.quiz_id == quiz_id)
            .order_by(QuestionModel.order_index, QuestionModel.id)
            .all()
        )

    def count_for_quiz(self, quiz_id: int) -> int:
        return self.db.query(QuestionModel).filter(QuestionModel.quiz_id == quiz_id).count()

    def create(self, quiz_id: int, data: Dict) -> QuestionModel:
        try:
            question = QuestionModel(quiz_id=quiz_id, **data)
            self.db.add(question)
            self.db.commit()
            self.db.refresh(question)
            logger.info(f"Created question {question.id} for quiz {quiz_id}")
            return question
        except Exception as e:
            self.db.rollback()
            logger.error(f"Unexpected error creating question for quiz {quiz_id}: {e}", exc_info=True)
            raise

    def update(self, question: QuestionModel, updates: Dict) -> QuestionModel:
        try:
            for field, value in updates.items():
                setattr(question, field, value)
            self.db.commit()
            self.db.refresh(question)
            logger.info(f"Updated question {question.id}")
            return question
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Database integrity error updating question {question.id}: {e}")
            raise ValueError(f"Database error: {str(e)}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Unexpected error updating question {question.id}: {e}", exc_info=True)
            raise

    def delete(self, question: QuestionModel) -> None:
        question_id = question.id
        try:
            self.db.delete(question)
            self.db.commit()
            logger.info(f"Deleted question {question_id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Unexpected error deleting question {question_id}: {e}", exc_info=True)
            raise
