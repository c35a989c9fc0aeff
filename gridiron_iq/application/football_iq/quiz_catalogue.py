import logging
from typing import Dict, List, Optional

from gridiron_iq.domain.exceptions import NotFoundError
from gridiron_iq.infrastructure.db.models.question_model import QuestionModel
from gridiron_iq.infrastructure.db.models.quiz_model import QuizModel
from gridiron_iq.infrastructure.repositories.question_repository import QuestionRepository
from gridiron_iq.infrastructure.repositories.quiz_repository import QuizRepository

logger = logging.getLogger(__name__)


def validate_options(options: List[Dict]) -> None:
    if len(options) < 2:
        raise ValueError("A question must have at least 2 options")
    if not any(o.get("is_correct") for o in options):
        raise ValueError("At least one option must be marked as correct")
    ids = [o.get("id") for o in options]
    if len(set(ids)) != len(ids):
        raise ValueError("Option ids must be unique within a question")


# Columns that may not be cleared through a partial update.
QUIZ_REQUIRED_FIELDS = ("title", "description", "difficulty", "category", "passing_score", "is_active")
QUESTION_REQUIRED_FIELDS = ("question_text", "question_type", "options", "points", "order_index")


def reject_nulls(updates: Dict, required: tuple) -> None:
    cleared = sorted(f for f in required if f in updates and updates[f] is None)
    if cleared:
        raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")


class QuizCatalogue:
    """Quizzes and their ordered questions."""

    def __init__(self, quiz_repo: QuizRepository, question_repo: QuestionRepository):
        self.quizzes = quiz_repo
        self.questions = question_repo

    def list_quizzes(self, **filters) -> List[QuizModel]:
        return self.quizzes.list(**filters)

    def get_quiz(self, quiz_id: int) -> QuizModel:
        quiz = self.quizzes.get(quiz_id)
        if quiz is None:
            logger.warning(f"Quiz {quiz_id} not found")
            raise NotFoundError(f"Quiz {quiz_id} not found")
        return quiz

    def create_quiz(self, data: Dict, created_by: int) -> QuizModel:
        return self.quizzes.create(data, created_by)

    def update_quiz(self, quiz_id: int, updates: Dict) -> QuizModel:
        quiz = self.get_quiz(quiz_id)
        reject_nulls(updates, QUIZ_REQUIRED_FIELDS)
        return self.quizzes.update(quiz, updates)

    def delete_quiz(self, quiz_id: int) -> None:
        quiz = self.get_quiz(quiz_id)
        self.quizzes.delete(quiz)

    def list_questions(self, quiz_id: int) -> List[QuestionModel]:
        self.get_quiz(quiz_id)
        return self.questions.list_for_quiz(quiz_id)

    def get_question(self, question_id: int) -> QuestionModel:
        question = self.questions.get(question_id)
        if question is None:
            logger.warning(f"Question {question_id} not found")
            raise NotFoundError(f"Question {question_id} not found")
        return question

    def add_question(self, quiz_id: int, data: Dict) -> QuestionModel:
        self.get_quiz(quiz_id)
        validate_options(data["options"])
        if not data.get("order_index"):
            # Append after the existing questions
            data = {**data, "order_index": self.questions.count_for_quiz(quiz_id) + 1}
        return self.questions.create(quiz_id, data)

    def update_question(self, question_id: int, updates: Dict) -> QuestionModel:
        question = self.get_question(question_id)
        reject_nulls(updates, QUESTION_REQUIRED_FIELDS)
        if "options" in updates:
            validate_options(updates["options"])
        return self.questions.update(question, updates)

    def delete_question(self, question_id: int) -> None:
        question = self.get_question(question_id)
        self.questions.delete(question)
