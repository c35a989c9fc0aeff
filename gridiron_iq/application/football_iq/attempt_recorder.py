from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from gridiron_iq.domain.enums import AttemptStatus, GENERAL_POSITION, UNKNOWN_QUIZ_TITLE
from gridiron_iq.domain.exceptions import AttemptStateError, NotFoundError
from gridiron_iq.domain.iq_levels import calculate_iq_level, round_half_up
from gridiron_iq.infrastructure.db.models.attempt_model import QuizAttemptModel
from gridiron_iq.infrastructure.repositories.athlete_repository import AthleteRepository
from gridiron_iq.infrastructure.repositories.attempt_repository import AttemptRepository
from gridiron_iq.infrastructure.repositories.question_repository import QuestionRepository
from gridiron_iq.infrastructure.repositories.quiz_repository import QuizRepository
from .progress_store import AttemptOutcome, ProgressStore

logger = logging.getLogger(__name__)


def score_answers(answers: List[Dict]) -> int:
    """Percentage of correct answers; an empty submission scores 0."""
    total = len(answers)
    if total == 0:
        return 0
    correct = sum(1 for a in answers if a.get("is_correct"))
    return round_half_up(100 * correct / total)


class AttemptRecorder:
    """
    Starts, grades and completes Football IQ quiz attempts.

    Completing an attempt writes the attempt and the athlete's progress in a
    single commit.
    """

    def __init__(
        self,
        *,
        db: Session,
        quiz_repo: QuizRepository,
        question_repo: QuestionRepository,
        attempt_repo: AttemptRepository,
        athlete_repo: AthleteRepository,
        progress_store: ProgressStore,
    ):
        self._db = db
        self._quizzes = quiz_repo
        self._questions = question_repo
        self._attempts = attempt_repo
        self._athletes = athlete_repo
        self._progress = progress_store

    # ---------------------------
    # Lifecycle
    # ---------------------------

    def start_attempt(self, athlete_id: int, quiz_id: int) -> QuizAttemptModel:
        if self._athletes.get(athlete_id) is None:
            raise NotFoundError(f"Athlete {athlete_id} not found")

        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise NotFoundError(f"Quiz {quiz_id} not found")
        if not quiz.is_active:
            raise AttemptStateError("This quiz is not currently active")

        try:
            attempt = self._attempts.add(
                QuizAttemptModel(
                    athlete_id=athlete_id,
                    quiz_id=quiz_id,
                    status=AttemptStatus.STARTED.value,
                    started_at=datetime.now(timezone.utc),
                    answers=[],
                )
            )
            self._db.commit()
            self._db.refresh(attempt)
        except Exception as e:
            self._db.rollback()
            logger.error(f"Error starting attempt for athlete_id={athlete_id}, quiz_id={quiz_id}: {e}", exc_info=True)
            raise

        logger.info(f"Athlete {athlete_id} started attempt {attempt.id} on quiz {quiz_id}")
        return attempt

    def grade_answers(self, quiz_id: int, submitted: List[Dict]) -> List[Dict]:
        """
        Resolve is_correct for each submitted answer against the quiz's questions.

        A non-empty submission must answer every question of the quiz exactly
        once. An unknown option grades as incorrect.
        """
        questions = {q.id: q for q in self._questions.list_for_quiz(quiz_id)}

        seen = set()
        for answer in submitted:
            question_id = answer["question_id"]
            if question_id not in questions:
                raise ValueError(f"Question {question_id} does not belong to quiz {quiz_id}")
            if question_id in seen:
                raise ValueError(f"Question {question_id} was answered more than once")
            seen.add(question_id)
        if submitted and len(seen) != len(questions):
            raise ValueError(f"Answers must be provided for all {len(questions)} questions")

        graded = []
        for answer in submitted:
            question = questions[answer["question_id"]]
            is_correct = False
            for option in question.options or []:
                if option.get("id") == answer["selected_option_id"]:
                    is_correct = bool(option.get("is_correct"))
                    break
            graded.append(
                {
                    "question_id": answer["question_id"],
                    "selected_option_id": answer["selected_option_id"],
                    "is_correct": is_correct,
                    "time_spent": answer.get("time_spent"),
                }
            )
        return graded

    def complete_attempt(self, attempt_id: int, answers: List[Dict], time_spent: int) -> QuizAttemptModel:
        """
        Score a started attempt and fold the result into the athlete's progress.

        A missing quiz does not block completion: the attempt is kept with
        is_passed=False and counted under the general position.
        """
        if time_spent is None or time_spent < 0:
            raise ValueError("time_spent must be a non-negative number of seconds")

        attempt = self._attempts.get(attempt_id)
        if attempt is None:
            logger.warning(f"Complete failed: attempt {attempt_id} not found")
            raise NotFoundError(f"Attempt {attempt_id} not found")
        self._ensure_started(attempt)

        score = score_answers(answers)

        quiz = self._quizzes.get(attempt.quiz_id)
        if quiz is None:
            logger.warning(f"Quiz {attempt.quiz_id} missing while completing attempt {attempt_id}; marking as not passed")
            is_passed = False
            position = GENERAL_POSITION
            quiz_title = UNKNOWN_QUIZ_TITLE
        else:
            is_passed = score >= quiz.passing_score
            position = quiz.position or GENERAL_POSITION
            quiz_title = quiz.title

        attempt_level = calculate_iq_level(score)

        with self._progress.locked(attempt.athlete_id, position):
            # Another request may have completed it since it was first read
            attempt = self._attempts.get_for_update(attempt_id)
            if attempt is None:
                raise NotFoundError(f"Attempt {attempt_id} not found")
            self._ensure_started(attempt)

            try:
                attempt.status = AttemptStatus.COMPLETED.value
                attempt.completed_at = datetime.now(timezone.utc)
                attempt.score = score
                attempt.time_spent = time_spent
                attempt.iq_level = attempt_level.value
                attempt.is_passed = is_passed
                attempt.answers = [dict(a) for a in answers]

                self._progress.update_progress(
                    attempt.athlete_id,
                    position,
                    AttemptOutcome(
                        quiz_id=attempt.quiz_id,
                        quiz_title=quiz_title,
                        score=score,
                        iq_level=attempt_level,
                        is_passed=is_passed,
                    ),
                )
                self._db.commit()
                self._db.refresh(attempt)
            except Exception as e:
                self._db.rollback()
                logger.error(f"Error completing attempt {attempt_id}: {e}", exc_info=True)
                raise

        logger.info(
            f"Attempt {attempt_id} completed by athlete {attempt.athlete_id}: "
            f"score={score}, passed={is_passed}, level={attempt_level.value}"
        )
        return attempt

    def _ensure_started(self, attempt: QuizAttemptModel) -> None:
        if attempt.status != AttemptStatus.STARTED.value:
            logger.warning(f"Complete failed: attempt {attempt.id} is {attempt.status}")
            raise AttemptStateError(f"This attempt has already been {attempt.status}")

    def abandon_stale_attempts(self, max_age: timedelta, now: Optional[datetime] = None) -> int:
        """Mark started attempts older than max_age as abandoned. Returns how many were swept."""
        now = now or datetime.now(timezone.utc)
        cutoff = now - max_age
        try:
            stale = self._attempts.list_stale_started(cutoff)
            for attempt in stale:
                attempt.status = AttemptStatus.ABANDONED.value
            self._db.commit()
        except Exception as e:
            self._db.rollback()
            logger.error(f"Error sweeping stale attempts: {e}", exc_info=True)
            raise

        logger.info(f"Marked {len(stale)} attempts started before {cutoff.isoformat()} as abandoned")
        return len(stale)

    # ---------------------------
    # Queries
    # ---------------------------

    def get_attempt(self, attempt_id: int) -> QuizAttemptModel:
        attempt = self._attempts.get(attempt_id)
        if attempt is None:
            raise NotFoundError(f"Attempt {attempt_id} not found")
        return attempt

    def list_attempts(
        self,
        athlete_id: int,
        quiz_id: Optional[int] = None,
        is_passed: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[QuizAttemptModel]:
        return self._attempts.list_for_athlete(athlete_id, quiz_id=quiz_id, is_passed=is_passed, limit=limit)
