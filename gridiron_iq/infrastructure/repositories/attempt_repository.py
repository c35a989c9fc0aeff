from datetime import datetime
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from ..db.models.attempt_model import QuizAttemptModel
from gridiron_iq.domain.enums import AttemptStatus


class AttemptRepository:
    """
    Quiz attempt storage.

    Writes only flush; the caller owns the transaction so that completing an
    attempt and updating progress commit together.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, attempt_id: int) -> Optional[QuizAttemptModel]:
        return self.db.query(QuizAttemptModel).filter(QuizAttemptModel.id == attempt_id).first()

    def get_for_update(self, attempt_id: int) -> Optional[QuizAttemptModel]:
        """Fresh, row-locking read that overwrites whatever the session already holds."""
        return (
            self.db.query(QuizAttemptModel)
            .filter(QuizAttemptModel.id == attempt_id)
            .populate_existing()
            .with_for_update()
            .first()
        )

    def add(self, attempt: QuizAttemptModel) -> QuizAttemptModel:
        self.db.add(attempt)
        self.db.flush()
        return attempt

    def list_for_athlete(
        self,
        athlete_id: int,
        quiz_id: Optional[int] = None,
        is_passed: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[QuizAttemptModel]:
        query = self.db.query(QuizAttemptModel).filter(QuizAttemptModel.athlete_id == athlete_id)
        if quiz_id is not None:
            query = query.filter(QuizAttemptModel.quiz_id == quiz_id)
        if is_passed is not None:
            query = query.filter(QuizAttemptModel.is_passed == is_passed)

        # Most recent first: completion time, or start time for unfinished attempts
        recency = func.coalesce(QuizAttemptModel.completed_at, QuizAttemptModel.started_at)
        query = query.order_by(recency.desc(), QuizAttemptModel.id.desc())

        if limit and limit > 0:
            query = query.limit(limit)
        return query.all()

    def list_stale_started(self, started_before: datetime) -> List[QuizAttemptModel]:
        return (
            self.db.query(QuizAttemptModel)
            .filter(
                QuizAttemptModel.status == AttemptStatus.STARTED.value,
                QuizAttemptModel.started_at < started_before,
            )
            .all()
        )
