from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from gridiron_iq.domain.enums import IqLevel
from gridiron_iq.domain.iq_levels import calculate_iq_level, calculate_overall_level, round_half_up
from gridiron_iq.infrastructure.db.models.progress_model import ProgressModel
from gridiron_iq.infrastructure.repositories.progress_repository import ProgressRepository
from gridiron_iq.infrastructure.settings import PROGRESS_HISTORY_LIMIT
from .keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

# Shared across requests so every store instance serializes on the same keys.
_progress_locks = KeyedLock()


@dataclass
class AttemptOutcome:
    quiz_id: int
    quiz_title: str
    score: int
    iq_level: IqLevel
    is_passed: bool


class ProgressStore:
    """
    Running Football IQ aggregate per (athlete, position).

    update_progress is the only write path. It does not commit; the caller
    commits the surrounding transaction.
    """

    def __init__(self, progress_repo: ProgressRepository, locks: KeyedLock = _progress_locks):
        self._progress = progress_repo
        self._locks = locks

    # ---------------------------
    # Queries
    # ---------------------------

    def get_progress(self, athlete_id: int, position: Optional[str] = None) -> List[ProgressModel]:
        return self._progress.list_for_athlete(athlete_id, position)

    def get_progress_by_id(self, progress_id: int) -> Optional[ProgressModel]:
        return self._progress.get(progress_id)

    def get_summary(self, athlete_id: int) -> Dict:
        records = self.get_progress(athlete_id)
        return {
            "athlete_id": athlete_id,
            "overall_level": calculate_overall_level(r.current_iq_level for r in records).value,
            "quizzes_completed": sum(r.quizzes_completed for r in records),
            "quizzes_passed": sum(r.quizzes_passed for r in records),
            "positions": records,
        }

    # ---------------------------
    # Mutation
    # ---------------------------

    def locked(self, athlete_id: int, position: str):
        """
        Hold the (athlete, position) lock. Callers that commit after
        update_progress must keep it held until the commit.
        """
        return self._locks.hold((athlete_id, position))

    def update_progress(self, athlete_id: int, position: str, outcome: AttemptOutcome) -> ProgressModel:
        with self.locked(athlete_id, position):
            progress = self._progress.get_for_update(athlete_id, position)
            if progress is None:
                progress = self._progress.add(
                    ProgressModel(
                        athlete_id=athlete_id,
                        position=position,
                        current_iq_level=IqLevel.ROOKIE.value,
                        quizzes_completed=0,
                        quizzes_passed=0,
                        total_score=0,
                        average_score=0,
                        history=[],
                    )
                )
                logger.info(f"Created progress record {progress.id} for athlete_id={athlete_id}, position={position}")

            now = datetime.now(timezone.utc)

            progress.quizzes_completed += 1
            if outcome.is_passed:
                progress.quizzes_passed += 1
            progress.total_score += outcome.score
            progress.average_score = round_half_up(progress.total_score / progress.quizzes_completed)
            # Overall level follows the running average, not this attempt's score
            progress.current_iq_level = calculate_iq_level(progress.average_score).value

            entry = {
                "date": now.isoformat(),
                "quiz_id": outcome.quiz_id,
                "quiz_title": outcome.quiz_title,
                "score": outcome.score,
                "iq_level": IqLevel(outcome.iq_level).value,
            }
            history = [entry] + list(progress.history or [])
            history.sort(key=lambda h: h["date"], reverse=True)
            # Reassign so the JSON column is flagged dirty
            progress.history = history[:PROGRESS_HISTORY_LIMIT]
            progress.last_attempt_at = now

            self._progress.save(progress)
            logger.info(
                f"Progress {progress.id} updated: completed={progress.quizzes_completed}, "
                f"passed={progress.quizzes_passed}, average={progress.average_score}, "
                f"level={progress.current_iq_level}"
            )
            return progress
