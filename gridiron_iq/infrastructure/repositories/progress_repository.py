from typing import List, Optional
from sqlalchemy.orm import Session
from ..db.models.progress_model import ProgressModel


class ProgressRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, progress_id: int) -> Optional[ProgressModel]:
        return self.db.query(ProgressModel).filter(ProgressModel.id == progress_id).first()

    def list_for_athlete(self, athlete_id: int, position: Optional[str] = None) -> List[ProgressModel]:
        query = self.db.query(ProgressModel).filter(ProgressModel.athlete_id == athlete_id)
        if position:
            query = query.filter(ProgressModel.position == position)
        return query.order_by(ProgressModel.id).all()

    def get_for_update(self, athlete_id: int, position: str) -> Optional[ProgressModel]:
        """Row-locking read of the (athlete, position) record. SQLite ignores the lock."""
        return (
            self.db.query(ProgressModel)
            .filter(
                ProgressModel.athlete_id == athlete_id,
                ProgressModel.position == position,
            )
            .populate_existing()
            .with_for_update()
            .first()
        )

    def add(self, progress: ProgressModel) -> ProgressModel:
        self.db.add(progress)
        self.db.flush()
        return progress

    def save(self, progress: ProgressModel) -> ProgressModel:
        self.db.flush()
        return progress
