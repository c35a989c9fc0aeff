from typing import Optional
from sqlalchemy.orm import Session
from ..db.models.athlete_model import AthleteModel
from ..db.models.user_model import UserModel


class AthleteRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, athlete_id: int) -> Optional[AthleteModel]:
        return self.db.query(AthleteModel).filter(AthleteModel.id == athlete_id).first()

    def get_by_user_id(self, user_id: int) -> Optional[AthleteModel]:
        return self.db.query(AthleteModel).filter(AthleteModel.user_id == user_id).first()


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.id == user_id).first()
