import os
import tempfile
import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# File database shared by the app and the tests; set before any project import
db_path = os.path.join(tempfile.mkdtemp(prefix="gridiron_iq_"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"

from gridiron_iq.infrastructure.db.session import Base, engine, SessionLocal
from gridiron_iq.infrastructure.db.models.athlete_model import AthleteModel
from gridiron_iq.infrastructure.db.models.question_model import QuestionModel
from gridiron_iq.infrastructure.db.models.quiz_model import QuizModel
from gridiron_iq.infrastructure.db.models.user_model import UserModel
from gridiron_iq.infrastructure.repositories.athlete_repository import AthleteRepository
from gridiron_iq.infrastructure.repositories.attempt_repository import AttemptRepository
from gridiron_iq.infrastructure.repositories.progress_repository import ProgressRepository
from gridiron_iq.infrastructure.repositories.question_repository import QuestionRepository
from gridiron_iq.infrastructure.repositories.quiz_repository import QuizRepository
from gridiron_iq.application.football_iq.attempt_recorder import AttemptRecorder
from gridiron_iq.application.football_iq.progress_store import ProgressStore
from main import app


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def people(db: Session) -> dict:
    """An admin, two coaches and two athletes; returns their ids."""
    admin = UserModel(name="Ada Admin", email="admin@gridiron.test", role="ADMIN")
    coach = UserModel(name="Cal Coach", email="coach@gridiron.test", role="COACH")
    other_coach = UserModel(name="Olly Coach", email="coach2@gridiron.test", role="COACH")
    qb_user = UserModel(name="Quinn Back", email="qb@gridiron.test", role="ATHLETE")
    lb_user = UserModel(name="Lee Backer", email="lb@gridiron.test", role="ATHLETE")
    db.add_all([admin, coach, other_coach, qb_user, lb_user])
    db.flush()

    qb = AthleteModel(user_id=qb_user.id, first_name="Quinn", last_name="Back", position="Quarterback (QB)")
    lb = AthleteModel(user_id=lb_user.id, first_name="Lee", last_name="Backer", position="Linebacker (LB)")
    db.add_all([qb, lb])
    db.commit()

    return {
        "admin": admin.id,
        "coach": coach.id,
        "other_coach": other_coach.id,
        "qb_user": qb_user.id,
        "lb_user": lb_user.id,
        "qb": qb.id,
        "lb": lb.id,
    }


def make_quiz(db: Session, created_by: int, n_questions: int = 10, **overrides) -> QuizModel:
    """A quiz whose questions all have option "a" as the correct answer."""
    data = dict(
        title="Cover 2 Reads",
        description="Reading two-deep safety shells",
        position="Quarterback (QB)",
        difficulty="intermediate",
        category="play_recognition",
        passing_score=70,
        is_active=True,
    )
    data.update(overrides)
    quiz = QuizModel(created_by=created_by, **data)
    db.add(quiz)
    db.flush()
    for i in range(n_questions):
        db.add(
            QuestionModel(
                quiz_id=quiz.id,
                question_text=f"Question {i + 1}",
                question_type="multiple_choice",
                options=[
                    {"id": "a", "text": "Right", "is_correct": True},
                    {"id": "b", "text": "Wrong", "is_correct": False},
                ],
                points=1,
                order_index=i + 1,
            )
        )
    db.commit()
    db.refresh(quiz)
    return quiz


def make_answers(correct: int, total: int):
    return [
        {
            "question_id": i + 1,
            "selected_option_id": "a" if i < correct else "b",
            "is_correct": i < correct,
            "time_spent": 5,
        }
        for i in range(total)
    ]


def build_recorder(db: Session, quiz_repo: QuizRepository = None) -> AttemptRecorder:
    return AttemptRecorder(
        db=db,
        quiz_repo=quiz_repo or QuizRepository(db),
        question_repo=QuestionRepository(db),
        attempt_repo=AttemptRepository(db),
        athlete_repo=AthleteRepository(db),
        progress_store=ProgressStore(ProgressRepository(db)),
    )


@pytest.fixture
def recorder(db: Session) -> AttemptRecorder:
    return build_recorder(db)


@pytest.fixture
def store(db: Session) -> ProgressStore:
    return ProgressStore(ProgressRepository(db))
