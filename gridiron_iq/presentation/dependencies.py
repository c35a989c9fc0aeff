from gridiron_iq.infrastructure.db.session import SessionLocal
from fastapi import Depends, Header, HTTPException, status
from typing import Optional
import logging
from gridiron_iq.domain.enums import UserRole
from gridiron_iq.infrastructure.repositories.athlete_repository import AthleteRepository, UserRepository
from gridiron_iq.infrastructure.repositories.attempt_repository import AttemptRepository
from gridiron_iq.infrastructure.repositories.progress_repository import ProgressRepository
from gridiron_iq.infrastructure.repositories.question_repository import QuestionRepository
from gridiron_iq.infrastructure.repositories.quiz_repository import QuizRepository
from gridiron_iq.application.football_iq.attempt_recorder import AttemptRecorder
from gridiron_iq.application.football_iq.progress_store import ProgressStore
from gridiron_iq.application.football_iq.quiz_catalogue import QuizCatalogue
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

STAFF_ROLES = (UserRole.ADMIN.value, UserRole.COACH.value)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    x_user_id: Optional[int] = Header(default=None),
    db: Session = Depends(get_db),
) -> dict:
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    # Verify user exists in DB
    user = UserRepository(db).get(x_user_id)
    if not user:
        logger.warning(f"Unknown user_id in request header: {x_user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return {
        "user_id": user.id,
        "role": user.role,
    }


def coach_or_admin_required(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("role") not in STAFF_ROLES:
        logger.warning(
            f"Access denied for non-staff user_id: {current_user.get('user_id')}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only coaches and admins can manage quizzes",
        )
    return current_user


def admin_required(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("role") != UserRole.ADMIN.value:
        logger.warning(
            f"Access denied for non-admin user_id: {current_user.get('user_id')}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrative privileges required",
        )
    logger.info(f"Admin access granted for user_id: {current_user.get('user_id')}")
    return current_user


def athlete_access_required(
    athlete_id: int,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Staff may read any athlete; an athlete only their own data."""
    if current_user.get("role") in STAFF_ROLES:
        return current_user

    athlete = AthleteRepository(db).get_by_user_id(current_user["user_id"])
    if athlete is None or athlete.id != athlete_id:
        logger.warning(
            f"User {current_user.get('user_id')} denied access to athlete {athlete_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this athlete's data",
        )
    return current_user


def ensure_quiz_owner(quiz, current_user: dict) -> None:
    """Coaches may only change quizzes they created; admins may change any."""
    if current_user.get("role") != UserRole.ADMIN.value and quiz.created_by != current_user["user_id"]:
        logger.warning(
            f"User {current_user['user_id']} is not the owner of quiz {quiz.id}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only modify quizzes you created",
        )


def get_quiz_catalogue(db: Session = Depends(get_db)) -> QuizCatalogue:
    return QuizCatalogue(QuizRepository(db), QuestionRepository(db))


def get_progress_store(db: Session = Depends(get_db)) -> ProgressStore:
    return ProgressStore(ProgressRepository(db))


def get_attempt_recorder(db: Session = Depends(get_db)) -> AttemptRecorder:
    return AttemptRecorder(
        db=db,
        quiz_repo=QuizRepository(db),
        question_repo=QuestionRepository(db),
        attempt_repo=AttemptRepository(db),
        athlete_repo=AthleteRepository(db),
        progress_store=ProgressStore(ProgressRepository(db)),
    )
