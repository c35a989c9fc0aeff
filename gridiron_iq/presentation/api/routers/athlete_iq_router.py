import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from gridiron_iq.application.football_iq.attempt_recorder import AttemptRecorder
from gridiron_iq.application.football_iq.progress_store import ProgressStore
from gridiron_iq.application.football_iq.quiz_catalogue import QuizCatalogue
from gridiron_iq.domain.enums import UNKNOWN_QUIZ_TITLE
from gridiron_iq.domain.exceptions import AttemptStateError, NotFoundError
from gridiron_iq.presentation.dependencies import (
    athlete_access_required,
    get_attempt_recorder,
    get_progress_store,
    get_quiz_catalogue,
)
from gridiron_iq.presentation.schemas.attempt_schema import (
    AttemptDetailOut,
    AttemptListItemOut,
    AttemptOut,
    AttemptQuizInfo,
    CompleteAttemptRequest,
    ReviewedQuestionOut,
)
from gridiron_iq.presentation.schemas.progress_schema import ProgressOut, ProgressSummaryOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/athletes/{athlete_id}/football-iq", tags=["Athlete Football IQ"])


def _owned_attempt(recorder: AttemptRecorder, athlete_id: int, attempt_id: int):
    attempt = recorder.get_attempt(attempt_id)
    if attempt.athlete_id != athlete_id:
        logger.warning(f"Attempt {attempt_id} does not belong to athlete {athlete_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This attempt does not belong to the specified athlete",
        )
    return attempt


# --------------------------------------------------
# Attempts
# --------------------------------------------------
@router.post(
    "/quizzes/{quiz_id}/attempts",
    response_model=AttemptOut,
    status_code=status.HTTP_201_CREATED,
)
def start_attempt(
    athlete_id: int,
    quiz_id: int,
    current_user: dict = Depends(athlete_access_required),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """
    Starts a new attempt of an active quiz for the athlete.
    """
    try:
        return recorder.start_attempt(athlete_id, quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AttemptStateError as e:
        logger.warning(f"Athlete {athlete_id} cannot start quiz {quiz_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            f"Unexpected error starting quiz {quiz_id} for athlete {athlete_id}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start quiz attempt",
        )


@router.post("/attempts/{attempt_id}/complete", response_model=AttemptOut)
def complete_attempt(
    athlete_id: int,
    attempt_id: int,
    payload: CompleteAttemptRequest,
    current_user: dict = Depends(athlete_access_required),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """
    Grades the submitted answers, completes the attempt and updates the
    athlete's Football IQ progress.
    """
    try:
        attempt = _owned_attempt(recorder, athlete_id, attempt_id)
        answers = recorder.grade_answers(attempt.quiz_id, [a.model_dump() for a in payload.answers])
        return recorder.complete_attempt(attempt_id, answers, payload.time_spent)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        logger.warning(f"Cannot complete attempt {attempt_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error completing attempt {attempt_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to complete quiz attempt",
        )


@router.get("/attempts", response_model=List[AttemptListItemOut])
def list_attempts(
    athlete_id: int,
    quiz_id: Optional[int] = None,
    is_passed: Optional[bool] = None,
    limit: Optional[int] = None,
    current_user: dict = Depends(athlete_access_required),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    attempts = recorder.list_attempts(athlete_id, quiz_id=quiz_id, is_passed=is_passed, limit=limit)
    return [
        AttemptListItemOut(
            **AttemptOut.model_validate(a).model_dump(),
            quiz_title=a.quiz.title if a.quiz else UNKNOWN_QUIZ_TITLE,
            quiz_position=a.quiz.position if a.quiz else None,
            quiz_difficulty=a.quiz.difficulty if a.quiz else None,
        )
        for a in attempts
    ]


@router.get("/attempts/{attempt_id}", response_model=AttemptDetailOut)
def get_attempt(
    athlete_id: int,
    attempt_id: int,
    current_user: dict = Depends(athlete_access_required),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
):
    """
    Returns the attempt with its quiz and every question merged with the
    athlete's answer, for the results screen.
    """
    try:
        attempt = _owned_attempt(recorder, athlete_id, attempt_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    quiz = catalogue.quizzes.get(attempt.quiz_id)
    answers = {a["question_id"]: a for a in attempt.answers or []}
    questions = []
    for question in catalogue.questions.list_for_quiz(attempt.quiz_id):
        answer = answers.get(question.id, {})
        questions.append(
            ReviewedQuestionOut(
                id=question.id,
                question_text=question.question_text,
                question_type=question.question_type,
                options=question.options,
                points=question.points,
                image_url=question.image_url,
                selected_option_id=answer.get("selected_option_id"),
                is_correct=bool(answer.get("is_correct", False)),
                time_spent=answer.get("time_spent"),
            )
        )

    return AttemptDetailOut(
        **AttemptOut.model_validate(attempt).model_dump(),
        quiz=AttemptQuizInfo.model_validate(quiz, from_attributes=True) if quiz else None,
        questions=questions,
    )


# --------------------------------------------------
# Progress
# --------------------------------------------------
@router.get("/progress", response_model=List[ProgressOut])
def get_progress(
    athlete_id: int,
    position: Optional[str] = None,
    current_user: dict = Depends(athlete_access_required),
    store: ProgressStore = Depends(get_progress_store),
):
    return store.get_progress(athlete_id, position)


@router.get("/progress/{progress_id}", response_model=ProgressOut)
def get_progress_record(
    athlete_id: int,
    progress_id: int,
    current_user: dict = Depends(athlete_access_required),
    store: ProgressStore = Depends(get_progress_store),
):
    progress = store.get_progress_by_id(progress_id)
    if progress is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Progress record not found")
    if progress.athlete_id != athlete_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This progress record does not belong to the specified athlete",
        )
    return progress


@router.get("/summary", response_model=ProgressSummaryOut)
def get_summary(
    athlete_id: int,
    current_user: dict = Depends(athlete_access_required),
    store: ProgressStore = Depends(get_progress_store),
):
    summary = store.get_summary(athlete_id)
    summary["positions"] = [ProgressOut.model_validate(p) for p in summary["positions"]]
    return ProgressSummaryOut(**summary)
