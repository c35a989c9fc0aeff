import logging
from datetime import timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from gridiron_iq.application.admin.question_bulk_upload_usecase import process_question_upload
from gridiron_iq.application.football_iq.attempt_recorder import AttemptRecorder
from gridiron_iq.application.football_iq.quiz_catalogue import QuizCatalogue
from gridiron_iq.domain.enums import FootballPosition, QuizCategory, QuizDifficulty
from gridiron_iq.domain.exceptions import NotFoundError
from gridiron_iq.infrastructure.settings import ATTEMPT_ABANDON_AFTER_MINUTES
from gridiron_iq.presentation.dependencies import (
    admin_required,
    coach_or_admin_required,
    ensure_quiz_owner,
    get_attempt_recorder,
    get_current_user,
    get_quiz_catalogue,
)
from gridiron_iq.presentation.schemas.attempt_schema import SweepResponse
from gridiron_iq.presentation.schemas.bulk_question_schema import BulkUploadResponse
from gridiron_iq.presentation.schemas.question_schema import (
    QuestionCreate,
    QuestionForTakingOut,
    QuestionOut,
    QuestionUpdate,
    QuizDetailOut,
    QuizForTakingOut,
)
from gridiron_iq.presentation.schemas.quiz_schema import QuizCreate, QuizSummaryOut, QuizUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/football-iq", tags=["Football IQ Quizzes"])


# --------------------------------------------------
# Quizzes
# --------------------------------------------------
@router.get("/quizzes", response_model=List[QuizSummaryOut])
def list_quizzes(
    position: Optional[FootballPosition] = None,
    difficulty: Optional[QuizDifficulty] = None,
    category: Optional[QuizCategory] = None,
    is_active: Optional[bool] = None,
    created_by: Optional[int] = None,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    user: dict = Depends(get_current_user),
):
    try:
        quizzes = catalogue.list_quizzes(
            position=position.value if position else None,
            difficulty=difficulty.value if difficulty else None,
            category=category.value if category else None,
            is_active=is_active,
            created_by=created_by,
        )
        # List view carries a count instead of the questions themselves
        return [
            QuizSummaryOut.model_validate(q).model_copy(update={"question_count": len(q.questions)})
            for q in quizzes
        ]
    except Exception as e:
        logger.error(f"Error fetching quizzes for user {user['user_id']}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve football IQ quizzes")


@router.get("/quizzes/{quiz_id}", response_model=None)
def get_quiz(
    quiz_id: int,
    for_taking: bool = False,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    user: dict = Depends(get_current_user),
):
    try:
        quiz = catalogue.get_quiz(quiz_id)
        if for_taking:
            return QuizForTakingOut.model_validate(quiz)
        return QuizDetailOut.model_validate(quiz)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/quizzes", response_model=QuizDetailOut, status_code=status.HTTP_201_CREATED)
def create_quiz(
    quiz: QuizCreate,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        logger.info(f"User {staff['user_id']} is creating quiz: {quiz.title}")
        return catalogue.create_quiz(quiz.model_dump(mode="json"), staff["user_id"])
    except ValueError as e:
        logger.warning(f"Validation error during quiz creation by user {staff['user_id']}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error during quiz creation by user {staff['user_id']}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create football IQ quiz")


@router.patch("/quizzes/{quiz_id}", response_model=QuizDetailOut)
def update_quiz(
    quiz_id: int,
    updates: QuizUpdate,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        ensure_quiz_owner(catalogue.get_quiz(quiz_id), staff)
        return catalogue.update_quiz(quiz_id, updates.model_dump(mode="json", exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/quizzes/{quiz_id}")
def delete_quiz(
    quiz_id: int,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        ensure_quiz_owner(catalogue.get_quiz(quiz_id), staff)
        catalogue.delete_quiz(quiz_id)
        return {"message": "Quiz deleted successfully"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# --------------------------------------------------
# Questions
# --------------------------------------------------
@router.get("/quizzes/{quiz_id}/questions", response_model=None)
def list_questions(
    quiz_id: int,
    for_taking: bool = False,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    user: dict = Depends(get_current_user),
):
    try:
        questions = catalogue.list_questions(quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if for_taking:
        return [QuestionForTakingOut.model_validate(q) for q in questions]
    return [QuestionOut.model_validate(q) for q in questions]


@router.post(
    "/quizzes/{quiz_id}/questions",
    response_model=QuestionOut,
    status_code=status.HTTP_201_CREATED,
)
def add_question(
    quiz_id: int,
    question: QuestionCreate,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        ensure_quiz_owner(catalogue.get_quiz(quiz_id), staff)
        return catalogue.add_question(quiz_id, question.model_dump(mode="json"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        logger.warning(f"Invalid question for quiz {quiz_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/quizzes/{quiz_id}/questions/bulk-upload", response_model=BulkUploadResponse)
def bulk_upload_questions(
    quiz_id: int,
    file: UploadFile = File(...),
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        ensure_quiz_owner(catalogue.get_quiz(quiz_id), staff)
        logger.info(f"User {staff['user_id']} uploading questions for quiz {quiz_id} from {file.filename}")
        content = file.file.read()
        return process_question_upload(catalogue, quiz_id, content, file.filename or "")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/questions/{question_id}", response_model=QuestionOut)
def update_question(
    question_id: int,
    updates: QuestionUpdate,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        question = catalogue.get_question(question_id)
        ensure_quiz_owner(catalogue.get_quiz(question.quiz_id), staff)
        return catalogue.update_question(question_id, updates.model_dump(mode="json", exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/questions/{question_id}")
def delete_question(
    question_id: int,
    catalogue: QuizCatalogue = Depends(get_quiz_catalogue),
    staff: dict = Depends(coach_or_admin_required),
):
    try:
        question = catalogue.get_question(question_id)
        ensure_quiz_owner(catalogue.get_quiz(question.quiz_id), staff)
        catalogue.delete_question(question_id)
        return {"message": "Question deleted successfully"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# --------------------------------------------------
# Maintenance
# --------------------------------------------------
@router.post("/attempts/sweep", response_model=SweepResponse)
def sweep_stale_attempts(
    older_than_minutes: int = Query(default=ATTEMPT_ABANDON_AFTER_MINUTES, ge=1),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
    admin: dict = Depends(admin_required),
):
    logger.info(f"Admin {admin['user_id']} sweeping attempts older than {older_than_minutes} minutes")
    count = recorder.abandon_stale_attempts(timedelta(minutes=older_than_minutes))
    return SweepResponse(abandoned=count)
