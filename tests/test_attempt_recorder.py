from datetime import datetime, timedelta, timezone

import pytest

from conftest import build_recorder, make_answers, make_quiz
from gridiron_iq.infrastructure.db.session import SessionLocal
from gridiron_iq.domain.enums import AttemptStatus, GENERAL_POSITION
from gridiron_iq.domain.exceptions import AttemptStateError, NotFoundError
from gridiron_iq.infrastructure.db.models.progress_model import ProgressModel
from gridiron_iq.infrastructure.repositories.quiz_repository import QuizRepository


class MissingQuizRepository(QuizRepository):
    """Behaves as if every quiz had been deleted."""

    def get(self, quiz_id):
        return None


def test_seven_of_ten_scores_seventy(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    attempt = recorder.start_attempt(people["qb"], quiz.id)

    completed = recorder.complete_attempt(attempt.id, make_answers(7, 10), 240)

    assert completed.score == 70
    assert completed.is_passed is True
    assert completed.iq_level == "proficient"
    assert completed.time_spent == 240
    assert completed.status == AttemptStatus.COMPLETED.value
    assert completed.completed_at is not None
    assert len(completed.answers) == 10


def test_empty_submission_scores_zero(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    attempt = recorder.start_attempt(people["qb"], quiz.id)

    completed = recorder.complete_attempt(attempt.id, [], 3)

    assert completed.score == 0
    assert completed.is_passed is False
    assert completed.iq_level == "rookie"
    assert completed.answers == []


def test_missing_quiz_still_completes_without_passing(db, people):
    quiz = make_quiz(db, people["coach"])
    attempt = build_recorder(db).start_attempt(people["qb"], quiz.id)

    recorder = build_recorder(db, quiz_repo=MissingQuizRepository(db))
    completed = recorder.complete_attempt(attempt.id, make_answers(10, 10), 60)

    assert completed.score == 100
    assert completed.is_passed is False
    assert completed.completed_at is not None

    progress = db.query(ProgressModel).filter_by(athlete_id=people["qb"]).one()
    assert progress.position == GENERAL_POSITION
    assert progress.history[0]["quiz_title"] == "Unknown Quiz"


def test_unknown_attempt_is_not_found_and_progress_untouched(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    attempt = recorder.start_attempt(people["qb"], quiz.id)
    recorder.complete_attempt(attempt.id, make_answers(8, 10), 100)
    before = [(p.id, p.quizzes_completed, p.total_score) for p in db.query(ProgressModel).all()]

    with pytest.raises(NotFoundError):
        recorder.complete_attempt(9999, make_answers(10, 10), 100)

    db.expire_all()
    after = [(p.id, p.quizzes_completed, p.total_score) for p in db.query(ProgressModel).all()]
    assert after == before


def test_completed_attempt_cannot_be_completed_again(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    attempt = recorder.start_attempt(people["qb"], quiz.id)
    recorder.complete_attempt(attempt.id, make_answers(9, 10), 100)

    with pytest.raises(AttemptStateError):
        recorder.complete_attempt(attempt.id, make_answers(1, 10), 100)

    progress = db.query(ProgressModel).filter_by(athlete_id=people["qb"]).one()
    assert progress.quizzes_completed == 1
    assert progress.total_score == 90


def test_negative_time_spent_is_rejected(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    attempt = recorder.start_attempt(people["qb"], quiz.id)

    with pytest.raises(ValueError):
        recorder.complete_attempt(attempt.id, make_answers(5, 10), -1)

    assert recorder.get_attempt(attempt.id).status == AttemptStatus.STARTED.value


def test_attempt_level_uses_own_score_while_progress_uses_average(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    first = recorder.start_attempt(people["qb"], quiz.id)
    recorder.complete_attempt(first.id, make_answers(5, 10), 100)
    second = recorder.start_attempt(people["qb"], quiz.id)

    completed = recorder.complete_attempt(second.id, make_answers(10, 10), 100)

    progress = db.query(ProgressModel).filter_by(athlete_id=people["qb"]).one()
    assert completed.iq_level == "elite"
    assert progress.average_score == 75
    assert progress.current_iq_level == "proficient"


def test_quiz_without_position_counts_as_general(db, people, recorder):
    quiz = make_quiz(db, people["coach"], position=None)
    attempt = recorder.start_attempt(people["lb"], quiz.id)

    recorder.complete_attempt(attempt.id, make_answers(6, 10), 100)

    progress = db.query(ProgressModel).filter_by(athlete_id=people["lb"]).one()
    assert progress.position == GENERAL_POSITION


def test_start_attempt_requires_active_quiz(db, people, recorder):
    quiz = make_quiz(db, people["coach"], is_active=False)

    with pytest.raises(AttemptStateError):
        recorder.start_attempt(people["qb"], quiz.id)


def test_start_attempt_requires_known_athlete_and_quiz(db, people, recorder):
    quiz = make_quiz(db, people["coach"])

    with pytest.raises(NotFoundError):
        recorder.start_attempt(4242, quiz.id)
    with pytest.raises(NotFoundError):
        recorder.start_attempt(people["qb"], 4242)


def test_grade_answers_checks_selected_option(db, people, recorder):
    quiz = make_quiz(db, people["coach"], n_questions=3)
    q1, q2, q3 = [q.id for q in quiz.questions]

    graded = recorder.grade_answers(
        quiz.id,
        [
            {"question_id": q1, "selected_option_id": "a", "time_spent": 4},
            {"question_id": q2, "selected_option_id": "b"},
            {"question_id": q3, "selected_option_id": "zzz"},
        ],
    )

    assert [g["is_correct"] for g in graded] == [True, False, False]
    assert graded[0]["time_spent"] == 4
    assert graded[1]["time_spent"] is None


def test_grade_answers_rejects_repeated_question(db, people, recorder):
    quiz = make_quiz(db, people["coach"], n_questions=2)
    q1 = quiz.questions[0].id

    with pytest.raises(ValueError, match="more than once"):
        recorder.grade_answers(quiz.id, [{"question_id": q1, "selected_option_id": "a"}] * 2)


def test_grade_answers_rejects_foreign_question(db, people, recorder):
    quiz = make_quiz(db, people["coach"], n_questions=1)
    other = make_quiz(db, people["coach"], n_questions=1, title="Blitz Pickup")

    with pytest.raises(ValueError, match="does not belong"):
        recorder.grade_answers(quiz.id, [{"question_id": other.questions[0].id, "selected_option_id": "a"}])


def test_grade_answers_requires_every_question(db, people, recorder):
    quiz = make_quiz(db, people["coach"], n_questions=3)
    q1 = quiz.questions[0].id

    with pytest.raises(ValueError, match="all 3 questions"):
        recorder.grade_answers(quiz.id, [{"question_id": q1, "selected_option_id": "a"}])

    assert recorder.grade_answers(quiz.id, []) == []


def test_completion_rechecks_status_loaded_by_another_session(db, people):
    quiz = make_quiz(db, people["coach"])
    attempt_id = build_recorder(db).start_attempt(people["qb"], quiz.id).id

    first, second = SessionLocal(), SessionLocal()
    try:
        first_recorder, second_recorder = build_recorder(first), build_recorder(second)
        # Both requests have already looked the attempt up
        first_recorder.get_attempt(attempt_id)
        stale = second_recorder.get_attempt(attempt_id)

        first_recorder.complete_attempt(attempt_id, make_answers(9, 10), 100)
        assert stale.status == AttemptStatus.STARTED.value

        with pytest.raises(AttemptStateError):
            second_recorder.complete_attempt(attempt_id, make_answers(1, 10), 100)
    finally:
        first.close()
        second.close()

    db.expire_all()
    progress = db.query(ProgressModel).filter_by(athlete_id=people["qb"]).one()
    assert progress.quizzes_completed == 1
    assert progress.total_score == 90
    assert build_recorder(db).get_attempt(attempt_id).score == 90


def test_stale_attempts_are_abandoned(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    stale = recorder.start_attempt(people["qb"], quiz.id)
    fresh = recorder.start_attempt(people["qb"], quiz.id)
    done = recorder.start_attempt(people["qb"], quiz.id)
    recorder.complete_attempt(done.id, make_answers(7, 10), 100)

    now = datetime.now(timezone.utc)
    stale.started_at = now - timedelta(days=3)
    done.started_at = now - timedelta(days=3)
    db.commit()

    swept = recorder.abandon_stale_attempts(timedelta(days=1), now=now)

    assert swept == 1
    assert recorder.get_attempt(stale.id).status == AttemptStatus.ABANDONED.value
    assert recorder.get_attempt(fresh.id).status == AttemptStatus.STARTED.value
    assert recorder.get_attempt(done.id).status == AttemptStatus.COMPLETED.value

    with pytest.raises(AttemptStateError):
        recorder.complete_attempt(stale.id, make_answers(10, 10), 100)


def test_list_attempts_newest_first_with_filters(db, people, recorder):
    quiz = make_quiz(db, people["coach"])
    other = make_quiz(db, people["coach"], title="Blitz Pickup")
    ids = []
    for correct in (9, 3, 8):
        attempt = recorder.start_attempt(people["qb"], quiz.id)
        recorder.complete_attempt(attempt.id, make_answers(correct, 10), 100)
        ids.append(attempt.id)
    recorder.start_attempt(people["qb"], other.id)

    passed = recorder.list_attempts(people["qb"], quiz_id=quiz.id, is_passed=True)
    assert [a.id for a in passed] == [ids[2], ids[0]]

    latest = recorder.list_attempts(people["qb"], quiz_id=quiz.id, limit=1)
    assert [a.id for a in latest] == [ids[2]]

    assert len(recorder.list_attempts(people["qb"])) == 4
    assert recorder.list_attempts(people["lb"]) == []
