import pandas as pd
from typing import List
from pydantic import ValidationError
from gridiron_iq.application.football_iq.quiz_catalogue import QuizCatalogue
from gridiron_iq.presentation.schemas.question_schema import QuestionCreate, OptionCreate
from gridiron_iq.presentation.schemas.bulk_question_schema import BulkUploadResponse
import logging
import io

logger = logging.getLogger(__name__)

OPTION_COLUMNS = ['option1', 'option2', 'option3', 'option4']
OPTION_IDS = ['a', 'b', 'c', 'd']


def _read_frame(file_content: bytes, filename: str) -> pd.DataFrame:
    if filename.endswith('.csv'):
        return pd.read_csv(io.BytesIO(file_content))
    if filename.endswith(('.xlsx', '.xls')):
        return pd.read_excel(io.BytesIO(file_content))
    raise ValueError("Unsupported file format. Please upload CSV or XLSX.")


def _build_options(row) -> List[OptionCreate]:
    options = []
    for option_id, col in zip(OPTION_IDS, OPTION_COLUMNS):
        # option3/option4 may be blank for true/false questions
        if col not in row or pd.isna(row[col]) or str(row[col]).strip() == '':
            continue
        options.append(OptionCreate(id=option_id, text=str(row[col]).strip(), is_correct=False))

    # correct_answer can be 1-4 (position in the row) or the option text itself
    correct_val = str(row['correct_answer']).strip()
    correct_idx = -1
    if correct_val in ['1', '2', '3', '4', '1.0', '2.0', '3.0', '4.0']:
        wanted_id = OPTION_IDS[int(float(correct_val)) - 1]
        for i, opt in enumerate(options):
            if opt.id == wanted_id:
                correct_idx = i
                break
    else:
        for i, opt in enumerate(options):
            if opt.text == correct_val:
                correct_idx = i
                break

    if correct_idx < 0:
        raise ValueError(f"Correct answer '{correct_val}' not valid (must be 1-4 or match an option text)")

    options[correct_idx].is_correct = True
    return options


def process_question_upload(
    catalogue: QuizCatalogue,
    quiz_id: int,
    file_content: bytes,
    filename: str,
) -> BulkUploadResponse:
    """
    Import questions for a quiz from a CSV/XLSX sheet.

    Required columns: question_text, option1, option2, correct_answer.
    Optional: option3, option4, explanation, points, question_type.
    Bad rows are reported and skipped; good rows are appended in sheet order.
    """
    try:
        catalogue.get_quiz(quiz_id)

        logger.info(f"Processing question upload: {filename} for quiz {quiz_id}")
        df = _read_frame(file_content, filename)

        # Clean column names
        df.columns = [str(c).strip().lower() for c in df.columns]

        required_cols = ['question_text', 'option1', 'option2', 'correct_answer']
        for col in required_cols:
            if col not in df.columns:
                raise ValueError(f"Missing required column: {col}")

        next_order = catalogue.questions.count_for_quiz(quiz_id) + 1
        inserted = 0
        failed = 0
        errors = []

        for index, row in df.iterrows():
            try:
                options = _build_options(row)

                # The explanation applies to the correct option
                if 'explanation' in df.columns and not pd.isna(row['explanation']):
                    for opt in options:
                        if opt.is_correct:
                            opt.explanation = str(row['explanation'])

                points = 1
                if 'points' in df.columns and not pd.isna(row['points']):
                    points = int(row['points'])

                question_type = 'multiple_choice'
                if 'question_type' in df.columns and not pd.isna(row['question_type']):
                    question_type = str(row['question_type']).strip()

                question = QuestionCreate(
                    question_text=str(row['question_text']),
                    question_type=question_type,
                    options=options,
                    points=points,
                    order_index=next_order,
                )
                catalogue.add_question(quiz_id, question.model_dump(mode="json"))
                next_order += 1
                inserted += 1
            except (ValueError, ValidationError) as e:
                failed += 1
                errors.append(f"Row {index + 2}: {str(e)}")

        logger.info(f"Question upload finished for quiz {quiz_id}. Inserted: {inserted}, Failed: {failed}")
        return BulkUploadResponse(
            total_rows=len(df),
            inserted=inserted,
            failed=failed,
            errors=errors,
        )

    except ValueError:
        raise
    except Exception as e:
        logger.error(f"Question upload process failed: {e}", exc_info=True)
        raise
