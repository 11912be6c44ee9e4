"""
Submissions API - review of scored candidate submissions.

Submissions are created through ``POST /assessments/{id}/submit`` and are
read-only afterwards:
- List submissions joined with their assessment title
- Get one submission with per-question review detail
"""

from typing import Dict
from fastapi import APIRouter, Depends

from assessment_platform.core.exceptions import NotFound
from assessment_platform.db.database import JSONDatabase, get_db
from assessment_platform.crud.assessment import AssessmentCRUD
from assessment_platform.crud.question import QuestionCRUD
from assessment_platform.crud.submission import SubmissionCRUD
from assessment_platform.models.assessment import Assessment
from assessment_platform.models.submission import (
    Submission, SubmissionDetail, SubmissionSummary, UNKNOWN_ASSESSMENT_TITLE
)
from assessment_platform.services.scoring import grade_answers


router = APIRouter()


def get_submission_crud(db: JSONDatabase = Depends(get_db)) -> SubmissionCRUD:
    """Dependency to get SubmissionCRUD instance."""
    return SubmissionCRUD(db)


def summarize(submission: Submission, assessment: Assessment = None) -> SubmissionSummary:
    """Join a submission with the title and description of its assessment."""
    return SubmissionSummary(
        **submission.model_dump(),
        assessment_title=assessment.title if assessment else UNKNOWN_ASSESSMENT_TITLE,
        assessment_description=assessment.description if assessment else ""
    )


@router.get("")
async def get_submissions(
    db: JSONDatabase = Depends(get_db),
    submission_crud: SubmissionCRUD = Depends(get_submission_crud)
):
    """All submissions, each with its assessment title."""
    assessments: Dict[str, Assessment] = {
        a.id: a for a in AssessmentCRUD(db).get_assessments()
    }
    return {
        "items": [
            summarize(s, assessments.get(s.assessment_id))
            for s in submission_crud.get_submissions()
        ]
    }


@router.get("/{submission_id}", response_model=SubmissionDetail)
async def get_submission(
    submission_id: str,
    db: JSONDatabase = Depends(get_db),
    submission_crud: SubmissionCRUD = Depends(get_submission_crud)
):
    """One submission with the questions, correct answers and candidate answers.

    Detail is graded against the assessment's current question list. If the
    list was edited after the submission, detail can cover different questions
    than the stored totalQuestions and score.
    """
    submission = submission_crud.get_submission(submission_id)
    if not submission:
        raise NotFound("Submission not found")

    assessment = AssessmentCRUD(db).get_assessment(submission.assessment_id)
    detail = {}
    if assessment:
        questions = QuestionCRUD(db).get_questions_by_ids(assessment.selected_challenges)
        detail = grade_answers(assessment.selected_challenges, questions, submission.answers)

    return SubmissionDetail(item=summarize(submission, assessment), detail=detail)
