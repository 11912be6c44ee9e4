"""
Assessments API - authoring, candidate access, submission and results.

Authoring reads (list, detail, results) include the secret and the correct
answers. The candidate-facing ``/take`` read strips both, and the create and
update responses never echo the secret.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Header, Query, status

from assessment_platform.core.exceptions import NotFound
from assessment_platform.db.database import JSONDatabase, get_db
from assessment_platform.crud.assessment import AssessmentCRUD
from assessment_platform.crud.question import QuestionCRUD
from assessment_platform.crud.submission import SubmissionCRUD
from assessment_platform.models.assessment import (
    Assessment, AssessmentCreate, AssessmentUpdate,
    AssessmentDetail, CandidateAssessment
)
from assessment_platform.models.question import CandidateQuestion
from assessment_platform.models.submission import SubmissionCreate, AssessmentResults
from assessment_platform.services.access_gate import AccessGate
from assessment_platform.services.scoring import summarize_scores

router = APIRouter()


def get_assessment_crud(db: JSONDatabase = Depends(get_db)) -> AssessmentCRUD:
    return AssessmentCRUD(db)


def get_question_crud(db: JSONDatabase = Depends(get_db)) -> QuestionCRUD:
    return QuestionCRUD(db)


def get_submission_crud(db: JSONDatabase = Depends(get_db)) -> SubmissionCRUD:
    return SubmissionCRUD(db)


def get_access_gate() -> AccessGate:
    return AccessGate()


def load_assessment(assessment_crud: AssessmentCRUD, assessment_id: str) -> Assessment:
    assessment = assessment_crud.get_assessment(assessment_id)
    if not assessment:
        raise NotFound("Assessment not found")
    return assessment


@router.get("")
async def get_assessments(
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud)
):
    """List every assessment, secrets included (authoring view)."""
    return {"items": assessment_crud.get_assessments()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_assessment(
    assessment: Optional[AssessmentCreate] = None,
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud)
):
    """Create an assessment. The response never carries the secret."""
    created = assessment_crud.create_assessment(assessment or AssessmentCreate())
    return {"item": created.public(), "message": "Assessment created successfully"}


@router.get("/{assessment_id}", response_model=AssessmentDetail)
async def get_assessment(
    assessment_id: str,
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud),
    question_crud: QuestionCRUD = Depends(get_question_crud)
):
    """Assessment with full question bodies, correct answers included."""
    assessment = load_assessment(assessment_crud, assessment_id)
    questions = question_crud.get_questions_in_order(assessment.selected_challenges)
    return AssessmentDetail(item=assessment, questions=questions)


@router.put("/{assessment_id}")
async def update_assessment(
    assessment_id: str,
    assessment_update: Optional[AssessmentUpdate] = None,
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud)
):
    updated = assessment_crud.update_assessment(assessment_id, assessment_update or AssessmentUpdate())
    if not updated:
        raise NotFound("Assessment not found")
    return {"item": updated.public(), "message": "Assessment updated successfully"}


@router.delete("/{assessment_id}")
async def delete_assessment(
    assessment_id: str,
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud)
):
    """Delete an assessment. Submissions against it are kept."""
    if not assessment_crud.delete_assessment(assessment_id):
        raise NotFound("Assessment not found")
    return {"message": "Assessment deleted successfully"}


@router.get("/{assessment_id}/take", response_model=CandidateAssessment)
async def take_assessment(
    assessment_id: str,
    secret: Optional[str] = Query(default=None),
    x_assessment_secret: Optional[str] = Header(default=None),
    x_assessment_password: Optional[str] = Header(default=None),
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud),
    question_crud: QuestionCRUD = Depends(get_question_crud),
    gate: AccessGate = Depends(get_access_gate)
):
    """
    Candidate view of an assessment.

    The secret may come from the X-Assessment-Secret header, the older
    X-Assessment-Password header or the ``secret`` query field.
    """
    assessment = load_assessment(assessment_crud, assessment_id)
    gate.check(assessment, x_assessment_secret or x_assessment_password or secret)

    questions = question_crud.get_questions_in_order(assessment.selected_challenges)
    return CandidateAssessment(
        item=assessment.public(),
        questions=[CandidateQuestion.model_validate(q.model_dump()) for q in questions]
    )


@router.post("/{assessment_id}/submit", status_code=status.HTTP_201_CREATED)
async def submit_assessment(
    assessment_id: str,
    submission: Optional[SubmissionCreate] = None,
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud),
    submission_crud: SubmissionCRUD = Depends(get_submission_crud)
):
    """Score a candidate's answers and store the submission."""
    assessment = load_assessment(assessment_crud, assessment_id)
    created = submission_crud.create_submission(assessment, submission or SubmissionCreate())
    return {"submission": created, "message": "Assessment submitted successfully"}


@router.get("/{assessment_id}/results", response_model=AssessmentResults)
async def get_assessment_results(
    assessment_id: str,
    assessment_crud: AssessmentCRUD = Depends(get_assessment_crud),
    submission_crud: SubmissionCRUD = Depends(get_submission_crud)
):
    """Submission statistics for one assessment."""
    assessment = load_assessment(assessment_crud, assessment_id)
    submissions = submission_crud.get_submissions_by_assessment(assessment_id)
    return AssessmentResults(
        assessment=assessment,
        stats=summarize_scores(submissions),
        submissions=submissions
    )
