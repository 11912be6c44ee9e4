from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, StrictInt
from pydantic.alias_generators import to_camel

from .assessment import Assessment
from .text import EncodableText

UNKNOWN_ASSESSMENT_TITLE = "Unknown Assessment"

_camel_config = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "ignore"
}


class SubmissionCreate(EncodableText):
    """Candidate answers for one assessment."""
    candidate_email: str = ""
    answers: Dict[str, StrictInt] = Field(
        default_factory=dict,
        description="Question id -> selected option index; unanswered ids are absent"
    )

    model_config = _camel_config


class SubmissionBase(BaseModel):
    """Base model for a scored submission."""
    assessment_id: str
    candidate_email: str
    answers: Dict[str, int] = Field(default_factory=dict)

    # Scoring outcome, fixed at submission time
    score: int = 0
    correct_count: int = 0
    total_questions: int = 0
    passed: bool = False

    model_config = _camel_config


class Submission(SubmissionBase):
    """Submission API model."""
    id: str
    submitted_at: datetime


class SubmissionSummary(Submission):
    """Submission joined with its parent assessment for list views."""
    assessment_title: str = UNKNOWN_ASSESSMENT_TITLE
    assessment_description: str = ""


class AnswerDetail(BaseModel):
    """One question of a submission as seen by a reviewer."""
    question: str
    options: List[str]
    correct_answer: int
    candidate_answer: Optional[int] = None
    is_correct: bool

    model_config = _camel_config


class SubmissionDetail(BaseModel):
    item: SubmissionSummary
    detail: Dict[str, AnswerDetail]


class ResultStats(BaseModel):
    """Aggregate outcome of every submission against one assessment."""
    total_submissions: int = 0
    average_score: int = 0
    pass_rate: int = 0

    model_config = _camel_config


class AssessmentResults(BaseModel):
    assessment: Assessment
    stats: ResultStats
    submissions: List[Submission]


class DashboardStats(ResultStats):
    """Platform-wide totals."""
    total_questions: int = 0
    total_assessments: int = 0
