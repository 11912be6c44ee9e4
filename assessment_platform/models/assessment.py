from typing import List, Optional
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .question import Question, CandidateQuestion
from .text import EncodableText

class AssessmentBase(BaseModel):
    """Base assessment model."""
    title: str = ""
    description: str = ""
    selected_challenges: List[str] = Field(
        default_factory=list,
        description="Question ids in presentation order"
    )
    time_limit: int = Field(default=30, ge=1, description="Time limit in minutes")
    passing_score: int = Field(default=70, ge=0, le=100, description="Passing percentage")

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore"
    }

class AssessmentCreate(EncodableText, AssessmentBase):
    """Assessment creation model."""
    # Older clients send the secret as "password"
    secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("secret", "password")
    )

    @field_validator("secret")
    @classmethod
    def blank_secret_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

class AssessmentUpdate(EncodableText):
    """Assessment update model. An empty secret removes the gate."""
    title: Optional[str] = None
    description: Optional[str] = None
    selected_challenges: Optional[List[str]] = None
    time_limit: Optional[int] = Field(default=None, ge=1)
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)
    secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("secret", "password")
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore"
    }

class AssessmentPublic(AssessmentBase):
    """Assessment with the secret stripped, safe for any reader."""
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

class Assessment(AssessmentPublic):
    """Assessment for authoring views, secret included."""
    secret: Optional[str] = None

    @field_validator("secret")
    @classmethod
    def blank_secret_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @property
    def is_gated(self) -> bool:
        return bool(self.secret)

    def public(self) -> AssessmentPublic:
        return AssessmentPublic.model_validate(self.model_dump(exclude={"secret"}))

class AssessmentDetail(BaseModel):
    """Authoring fetch: the assessment with full question bodies."""
    item: Assessment
    questions: List[Question]

class CandidateAssessment(BaseModel):
    """Candidate fetch: no secret, no correct answers."""
    item: AssessmentPublic
    questions: List[CandidateQuestion]
