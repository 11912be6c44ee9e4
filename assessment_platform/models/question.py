from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, StrictInt
from pydantic.alias_generators import to_camel
from enum import Enum

from assessment_platform.core.exceptions import ValidationError
from assessment_platform.models.text import EncodableText

MIN_OPTIONS = 2
MAX_OPTIONS = 6

class DifficultyLevel(str, Enum):
    """Question difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

class QuestionBase(BaseModel):
    """Base question model."""
    question: str = ""
    options: List[str] = Field(default_factory=list)
    correct_answer: StrictInt = Field(default=0, description="Zero-based index into options")
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    category: str = "General"

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore"
    }

class QuestionCreate(EncodableText, QuestionBase):
    """Question creation model. Absent fields take the documented defaults."""

class Question(QuestionBase):
    """Question model for authoring views, correct answer included."""
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

class CandidateQuestion(BaseModel):
    """Question as shown to a candidate. Never carries the correct answer."""
    id: str
    question: str
    options: List[str]
    difficulty: DifficultyLevel
    category: str

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore"
    }

class QuestionUpdate(EncodableText):
    """Question update model."""
    question: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[StrictInt] = None
    difficulty: Optional[DifficultyLevel] = None
    category: Optional[str] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore"
    }


def validate_answer_key(options: List[str], correct_answer: int) -> None:
    """Reject option lists outside 2-6 entries and answer indexes that miss them."""
    if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
        raise ValidationError(
            f"options must contain between {MIN_OPTIONS} and {MAX_OPTIONS} entries",
            field="options"
        )
    if not 0 <= correct_answer < len(options):
        raise ValidationError(
            f"correctAnswer must be between 0 and {len(options) - 1}",
            field="correctAnswer"
        )
