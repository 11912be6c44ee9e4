import logging
from typing import Dict, Iterable, List, Optional

from assessment_platform.db.database import JSONDatabase
from assessment_platform.models.question import (
    Question, QuestionCreate, QuestionUpdate, validate_answer_key
)

logger = logging.getLogger(__name__)

class QuestionCRUD:
    """Question store operations."""

    def __init__(self, db: JSONDatabase):
        self.db = db
        self.collection = db.collection('questions')

    def create_question(self, question: QuestionCreate) -> Question:
        """Create a new question."""
        validate_answer_key(question.options, question.correct_answer)

        question_data = {
            "question": question.question,
            "options": list(question.options),
            "correctAnswer": question.correct_answer,
            "difficulty": question.difficulty.value,
            "category": question.category
        }

        new_question = self.collection.insert(question_data)
        logger.info(f"Created question {new_question['id']}")
        return Question.model_validate(new_question)

    def get_question(self, key: str) -> Optional[Question]:
        """Retrieve question by id."""
        question_data = self.collection.get(key)
        if question_data:
            return Question.model_validate(question_data)
        return None

    def get_questions(self) -> List[Question]:
        """All questions in creation order."""
        return [Question.model_validate(q) for q in self.collection.all()]

    def get_questions_by_ids(self, keys: Iterable[str]) -> Dict[str, Question]:
        """Resolve ids to questions. Ids with no question are left out."""
        wanted = set(keys)
        return {
            q["id"]: Question.model_validate(q)
            for q in self.collection.find(lambda doc: doc.get("id") in wanted)
        }

    def get_questions_in_order(self, keys: List[str]) -> List[Question]:
        """Questions for ``keys`` in the given order, skipping stale ids."""
        resolved = self.get_questions_by_ids(keys)
        return [resolved[key] for key in keys if key in resolved]

    def update_question(self, key: str, question_update: QuestionUpdate) -> Optional[Question]:
        """Update question fields. The merged question must keep a valid answer key."""
        update_fields = question_update.model_dump(exclude_unset=True)
        update_data = {}
        for field, value in update_fields.items():
            if value is None:
                continue
            if field == 'difficulty':
                update_data['difficulty'] = value.value
            elif field == 'correct_answer':
                update_data['correctAnswer'] = value
            else:
                update_data[field] = value

        with self.collection.lock:
            current = self.get_question(key)
            if not current:
                return None

            validate_answer_key(
                update_data.get('options', current.options),
                update_data.get('correctAnswer', current.correct_answer)
            )
            updated = self.collection.update(key, update_data)

        if updated:
            return Question.model_validate(updated)
        return None

    def delete_question(self, key: str) -> bool:
        """Delete a question. Assessments and submissions that reference it are left alone."""
        deleted = self.collection.delete(key)
        if deleted:
            logger.info(f"Deleted question {key}")
        return deleted

    def get_questions_count(self) -> int:
        """Get total number of questions."""
        return self.collection.count()
