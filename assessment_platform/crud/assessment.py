import logging
from typing import List, Optional

from assessment_platform.db.database import JSONDatabase
from assessment_platform.models.assessment import Assessment, AssessmentCreate, AssessmentUpdate
from assessment_platform.services.access_gate import SecretPolicy, get_secret_policy

logger = logging.getLogger(__name__)

class AssessmentCRUD:
    """Assessment store operations."""

    def __init__(self, db: JSONDatabase, secret_policy: Optional[SecretPolicy] = None):
        self.db = db
        self.collection = db.collection('assessments')
        self.secret_policy = secret_policy or get_secret_policy()

    def create_assessment(self, assessment: AssessmentCreate) -> Assessment:
        """Create a new assessment."""
        assessment_data = {
            "title": assessment.title,
            "description": assessment.description,
            "selectedChallenges": list(assessment.selected_challenges),
            "timeLimit": assessment.time_limit,
            "passingScore": assessment.passing_score,
        }
        if assessment.secret:
            assessment_data["secret"] = self.secret_policy.prepare(assessment.secret)

        new_assessment = self.collection.insert(assessment_data)
        logger.info(
            f"Created assessment {new_assessment['id']} with "
            f"{len(assessment_data['selectedChallenges'])} questions"
        )
        return Assessment.model_validate(new_assessment)

    def get_assessment(self, key: str) -> Optional[Assessment]:
        """Retrieve assessment by id."""
        assessment_data = self.collection.get(key)
        if assessment_data:
            return Assessment.model_validate(assessment_data)
        return None

    def get_assessments(self) -> List[Assessment]:
        return [Assessment.model_validate(a) for a in self.collection.all()]

    def update_assessment(self, key: str, assessment_update: AssessmentUpdate) -> Optional[Assessment]:
        """Update assessment fields. An empty secret clears the gate."""
        field_names = {
            "title": "title",
            "description": "description",
            "selected_challenges": "selectedChallenges",
            "time_limit": "timeLimit",
            "passing_score": "passingScore",
        }

        update_data = {}
        for field, value in assessment_update.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            if field == "secret":
                update_data["secret"] = self.secret_policy.prepare(value) if value else ""
            else:
                update_data[field_names[field]] = value

        updated = self.collection.update(key, update_data)
        if updated:
            return Assessment.model_validate(updated)
        return None

    def delete_assessment(self, key: str) -> bool:
        """Delete an assessment. Its submissions are kept."""
        deleted = self.collection.delete(key)
        if deleted:
            logger.info(f"Deleted assessment {key}")
        return deleted

    def get_assessments_count(self) -> int:
        return self.collection.count()
