import logging
from typing import List, Optional

from assessment_platform.core.exceptions import ValidationError
from assessment_platform.db.database import JSONDatabase
from assessment_platform.models.assessment import Assessment
from assessment_platform.models.submission import Submission, SubmissionCreate
from assessment_platform.crud.question import QuestionCRUD
from assessment_platform.services.scoring import score_submission

logger = logging.getLogger(__name__)


class SubmissionCRUD:
    """
    Submission store operations.

    Submissions are write-once: there is deliberately no update or delete here.
    """

    def __init__(self, db: JSONDatabase):
        self.db = db
        self.collection = db.collection('submissions')

    def create_submission(self, assessment: Assessment, submission: SubmissionCreate) -> Submission:
        """Score the answers against the assessment and store the result."""
        candidate_email = submission.candidate_email.strip()
        if not candidate_email:
            raise ValidationError("candidateEmail is required", field="candidateEmail")

        question_ids = list(assessment.selected_challenges)
        questions = QuestionCRUD(self.db).get_questions_by_ids(question_ids)
        result = score_submission(question_ids, questions, submission.answers, assessment.passing_score)

        submission_data = {
            "assessmentId": assessment.id,
            "candidateEmail": candidate_email,
            "answers": dict(submission.answers),
            "score": result.score,
            "correctCount": result.correct_count,
            "totalQuestions": result.total_questions,
            "passed": result.passed
        }

        new_submission = self.collection.insert(submission_data)
        logger.info(
            f"Submission {new_submission['id']} for assessment {assessment.id}: "
            f"{result.correct_count}/{result.total_questions} ({result.score}%)"
        )
        return Submission.model_validate(new_submission)

    def get_submission(self, key: str) -> Optional[Submission]:
        """Get a submission by id."""
        submission_data = self.collection.get(key)
        if not submission_data:
            return None
        return Submission.model_validate(submission_data)

    def get_submissions(self) -> List[Submission]:
        return [Submission.model_validate(s) for s in self.collection.all()]

    def get_submissions_by_assessment(self, assessment_key: str) -> List[Submission]:
        submissions = self.collection.find(lambda doc: doc.get("assessmentId") == assessment_key)
        return [Submission.model_validate(s) for s in submissions]

    def get_submissions_count(self) -> int:
        return self.collection.count()
