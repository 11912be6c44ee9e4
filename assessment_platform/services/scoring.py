"""Scoring utilities for multiple-choice assessments.

Functions:
- percentage: integer percentage rounded half up.
- score_submission: compare a candidate's answers with the answer key.
- grade_answers: per-question review detail for a stored submission.
- summarize_scores: aggregate statistics over a set of submissions.

Everything here is pure. Persisting the outcome is the caller's job.
"""

from typing import Dict, Iterable, List, Mapping

from pydantic import BaseModel

from assessment_platform.models.question import Question
from assessment_platform.models.submission import AnswerDetail, ResultStats, SubmissionBase


class ScoreResult(BaseModel):
    """Outcome of scoring one set of answers."""
    correct_count: int
    total_questions: int
    score: int
    passed: bool


def percentage(part: int, whole: int) -> int:
    """Return ``part / whole * 100`` rounded half up, or 0 when ``whole`` is 0.

    Integer arithmetic keeps exact halves exact, so 1/8 gives 13 and not 12.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def score_submission(
    question_ids: List[str],
    questions: Mapping[str, Question],
    answers: Mapping[str, int],
    passing_score: int,
) -> ScoreResult:
    """Score ``answers`` against the questions an assessment lists.

    Every listed id counts towards the total, including ids that no longer
    resolve in ``questions``; those can never be answered correctly.
    """
    correct = 0
    for question_id in question_ids:
        question = questions.get(question_id)
        if question is None:
            continue
        if question_id in answers and answers[question_id] == question.correct_answer:
            correct += 1

    total = len(question_ids)
    score = percentage(correct, total)
    return ScoreResult(
        correct_count=correct,
        total_questions=total,
        score=score,
        passed=score >= passing_score,
    )


def grade_answers(
    question_ids: List[str],
    questions: Mapping[str, Question],
    answers: Mapping[str, int],
) -> Dict[str, AnswerDetail]:
    """Per-question review detail. Ids that no longer resolve are left out."""
    detail = {}
    for question_id in question_ids:
        question = questions.get(question_id)
        if question is None:
            continue
        candidate_answer = answers.get(question_id)
        detail[question_id] = AnswerDetail(
            question=question.question,
            options=question.options,
            correct_answer=question.correct_answer,
            candidate_answer=candidate_answer,
            is_correct=candidate_answer is not None and candidate_answer == question.correct_answer,
        )
    return detail


def summarize_scores(submissions: Iterable[SubmissionBase]) -> ResultStats:
    """Count, mean score and pass rate of ``submissions``."""
    submissions = list(submissions)
    total = len(submissions)
    return ResultStats(
        total_submissions=total,
        average_score=percentage(sum(s.score for s in submissions), total * 100),
        pass_rate=percentage(sum(1 for s in submissions if s.passed), total),
    )
