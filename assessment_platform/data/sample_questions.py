"""
Sample questions and a sample assessment for local development and demos.
"""

from assessment_platform.models.question import QuestionCreate, DifficultyLevel
from assessment_platform.models.assessment import AssessmentCreate

SAMPLE_QUESTIONS = [
    QuestionCreate(
        question="What is the index of the first element of a Python list?",
        options=["1", "0", "-1", "It depends on the list size"],
        correct_answer=1,
        difficulty=DifficultyLevel.EASY,
        category="Python"
    ),
    QuestionCreate(
        question="Which HTTP status code means a resource was created?",
        options=["200", "201", "204", "301"],
        correct_answer=1,
        difficulty=DifficultyLevel.EASY,
        category="Web"
    ),
    QuestionCreate(
        question="What is the average time complexity of a lookup in a hash table?",
        options=["O(1)", "O(log n)", "O(n)", "O(n log n)"],
        correct_answer=0,
        difficulty=DifficultyLevel.MEDIUM,
        category="Algorithms"
    ),
    QuestionCreate(
        question="Which SQL clause filters rows after aggregation?",
        options=["WHERE", "GROUP BY", "HAVING", "ORDER BY"],
        correct_answer=2,
        difficulty=DifficultyLevel.MEDIUM,
        category="Databases"
    ),
    QuestionCreate(
        question="Which isolation level prevents phantom reads?",
        options=["Read uncommitted", "Read committed", "Repeatable read", "Serializable"],
        correct_answer=3,
        difficulty=DifficultyLevel.HARD,
        category="Databases"
    ),
    QuestionCreate(
        question="What does the CAP theorem say a distributed store cannot guarantee at once?",
        options=[
            "Consistency, availability and partition tolerance",
            "Caching, atomicity and persistence",
            "Concurrency, auditing and privacy"
        ],
        correct_answer=0,
        difficulty=DifficultyLevel.HARD,
        category="Distributed Systems"
    ),
]

SAMPLE_ASSESSMENT = AssessmentCreate(
    title="Backend Fundamentals",
    description="A short screening quiz covering web, data and algorithm basics.",
    time_limit=15,
    passing_score=70
)
