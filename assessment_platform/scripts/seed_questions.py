"""
Script to seed the data store with sample questions and one assessment.

Usage:
    python -m assessment_platform.scripts.seed_questions [--reset] [--secret SECRET]
"""

import argparse
import logging
import sys

from assessment_platform.db.database import get_db
from assessment_platform.crud.assessment import AssessmentCRUD
from assessment_platform.crud.question import QuestionCRUD
from assessment_platform.data.sample_questions import SAMPLE_QUESTIONS, SAMPLE_ASSESSMENT
from assessment_platform.core.exceptions import AppError

logger = logging.getLogger(__name__)


def seed_questions(reset: bool = False, secret: str = None, db=None) -> bool:
    """Seed the store with sample questions and an assessment that uses them."""
    try:
        db = db or get_db()
        if reset:
            db.clear()
            logger.info("Cleared existing data")

        question_crud = QuestionCRUD(db)
        existing_prompts = {q.question for q in question_crud.get_questions()}
        logger.info(f"Found {len(existing_prompts)} existing questions")

        added = []
        for question_data in SAMPLE_QUESTIONS:
            if question_data.question in existing_prompts:
                logger.info(f"Question '{question_data.question}' already exists, skipping...")
                continue
            created = question_crud.create_question(question_data)
            logger.info(f"Added question: {created.question} ({created.difficulty.value})")
            added.append(created.id)

        if added:
            assessment = SAMPLE_ASSESSMENT.model_copy(
                update={"selected_challenges": added, "secret": secret or None}
            )
            created = AssessmentCRUD(db).create_assessment(assessment)
            logger.info(f"Added assessment '{created.title}' ({created.id})")

        logger.info(f"Seeding completed, added {len(added)} new questions")
        logger.info(f"Totals: {db.counts()}")
    except AppError as e:
        logger.error(f"Error seeding data: {e.message}")
        return False

    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the assessment store with sample data")
    parser.add_argument("--reset", action="store_true", help="Clear every collection first")
    parser.add_argument("--secret", default=None, help="Secret gating the sample assessment")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    return 0 if seed_questions(reset=args.reset, secret=args.secret) else 1


if __name__ == "__main__":
    sys.exit(main())
