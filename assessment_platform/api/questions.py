from typing import Optional
from fastapi import APIRouter, Depends, status

from assessment_platform.core.exceptions import NotFound
from assessment_platform.db.database import JSONDatabase, get_db
from assessment_platform.crud.question import QuestionCRUD
from assessment_platform.models.question import QuestionCreate, QuestionUpdate

router = APIRouter()

def get_question_crud(db: JSONDatabase = Depends(get_db)) -> QuestionCRUD:
    """Get QuestionCRUD instance."""
    return QuestionCRUD(db)

@router.get("")
async def get_questions(
    question_crud: QuestionCRUD = Depends(get_question_crud)
):
    """List every question, correct answers included."""
    return {"items": question_crud.get_questions()}

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    question: Optional[QuestionCreate] = None,
    question_crud: QuestionCRUD = Depends(get_question_crud)
):
    """Create a new question. Missing fields fall back to their defaults."""
    db_question = question_crud.create_question(question or QuestionCreate())
    return {"item": db_question, "message": "Question created successfully"}

@router.get("/{question_id}")
async def get_question(
    question_id: str,
    question_crud: QuestionCRUD = Depends(get_question_crud)
):
    """Get a question by id."""
    question = question_crud.get_question(question_id)
    if not question:
        raise NotFound("Question not found")
    return {"item": question}

@router.put("/{question_id}")
async def update_question(
    question_id: str,
    question_update: Optional[QuestionUpdate] = None,
    question_crud: QuestionCRUD = Depends(get_question_crud)
):
    """Update a question."""
    updated_question = question_crud.update_question(question_id, question_update or QuestionUpdate())
    if not updated_question:
        raise NotFound("Question not found")
    return {"item": updated_question, "message": "Question updated successfully"}

@router.delete("/{question_id}")
async def delete_question(
    question_id: str,
    question_crud: QuestionCRUD = Depends(get_question_crud)
):
    """Delete a question."""
    if not question_crud.delete_question(question_id):
        raise NotFound("Question not found")
    return {"message": "Question deleted successfully"}
