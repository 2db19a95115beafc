"""
Question router - admin API endpoints for the question catalog.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.core.dependencies import get_db
from recruit.schemas.question import QuestionCreate, QuestionRead, QuestionTypeOption, QuestionUpdate
from recruit.services.question_service import QuestionService

router = APIRouter(prefix="/admin/questions", tags=["questions"])


@router.get("", response_model=List[QuestionRead])
async def list_questions(
    db: AsyncSession = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    question_type: Optional[str] = None,
):
    """
    List questions with pagination.
    
    Filters: question_type.
    """
    service = QuestionService(db)
    return await service.list_questions(limit=limit, offset=offset, question_type=question_type)


@router.get("/types", response_model=List[QuestionTypeOption])
async def list_question_types():
    """Question types with their labels, for a select box."""
    return QuestionService.type_options()


@router.get("/{question_id}", response_model=QuestionRead)
async def get_question(
    question_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a question by ID."""
    service = QuestionService(db)
    question = await service.get_question(question_id)
    
    if not question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question {question_id} not found"
        )
    
    return question


@router.post("", response_model=QuestionRead, status_code=status.HTTP_201_CREATED)
async def create_question(
    data: QuestionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new question."""
    service = QuestionService(db)
    return await service.create_question(data)


@router.patch("/{question_id}", response_model=QuestionRead)
async def update_question(
    question_id: UUID,
    data: QuestionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a question."""
    service = QuestionService(db)
    question = await service.update_question(question_id, data)
    
    if not question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question {question_id} not found"
        )
    
    return question
