"""
Question business logic service.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from recruit.errors import ValidationFailed
from recruit.models.question import Question, types_for_select
from recruit.repositories.question_repository import QuestionRepository
from recruit.schemas.question import QuestionCreate, QuestionTypeOption, QuestionUpdate

logger = logging.getLogger(__name__)


def _assign(question: Question, values: Dict[str, Any]) -> None:
    for field, value in values.items():
        if field == "question_type" and value is not None:
            value = getattr(value, "value", value)
        # editable_metadata is a property that normalises into question_metadata
        setattr(question, field, value)


class QuestionService:
    """Service for question business logic."""
    
    def __init__(self, db: AsyncSession):
        self.repository = QuestionRepository(db)
    
    async def list_questions(
        self,
        limit: int = 50,
        offset: int = 0,
        question_type: Optional[str] = None,
    ) -> List[Question]:
        """List questions with filters."""
        return await self.repository.list(limit=limit, offset=offset, question_type=question_type)
    
    async def get_question(self, question_id: UUID) -> Optional[Question]:
        """Get a question by ID."""
        return await self.repository.get_by_id(question_id)
    
    async def create_question(self, data: QuestionCreate) -> Question:
        """Create a question; raises ValidationFailed with field errors."""
        question = Question()
        _assign(question, data.model_dump())
        errors = question.validation_errors()
        if errors:
            raise ValidationFailed(errors)
        question = await self.repository.add(question)
        logger.info("Created question %s (%s)", question.short_name, question.question_type)
        return question
    
    async def update_question(self, question_id: UUID, data: QuestionUpdate) -> Optional[Question]:
        """Update a question; only fields sent by the client change."""
        question = await self.repository.get_by_id(question_id)
        if not question:
            return None
        
        values = data.model_dump(exclude_unset=True)
        # null leaves the stored flag alone
        if values.get("required_by_default", False) is None:
            del values["required_by_default"]
        _assign(question, values)
        errors = question.validation_errors()
        if errors:
            raise ValidationFailed(errors)
        return await self.repository.save(question)
    
    @staticmethod
    def type_options() -> List[QuestionTypeOption]:
        """Question types for a select box, in declaration order."""
        return [QuestionTypeOption(label=label, value=value) for label, value in types_for_select()]
