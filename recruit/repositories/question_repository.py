"""
Question repository - database operations for Question.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.models.question import Question


class QuestionRepository:
    """Repository for Question database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def list(
        self,
        limit: int = 50,
        offset: int = 0,
        question_type: Optional[str] = None,
    ) -> List[Question]:
        """List questions with an optional type filter."""
        query = select(Question)
        
        if question_type is not None:
            query = query.where(Question.question_type == question_type)
        
        query = query.order_by(Question.short_name.asc()).limit(limit).offset(offset)
        
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def get_by_id(self, question_id: UUID) -> Optional[Question]:
        """Get a question by ID."""
        return await self.db.get(Question, question_id)
    
    async def add(self, question: Question) -> Question:
        """Persist a question built by the service."""
        self.db.add(question)
        await self.db.flush()
        await self.db.refresh(question)
        return question
    
    async def save(self, question: Question) -> Question:
        """Flush pending changes to a persistent question."""
        await self.db.flush()
        await self.db.refresh(question)
        return question
