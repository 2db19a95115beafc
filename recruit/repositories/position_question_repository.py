"""
PositionQuestion repository - ordering and attachment of questions.

The next order position comes from an ``OrderPositionSource``. When a
position's questions are already loaded the maximum is taken in memory;
otherwise a ``max()`` aggregate is issued. Callers use the same method
either way.
"""

from typing import Iterable, List, Optional, Protocol
from uuid import UUID

from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.models.position import Position
from recruit.models.position_question import PositionQuestion


class OrderPositionSource(Protocol):
    """Where the current maximum order position of a position comes from."""

    async def max_order_position(self) -> Optional[int]: ...


class LoadedOrderPositions:
    """Order positions already materialised in memory."""

    def __init__(self, position_questions: Iterable[PositionQuestion]):
        self.position_questions = list(position_questions)

    async def max_order_position(self) -> Optional[int]:
        values = [pq.order_position for pq in self.position_questions if pq.order_position is not None]
        return max(values) if values else None


class QueryOrderPositions:
    """Order positions read with an aggregate query."""

    def __init__(self, db: AsyncSession, position_id: UUID):
        self.db = db
        self.position_id = position_id

    async def max_order_position(self) -> Optional[int]:
        result = await self.db.execute(
            select(func.max(PositionQuestion.order_position)).where(
                PositionQuestion.position_id == self.position_id
            )
        )
        return result.scalar_one_or_none()


async def next_order_position(source: OrderPositionSource) -> int:
    """One past the current maximum; 1 when nothing is ordered yet."""
    return (await source.max_order_position() or 0) + 1


def questions_loaded(position: Position) -> bool:
    """True when ``position.position_questions`` is materialised in memory."""
    return "position_questions" not in inspect(position).unloaded


class PositionQuestionRepository:
    """Repository for PositionQuestion database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    def order_source_for(self, position: Position) -> OrderPositionSource:
        """Pick the in-memory source when the association is loaded."""
        if questions_loaded(position):
            return LoadedOrderPositions(position.position_questions)
        return QueryOrderPositions(self.db, position.id)
    
    async def next_order_position(self, position: Position) -> int:
        return await next_order_position(self.order_source_for(position))
    
    async def ordered(self, position: Position) -> List[PositionQuestion]:
        """Questions of ``position`` by order position; sorted in memory when loaded."""
        if questions_loaded(position):
            return sorted(
                position.position_questions,
                key=lambda pq: (pq.order_position is None, pq.order_position or 0),
            )
        result = await self.db.execute(
            select(PositionQuestion)
            .where(PositionQuestion.position_id == position.id)
            .order_by(PositionQuestion.order_position.asc())
        )
        return list(result.scalars().all())
    
    async def get_by_id(self, position_id: UUID, position_question_id: UUID) -> Optional[PositionQuestion]:
        """Get an attached question of a position."""
        result = await self.db.execute(
            select(PositionQuestion).where(
                PositionQuestion.id == position_question_id,
                PositionQuestion.position_id == position_id,
            )
        )
        return result.scalar_one_or_none()
    
    async def add(self, position_question: PositionQuestion) -> PositionQuestion:
        """Persist a new attachment."""
        self.db.add(position_question)
        await self.db.flush()
        return position_question
    
    async def save(self, position_question: PositionQuestion) -> PositionQuestion:
        await self.db.flush()
        return position_question
    
    async def delete(self, position_question: PositionQuestion) -> None:
        await self.db.delete(position_question)
        await self.db.flush()
