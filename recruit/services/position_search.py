"""
Position search over a base query (normally the viewable scope).
"""

from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from recruit.models.position import Position


class PositionSearch:
    """
    Filters a position query by free text and a few attributes.
    
    Options: ``q``, ``team_id``, ``paid``, ``time_commitment``, ``limit``,
    ``offset``. Unknown options are ignored.
    """
    
    def __init__(self, base_query: Select, **options: Any):
        self.base_query = base_query
        self.q: Optional[str] = options.get("q")
        self.team_id: Optional[UUID] = options.get("team_id")
        self.paid: Optional[bool] = options.get("paid")
        self.time_commitment: Optional[str] = options.get("time_commitment")
        self.limit: int = options.get("limit", 50)
        self.offset: int = options.get("offset", 0)
    
    def query(self) -> Select:
        query = self.base_query
        
        if self.q and self.q.strip():
            pattern = f"%{self.q.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(Position.title).like(pattern),
                    func.lower(func.coalesce(Position.short_description, "")).like(pattern),
                )
            )
        if self.team_id is not None:
            query = query.where(Position.team_id == self.team_id)
        if self.paid is not None:
            query = query.where(Position.paid == self.paid)
        if self.time_commitment:
            query = query.where(Position.time_commitment == self.time_commitment)
        
        return (
            query.order_by(Position.published_at.desc(), Position.title.asc())
            .limit(self.limit)
            .offset(self.offset)
        )
    
    async def results(self, db: AsyncSession) -> List[Position]:
        result = await db.execute(self.query())
        return list(result.scalars().all())
