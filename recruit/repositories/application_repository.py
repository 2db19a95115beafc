"""
PositionApplication repository - database operations for applications.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.models.position_application import PositionApplication


class PositionApplicationRepository:
    """Repository for PositionApplication database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def list_for_position(
        self,
        position_id: UUID,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[PositionApplication]:
        """Applications of a position, oldest first, with their answers."""
        query = (
            select(PositionApplication)
            .where(PositionApplication.position_id == position_id)
            .order_by(PositionApplication.created_at.asc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def get_by_id(self, position_id: UUID, application_id: UUID) -> Optional[PositionApplication]:
        """Get an application of a position by ID."""
        result = await self.db.execute(
            select(PositionApplication).where(
                PositionApplication.id == application_id,
                PositionApplication.position_id == position_id,
            )
        )
        return result.scalar_one_or_none()
    
    async def add(self, application: PositionApplication) -> PositionApplication:
        """Persist a new application together with its answers."""
        self.db.add(application)
        await self.db.flush()
        return application
