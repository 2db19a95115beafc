"""
Team repository - database operations for Team.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.models.team import Team
from recruit.schemas.team import TeamCreate


class TeamRepository:
    """Repository for Team database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def list(self, limit: int = 50, offset: int = 0) -> List[Team]:
        """List teams by name."""
        query = select(Team).order_by(Team.name.asc()).limit(limit).offset(offset)
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        """Get a team by ID."""
        return await self.db.get(Team, team_id)
    
    async def create(self, data: TeamCreate) -> Team:
        """Create a new team."""
        team = Team(**data.model_dump())
        self.db.add(team)
        await self.db.flush()
        await self.db.refresh(team)
        return team
