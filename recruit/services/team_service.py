"""
Team business logic service.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from recruit.models.team import Team
from recruit.repositories.team_repository import TeamRepository
from recruit.schemas.team import TeamCreate


class TeamService:
    """Service for team business logic."""
    
    def __init__(self, db: AsyncSession):
        self.repository = TeamRepository(db)
    
    async def list_teams(self, limit: int = 50, offset: int = 0) -> List[Team]:
        """List teams."""
        return await self.repository.list(limit=limit, offset=offset)
    
    async def get_team(self, team_id: UUID) -> Optional[Team]:
        """Get a team by ID."""
        return await self.repository.get_by_id(team_id)
    
    async def create_team(self, data: TeamCreate) -> Team:
        """Create a new team."""
        return await self.repository.create(data)
