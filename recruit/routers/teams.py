"""
Team router - admin API endpoints for teams.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.core.dependencies import get_db
from recruit.schemas.team import TeamCreate, TeamRead
from recruit.services.team_service import TeamService

router = APIRouter(prefix="/admin/teams", tags=["teams"])


@router.get("", response_model=List[TeamRead])
async def list_teams(
    db: AsyncSession = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """List teams by name."""
    service = TeamService(db)
    return await service.list_teams(limit=limit, offset=offset)


@router.get("/{team_id}", response_model=TeamRead)
async def get_team(
    team_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a team by ID."""
    service = TeamService(db)
    team = await service.get_team(team_id)
    
    if not team:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team {team_id} not found"
        )
    
    return team


@router.post("", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
async def create_team(
    data: TeamCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new team."""
    service = TeamService(db)
    return await service.create_team(data)
