"""
Public router - what applicants see: viewable positions, their forms, and
application submission.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.core.dependencies import get_db, get_notifier
from recruit.models.position import Position
from recruit.repositories.position_repository import PositionScope
from recruit.schemas.application import PositionApplicationCreate, PositionApplicationRead
from recruit.schemas.position import PositionRead, PositionSearchParams
from recruit.schemas.rendering import PositionFormField
from recruit.services.application_service import PositionApplicationService
from recruit.services.notification_service import PositionNotifier
from recruit.services.position_service import PositionService

router = APIRouter(prefix="/positions", tags=["public"])


async def _viewable_or_404(service: PositionService, slug: str, with_questions: bool = False) -> Position:
    position = await service.get_position(slug, with_questions=with_questions, scope=PositionScope.VIEWABLE)
    if not position:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Position {slug} not found"
        )
    return position


@router.get("", response_model=List[PositionRead])
async def search_positions(
    db: AsyncSession = Depends(get_db),
    q: Optional[str] = None,
    team_id: Optional[UUID] = None,
    paid: Optional[bool] = None,
    time_commitment: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """
    Search the currently viewable positions.
    
    Filters: q (title or short description), team_id, paid, time_commitment.
    """
    params = PositionSearchParams(
        q=q,
        team_id=team_id,
        paid=paid,
        time_commitment=time_commitment,
        limit=limit,
        offset=offset,
    )
    return await PositionService(db).search(params).results(db)


@router.get("/{slug}", response_model=PositionRead)
async def get_position(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a viewable position by slug."""
    return await _viewable_or_404(PositionService(db), slug)


@router.get("/{slug}/form", response_model=List[PositionFormField], response_model_exclude_none=True)
async def get_form(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Form field directives for applying to a viewable position."""
    service = PositionService(db)
    position = await _viewable_or_404(service, slug, with_questions=True)
    return await service.form_fields(position)


@router.post(
    "/{slug}/applications",
    response_model=PositionApplicationRead,
    status_code=status.HTTP_201_CREATED,
)
async def submit_application(
    slug: str,
    data: PositionApplicationCreate,
    db: AsyncSession = Depends(get_db),
    notifier: PositionNotifier = Depends(get_notifier),
):
    """Apply to a viewable position. The position's contacts are notified."""
    position = await _viewable_or_404(PositionService(db), slug, with_questions=True)
    service = PositionApplicationService(db, notifier=notifier)
    return await service.submit(position, data)
