"""
Position router - admin API endpoints for positions, their questions and
their applications.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.core.dependencies import get_db
from recruit.models.position import Position
from recruit.repositories.position_repository import PositionScope
from recruit.schemas.application import PositionApplicationRead
from recruit.schemas.position import (
    PositionCreate,
    PositionQuestionCreate,
    PositionQuestionRead,
    PositionQuestionUpdate,
    PositionRead,
    PositionUpdate,
)
from recruit.schemas.rendering import PositionFormField
from recruit.services.application_service import PositionApplicationService
from recruit.services.position_service import PositionService

router = APIRouter(prefix="/admin/positions", tags=["positions"])


async def _get_or_404(service: PositionService, slug: str, with_questions: bool = False) -> Position:
    position = await service.get_position(slug, with_questions=with_questions)
    if not position:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Position {slug} not found"
        )
    return position


@router.get("", response_model=List[PositionRead])
async def list_positions(
    db: AsyncSession = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    scope: Optional[str] = Query(None, pattern="^(" + "|".join(PositionScope.ALL) + ")$"),
    team_id: Optional[UUID] = None,
):
    """
    List positions with pagination.
    
    Filters: scope (viewable, published, unpublished, expired, unexpired), team_id.
    """
    service = PositionService(db)
    return await service.list_positions(scope=scope, team_id=team_id, limit=limit, offset=offset)


@router.get("/{slug}", response_model=PositionRead)
async def get_position(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a position by slug."""
    return await _get_or_404(PositionService(db), slug)


@router.post("", response_model=PositionRead, status_code=status.HTTP_201_CREATED)
async def create_position(
    data: PositionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new position. The slug is derived from the title."""
    service = PositionService(db)
    return await service.create_position(data)


@router.patch("/{slug}", response_model=PositionRead)
async def update_position(
    slug: str,
    data: PositionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a position."""
    service = PositionService(db)
    position = await service.update_position(slug, data)
    
    if not position:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Position {slug} not found"
        )
    
    return position


@router.get("/{slug}/questions", response_model=List[PositionQuestionRead])
async def list_position_questions(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Questions attached to a position, in order."""
    service = PositionService(db)
    position = await _get_or_404(service, slug, with_questions=True)
    return await service.ordered_questions(position)


@router.post(
    "/{slug}/questions",
    response_model=PositionQuestionRead,
    status_code=status.HTTP_201_CREATED,
)
async def attach_question(
    slug: str,
    data: PositionQuestionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Attach a question; without an explicit order it goes last."""
    service = PositionService(db)
    position = await _get_or_404(service, slug)
    return await service.attach_question(position, data)


@router.patch("/{slug}/questions/{position_question_id}", response_model=PositionQuestionRead)
async def update_position_question(
    slug: str,
    position_question_id: UUID,
    data: PositionQuestionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Reorder an attached question or change its required override."""
    service = PositionService(db)
    position = await _get_or_404(service, slug)
    position_question = await service.update_position_question(position, position_question_id, data)
    
    if not position_question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question {position_question_id} is not attached to {slug}"
        )
    
    return position_question


@router.delete("/{slug}/questions/{position_question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_question(
    slug: str,
    position_question_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Detach a question from a position."""
    service = PositionService(db)
    position = await _get_or_404(service, slug)
    
    if not await service.detach_question(position, position_question_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question {position_question_id} is not attached to {slug}"
        )
    
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{slug}/form", response_model=List[PositionFormField], response_model_exclude_none=True)
async def preview_form(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Form field directives for a position, whatever its status."""
    service = PositionService(db)
    position = await _get_or_404(service, slug, with_questions=True)
    return await service.form_fields(position)


@router.get("/{slug}/applications", response_model=List[PositionApplicationRead])
async def list_applications(
    slug: str,
    db: AsyncSession = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """Applications received for a position, oldest first."""
    position = await _get_or_404(PositionService(db), slug)
    service = PositionApplicationService(db)
    return await service.list_applications(position, limit=limit, offset=offset)


@router.get("/{slug}/applications/report.csv")
async def application_report(
    slug: str,
    db: AsyncSession = Depends(get_db),
    fields: Optional[List[str]] = Query(None),
):
    """CSV report of every application, one column per question."""
    position = await _get_or_404(PositionService(db), slug, with_questions=True)
    service = PositionApplicationService(db)
    try:
        reporter = await service.reporter(position, fields=fields)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    
    return Response(
        content=reporter.to_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{reporter.filename}"'},
    )
