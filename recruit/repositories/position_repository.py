"""
Position repository - database operations for Position.

Publication scopes are evaluated in SQL against an explicit ``now`` so
they agree with the state derived on the model.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from recruit.models.position import Position
from recruit.models.position_question import PositionQuestion
from recruit.utils.slug import SLUG_SEPARATOR
from recruit.utils.time import ensure_utc, utc_now


class PositionScope:
    """Named position scopes."""
    VIEWABLE = "viewable"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
    EXPIRED = "expired"
    UNEXPIRED = "unexpired"

    ALL = [VIEWABLE, PUBLISHED, UNPUBLISHED, EXPIRED, UNEXPIRED]


def scope_clause(scope: str, now: Optional[datetime] = None):
    """SQL condition selecting the positions in ``scope`` at ``now``."""
    now = ensure_utc(now) or utc_now()
    published = and_(Position.published_at.is_not(None), Position.published_at <= now)
    unpublished = or_(Position.published_at.is_(None), Position.published_at > now)
    expired = and_(Position.expires_at.is_not(None), Position.expires_at <= now)
    unexpired = or_(Position.expires_at.is_(None), Position.expires_at > now)
    
    clauses = {
        PositionScope.PUBLISHED: published,
        PositionScope.UNPUBLISHED: unpublished,
        PositionScope.EXPIRED: expired,
        PositionScope.UNEXPIRED: unexpired,
        PositionScope.VIEWABLE: and_(published, unexpired),
    }
    if scope not in clauses:
        raise ValueError(f"Unknown position scope: {scope}")
    return clauses[scope]


class PositionRepository:
    """Repository for Position database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    def scoped_query(self, scope: Optional[str] = None, now: Optional[datetime] = None) -> Select:
        """Base select over positions, optionally restricted to a scope."""
        query = select(Position)
        if scope is not None:
            query = query.where(scope_clause(scope, now))
        return query
    
    async def list(
        self,
        scope: Optional[str] = None,
        now: Optional[datetime] = None,
        team_id: Optional[UUID] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Position]:
        """List positions, newest first."""
        query = self.scoped_query(scope, now)
        
        if team_id is not None:
            query = query.where(Position.team_id == team_id)
        
        query = query.order_by(Position.created_at.desc()).limit(limit).offset(offset)
        
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def get_by_id(self, position_id: UUID, with_questions: bool = False) -> Optional[Position]:
        """Get a position by ID, optionally loading its questions."""
        query = select(Position).where(Position.id == position_id)
        if with_questions:
            query = query.options(self._questions_loader())
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
    
    async def get_by_slug(
        self,
        slug: str,
        with_questions: bool = False,
        scope: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[Position]:
        """Get a position by slug (case-insensitive), optionally within a scope."""
        query = self.scoped_query(scope, now).where(func.lower(Position.slug) == slug.lower())
        if with_questions:
            query = query.options(self._questions_loader())
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
    
    async def existing_slugs(self, base: str) -> List[str]:
        """Slugs equal to ``base`` or of the form ``base--N`` (case-insensitive)."""
        lowered = func.lower(Position.slug)
        base = base.lower()
        result = await self.db.execute(
            select(Position.slug).where(
                or_(
                    lowered == base,
                    lowered.like(f"{base}{SLUG_SEPARATOR}%"),
                )
            )
        )
        return list(result.scalars().all())
    
    async def add(self, position: Position) -> Position:
        """Persist a new position."""
        self.db.add(position)
        await self.db.flush()
        return position
    
    async def save(self, position: Position) -> Position:
        """Flush pending changes to a persistent position."""
        await self.db.flush()
        return position
    
    @staticmethod
    def _questions_loader():
        return selectinload(Position.position_questions).joinedload(PositionQuestion.question)
