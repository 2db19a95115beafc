"""
Position business logic service.

Handles slug assignment, markdown rendering and validation on save, and
the ordered list of questions attached to a position.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.errors import AppError, ValidationFailed
from recruit.models.contact_email import ContactEmail
from recruit.models.position import Position
from recruit.models.position_question import PositionQuestion
from recruit.repositories.position_question_repository import PositionQuestionRepository
from recruit.repositories.position_repository import PositionRepository, PositionScope
from recruit.repositories.question_repository import QuestionRepository
from recruit.repositories.team_repository import TeamRepository
from recruit.schemas.position import (
    PositionCreate,
    PositionQuestionCreate,
    PositionQuestionUpdate,
    PositionSearchParams,
    PositionUpdate,
)
from recruit.schemas.rendering import PositionFormField
from recruit.services.position_search import PositionSearch
from recruit.utils.slug import slugify, uniquify_slug

logger = logging.getLogger(__name__)

ORDER_CONFLICT_MESSAGE = "Another question already uses that order position"


class PositionService:
    """Service for position business logic."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = PositionRepository(db)
        self.position_questions = PositionQuestionRepository(db)
        self.questions = QuestionRepository(db)
        self.teams = TeamRepository(db)
    
    async def list_positions(
        self,
        scope: Optional[str] = None,
        team_id: Optional[UUID] = None,
        limit: int = 50,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> List[Position]:
        """List positions, optionally within a publication scope."""
        return await self.repository.list(scope=scope, now=now, team_id=team_id, limit=limit, offset=offset)
    
    async def get_position(
        self,
        slug: str,
        with_questions: bool = False,
        scope: Optional[str] = None,
    ) -> Optional[Position]:
        """Get a position by slug."""
        return await self.repository.get_by_slug(slug, with_questions=with_questions, scope=scope)
    
    def search(self, params: PositionSearchParams) -> PositionSearch:
        """Search over the currently viewable positions."""
        return PositionSearch(
            self.repository.scoped_query(PositionScope.VIEWABLE),
            **params.model_dump(exclude_none=True),
        )
    
    # --- create / update ---
    
    async def create_position(self, data: PositionCreate) -> Position:
        """Create a position with a unique slug derived from its title."""
        values = data.model_dump(exclude={"contact_emails"})
        position = Position(**values)
        position.contact_emails = [ContactEmail(email=str(e)) for e in data.contact_emails]
        
        self._raise_if_invalid(position, await self._team_errors(position.team_id))
        
        base = slugify(position.title, fallback="position")
        position.slug = uniquify_slug(base, await self.repository.existing_slugs(base))
        position.render_markdown_fields()
        
        position = await self._flush_unique(
            self.repository.add(position),
            "slug_conflict",
            "Another position took that slug, try again",
        )
        logger.info("Created position %s", position.slug)
        return position
    
    async def update_position(self, slug: str, data: PositionUpdate) -> Optional[Position]:
        """Update a position; the slug never changes."""
        position = await self.repository.get_by_slug(slug)
        if not position:
            return None
        
        values: Dict[str, Any] = data.model_dump(exclude_unset=True)
        emails = values.pop("contact_emails", None)
        for field in ("team_id", "paid"):
            if field in values and values[field] is None:
                del values[field]
        team_errors = await self._team_errors(values.get("team_id", position.team_id))
        for field, value in values.items():
            setattr(position, field, value)
        if emails is not None:
            position.contact_emails = [ContactEmail(email=str(e)) for e in emails]
        
        self._raise_if_invalid(position, team_errors)
        position.render_markdown_fields()
        position = await self.repository.save(position)
        logger.info("Updated position %s", position.slug)
        return position
    
    async def _team_errors(self, team_id: Optional[UUID]) -> Dict[str, List[str]]:
        if team_id is not None and await self.teams.get_by_id(team_id) is None:
            return {"team": ["must exist"]}
        return {}
    
    @staticmethod
    def _raise_if_invalid(position: Position, extra: Dict[str, List[str]]) -> None:
        errors = position.validation_errors()
        for field, messages in extra.items():
            errors.setdefault(field, []).extend(messages)
        if errors:
            raise ValidationFailed(errors)
    
    # --- questions ---
    
    async def ordered_questions(self, position: Position) -> List[PositionQuestion]:
        """Attached questions in order."""
        return await self.position_questions.ordered(position)
    
    async def attach_question(self, position: Position, data: PositionQuestionCreate) -> PositionQuestion:
        """Attach a question at the given order position, or at the end."""
        question = await self.questions.get_by_id(data.question_id)
        if question is None:
            raise ValidationFailed({"question_id": ["must exist"]})
        
        order_position = data.order_position
        if order_position is None:
            order_position = await self.position_questions.next_order_position(position)
        
        position_question = PositionQuestion(
            position=position,
            question=question,
            order_position=order_position,
            required=data.required,
        )
        await self._flush_unique(
            self.position_questions.add(position_question),
            "order_conflict",
            ORDER_CONFLICT_MESSAGE,
        )
        logger.info(
            "Attached question %s to position %s at %s",
            question.short_name,
            position.slug,
            order_position,
        )
        return position_question
    
    async def update_position_question(
        self,
        position: Position,
        position_question_id: UUID,
        data: PositionQuestionUpdate,
    ) -> Optional[PositionQuestion]:
        """Change the order or required override of an attached question."""
        position_question = await self.position_questions.get_by_id(position.id, position_question_id)
        if not position_question:
            return None
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(position_question, field, value)
        await self._flush_unique(
            self.position_questions.save(position_question),
            "order_conflict",
            ORDER_CONFLICT_MESSAGE,
        )
        return position_question
    
    async def detach_question(self, position: Position, position_question_id: UUID) -> bool:
        """Remove a question from a position. Returns False when not attached."""
        position_question = await self.position_questions.get_by_id(position.id, position_question_id)
        if not position_question:
            return False
        await self.position_questions.delete(position_question)
        logger.info("Detached question %s from position %s", position_question.question_id, position.slug)
        return True
    
    async def form_fields(self, position: Position) -> List[PositionFormField]:
        """Rendering directives for every attached question, in order."""
        return [
            PositionFormField(
                position_question_id=pq.id,
                question_id=pq.question_id,
                short_name=pq.question.short_name,
                order_position=pq.order_position,
                directive=pq.to_rendering_directive(),
            )
            for pq in await self.ordered_questions(position)
        ]
    
    @staticmethod
    async def _flush_unique(pending, code: str, message: str):
        # slugs and per-position order positions are unique in the schema
        try:
            return await pending
        except IntegrityError as exc:
            raise AppError(409, code, message) from exc
