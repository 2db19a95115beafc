"""
Position application business logic service.

Checks answers against the position's questions, stores the application
and notifies the position's contacts.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from recruit.errors import ValidationFailed
from recruit.models.answer import Answer
from recruit.models.position import Position
from recruit.models.position_application import PositionApplication
from recruit.models.position_question import PositionQuestion
from recruit.models.question import QuestionType
from recruit.repositories.application_repository import PositionApplicationRepository
from recruit.repositories.position_question_repository import PositionQuestionRepository
from recruit.schemas.application import AnswerValue, PositionApplicationCreate
from recruit.services.application_reporter import PositionApplicationReporter
from recruit.services.notification_service import PositionNotifier

logger = logging.getLogger(__name__)


def _is_blank(value: AnswerValue) -> bool:
    if value is None:
        return True
    if isinstance(value, list):
        return not any(v.strip() for v in value)
    return not value.strip()


def answer_errors(position_question: PositionQuestion, value: AnswerValue) -> List[str]:
    """Problems with one answer; empty when it is acceptable."""
    question = position_question.question
    directive = position_question.to_rendering_directive()
    
    if _is_blank(value):
        return ["can't be blank"] if directive.required else []
    
    if question.is_type(QuestionType.CHECK_BOXES):
        picked = value if isinstance(value, list) else [value]
        picked = [v for v in picked if v.strip()]
        if question.choices and any(v not in question.choices for v in picked):
            return ["is not included in the list"]
        return []
    
    if isinstance(value, list):
        return ["must be a single value"]
    
    if question.is_type(QuestionType.MULTIPLE_CHOICE) or question.is_type(QuestionType.SELECT):
        if question.choices and value not in question.choices:
            return ["is not included in the list"]
    elif question.is_type(QuestionType.DATE_TIME):
        try:
            datetime.fromisoformat(value.strip())
        except ValueError:
            return ["is not a valid date and time"]
    return []


def _clean(question_type: str, value: AnswerValue) -> AnswerValue:
    if isinstance(value, list):
        return [v.strip() for v in value if v.strip()]
    if question_type == QuestionType.CHECK_BOXES.value:
        return [value.strip()]
    return value.strip()


class PositionApplicationService:
    """Service for application business logic."""
    
    def __init__(self, db: AsyncSession, notifier: Optional[PositionNotifier] = None):
        self.db = db
        self.repository = PositionApplicationRepository(db)
        self.position_questions = PositionQuestionRepository(db)
        self.notifier = notifier
    
    async def submit(self, position: Position, data: PositionApplicationCreate) -> PositionApplication:
        """
        Store an application for ``position`` and send the notification.
        
        Raises ValidationFailed with one entry per offending answer, keyed
        ``answers.<short_name>``.
        """
        ordered = await self.position_questions.ordered(position)
        by_question: Dict[UUID, PositionQuestion] = {pq.question_id: pq for pq in ordered}
        
        errors: Dict[str, List[str]] = {}
        if not data.full_name.strip():
            errors["full_name"] = ["can't be blank"]
        for question_id in data.answers:
            if question_id not in by_question:
                errors.setdefault(f"answers.{question_id}", []).append("is not a question of this position")
        
        answers: List[Answer] = []
        for pq in ordered:
            value = data.answers.get(pq.question_id)
            problems = answer_errors(pq, value)
            if problems:
                errors.setdefault(f"answers.{pq.question.short_name}", []).extend(problems)
            elif not _is_blank(value):
                answers.append(
                    Answer(position_question=pq, value=_clean(pq.question.question_type, value))
                )
        
        if errors:
            raise ValidationFailed(errors)
        
        application = PositionApplication(
            position=position,
            full_name=data.full_name.strip(),
            email=str(data.email),
            phone=data.phone,
            answers=answers,
        )
        application = await self.repository.add(application)
        await self.db.commit()
        logger.info("Received application %s for position %s", application.id, position.slug)
        
        if self.notifier is not None:
            await self.notifier.notify_application_received(application)
        return application
    
    async def list_applications(
        self,
        position: Position,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[PositionApplication]:
        """Applications of a position, oldest first."""
        return await self.repository.list_for_position(position.id, limit=limit, offset=offset)
    
    async def get_application(self, position: Position, application_id: UUID) -> Optional[PositionApplication]:
        """Get one application of a position."""
        return await self.repository.get_by_id(position.id, application_id)
    
    async def reporter(
        self,
        position: Position,
        fields: Optional[Sequence[str]] = None,
    ) -> PositionApplicationReporter:
        """Report over every application of ``position``."""
        return PositionApplicationReporter(
            position,
            await self.list_applications(position),
            await self.position_questions.ordered(position),
            fields=list(fields) if fields else None,
        )
