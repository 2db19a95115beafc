"""
Answer model.

The value an applicant gave for one question of a position.
"""

import uuid
from typing import Any, Optional, TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from recruit.models.position_application import PositionApplication
    from recruit.models.position_question import PositionQuestion
    from recruit.models.question import Question


class Answer(TimestampedModel):
    """Answer table - a string, or a list of strings for check boxes."""
    
    __tablename__ = "answers"
    
    application_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("position_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    position_question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("position_questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    value: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    
    application: Mapped["PositionApplication"] = relationship(
        "PositionApplication",
        back_populates="answers",
    )
    
    position_question: Mapped["PositionQuestion"] = relationship(
        "PositionQuestion",
        back_populates="answers",
        lazy="joined",
    )
    
    @property
    def required(self) -> Optional[bool]:
        return self.position_question.required
    
    @property
    def question(self) -> "Question":
        return self.position_question.question
    
    @property
    def display_value(self) -> str:
        if self.value is None:
            return ""
        if isinstance(self.value, list):
            return ", ".join(str(v) for v in self.value)
        return str(self.value)
    
    @property
    def short_name(self) -> str:
        return self.question.short_name
