"""
PositionQuestion model.

Join between a position and a question, carrying the question's order on
that position and an optional per-position ``required`` override.
"""

import uuid
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from recruit.models.answer import Answer
    from recruit.models.position import Position
    from recruit.models.question import Question


class PositionQuestion(TimestampedModel):
    """PositionQuestion table - ordered questions attached to a position."""
    
    __tablename__ = "position_questions"
    
    position_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("positions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("questions.id"),
        nullable=False,
        index=True,
    )
    
    order_position: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    
    # None means "use the question's required_by_default"
    required: Mapped[Optional[bool]] = mapped_column(
        Boolean,
        nullable=True,
    )
    
    position: Mapped["Position"] = relationship(
        "Position",
        back_populates="position_questions",
    )
    
    question: Mapped["Question"] = relationship(
        "Question",
        back_populates="position_questions",
        lazy="joined",
    )
    
    # Detaching a question drops the answers given to it
    answers: Mapped[List["Answer"]] = relationship(
        "Answer",
        back_populates="position_question",
        cascade="all, delete-orphan",
    )
    
    __table_args__ = (
        UniqueConstraint("position_id", "order_position", name="uq_position_question_order"),
    )
    
    def to_rendering_directive(self):
        return self.question.to_rendering_directive(self)
