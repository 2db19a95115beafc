"""
PositionApplication model.

An applicant's submission for a position, with one answer per question.
"""

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from recruit.models.answer import Answer
    from recruit.models.position import Position


class PositionApplication(TimestampedModel):
    """PositionApplication table - a submitted application."""
    
    __tablename__ = "position_applications"
    
    position_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("positions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    
    position: Mapped["Position"] = relationship(
        "Position",
        back_populates="applications",
    )
    
    answers: Mapped[List["Answer"]] = relationship(
        "Answer",
        back_populates="application",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    
    @property
    def submitted_at(self) -> datetime:
        return self.created_at
