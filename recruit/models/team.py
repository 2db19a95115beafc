"""
Team model.

A team owns positions and is linked from application notifications.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from recruit.models.position import Position


class Team(TimestampedModel):
    """Team table - the organisation unit publishing positions."""
    
    __tablename__ = "teams"
    
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    positions: Mapped[List["Position"]] = relationship(
        "Position",
        back_populates="team",
    )
