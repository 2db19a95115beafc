"""
ContactEmail model.

Addresses notified when an application for a position arrives.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from recruit.models.position import Position


class ContactEmail(TimestampedModel):
    """ContactEmail table - one notification address of a position."""
    
    __tablename__ = "contact_emails"
    
    position_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("positions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    position: Mapped["Position"] = relationship(
        "Position",
        back_populates="contact_emails",
    )
    
    def __str__(self) -> str:
        return self.email
