"""
Position model.

An opening published by a team, with markdown descriptions, a visibility
window and an ordered list of questions for applicants.
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.core.i18n import humanize, translate
from recruit.db.types import UTCDateTime
from recruit.models.base_model import TimestampedModel
from recruit.utils.markdown import render_markdown
from recruit.utils.time import ensure_utc, utc_now

if TYPE_CHECKING:
    from recruit.models.contact_email import ContactEmail
    from recruit.models.position_application import PositionApplication
    from recruit.models.position_question import PositionQuestion
    from recruit.models.question import Question
    from recruit.models.team import Team


TIME_COMMITMENTS: List[str] = [
    "1_hour",
    "2_hours",
    "half_a_day",
    "a_full_day",
    "a_few_days",
    "ongoing",
]

MARKDOWN_FIELDS = (
    "paid_description",
    "general_description",
    "position_description",
    "applicant_description",
)

REQUIRED_FIELDS = (
    "title",
    "short_description",
    "duration",
    "time_commitment",
    "general_description",
    "position_description",
    "applicant_description",
)


class PositionStatus:
    """Derived publication states of a position."""
    DRAFT = "draft"
    PUBLISHED = "published"
    EXPIRED = "expired"

    ALL = [DRAFT, PUBLISHED, EXPIRED]


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Position(TimestampedModel):
    """
    Position table - an opening applicants can apply to.
    
    Publication state is never stored; it is derived from ``published_at``
    and ``expires_at`` each time it is read.
    """
    
    __tablename__ = "positions"
    
    team_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("teams.id"),
        nullable=False,
        index=True,
    )
    
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    # Assigned once on creation
    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    short_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    # Markdown sources and their rendered HTML
    general_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rendered_general_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    position_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rendered_position_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    applicant_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rendered_applicant_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    paid_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rendered_paid_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    duration: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    
    time_commitment: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    
    paid: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    
    # Visibility window
    published_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime,
        nullable=True,
        index=True,
    )
    
    expires_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime,
        nullable=True,
        index=True,
    )
    
    # Relationships
    team: Mapped["Team"] = relationship(
        "Team",
        back_populates="positions",
        lazy="joined",
    )
    
    position_questions: Mapped[List["PositionQuestion"]] = relationship(
        "PositionQuestion",
        back_populates="position",
        cascade="all, delete-orphan",
    )
    
    questions: Mapped[List["Question"]] = relationship(
        "Question",
        secondary="position_questions",
        viewonly=True,
    )
    
    contact_emails: Mapped[List["ContactEmail"]] = relationship(
        "ContactEmail",
        back_populates="position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    
    applications: Mapped[List["PositionApplication"]] = relationship(
        "PositionApplication",
        back_populates="position",
        cascade="all, delete-orphan",
    )
    
    def to_param(self) -> str:
        return self.slug
    
    # --- visibility window ---
    
    def is_published(self, now: Optional[datetime] = None) -> bool:
        now = ensure_utc(now) or utc_now()
        return self.published_at is not None and ensure_utc(self.published_at) <= now
    
    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = ensure_utc(now) or utc_now()
        return self.expires_at is not None and ensure_utc(self.expires_at) <= now
    
    def is_viewable(self, now: Optional[datetime] = None) -> bool:
        return self.is_published(now) and not self.is_expired(now)
    
    def status_at(self, now: Optional[datetime] = None) -> str:
        if not self.is_published(now):
            return PositionStatus.DRAFT
        if self.is_expired(now):
            return PositionStatus.EXPIRED
        return PositionStatus.PUBLISHED
    
    @property
    def published(self) -> bool:
        return self.is_published()
    
    @property
    def expired(self) -> bool:
        return self.is_expired()
    
    @property
    def viewable(self) -> bool:
        return self.is_viewable()
    
    @property
    def status(self) -> str:
        return self.status_at()
    
    @property
    def human_status(self) -> str:
        status = self.status
        return translate(status, scope="ui.position_status", default=humanize(status))
    
    @property
    def human_time_commitment(self) -> str:
        if not self.time_commitment:
            return ""
        code = str(self.time_commitment)
        return translate(code, scope="ui.time_commitments", default=humanize(code))
    
    # --- saving ---
    
    def render_markdown_fields(self) -> None:
        """Refresh every ``rendered_*`` column from its markdown source."""
        for field in MARKDOWN_FIELDS:
            setattr(self, f"rendered_{field}", render_markdown(getattr(self, field)))
    
    def validation_errors(self, now: Optional[datetime] = None) -> Dict[str, List[str]]:
        """
        Field-level errors; empty when the position can be saved.
        
        Contact emails are only mandatory while the position is published
        at ``now``.
        """
        errors: Dict[str, List[str]] = {}
        
        def add(field: str, message: str) -> None:
            errors.setdefault(field, []).append(message)
        
        for field in REQUIRED_FIELDS:
            if _blank(getattr(self, field)):
                add(field, "can't be blank")
        if self.team_id is None and self.team is None:
            add("team", "can't be blank")
        
        if self.time_commitment and self.time_commitment not in TIME_COMMITMENTS:
            add("time_commitment", "is not included in the list")
        
        if self.paid and _blank(self.paid_description):
            add("paid_description", "can't be blank")
        
        if self.expires_at is not None and self.published_at is not None:
            if ensure_utc(self.expires_at) <= ensure_utc(self.published_at):
                add("expires_at", "must be after the published at date")
        
        if self.is_published(now) and not self.contact_emails:
            add("contact_emails", "can't be blank")
        
        return errors


Index("uq_positions_slug_lower", func.lower(Position.slug), unique=True)
