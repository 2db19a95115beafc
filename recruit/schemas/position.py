"""
Position Pydantic schemas.
"""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from recruit.schemas.base import TimestampedRead
from recruit.schemas.question import QuestionRead


class PositionBase(BaseModel):
    """Fields shared by create and update payloads."""
    
    title: Optional[str] = Field(default=None, max_length=255)
    short_description: Optional[str] = None
    general_description: Optional[str] = None
    position_description: Optional[str] = None
    applicant_description: Optional[str] = None
    paid_description: Optional[str] = None
    duration: Optional[str] = Field(default=None, max_length=255)
    time_commitment: Optional[str] = None
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class PositionCreate(PositionBase):
    """
    Schema for creating a position.
    
    Presence and cross-field rules are checked on the model so that every
    failure is reported per field.
    """
    
    team_id: UUID
    paid: bool = False
    contact_emails: List[EmailStr] = Field(default_factory=list)


class PositionUpdate(PositionBase):
    """Schema for updating a position. ``contact_emails`` replaces the list."""
    
    team_id: Optional[UUID] = None
    paid: Optional[bool] = None
    contact_emails: Optional[List[EmailStr]] = None


class PositionRead(TimestampedRead):
    """Schema for reading position data (API response)."""
    
    team_id: UUID
    title: str
    slug: str
    short_description: Optional[str] = None
    general_description: Optional[str] = None
    rendered_general_description: Optional[str] = None
    position_description: Optional[str] = None
    rendered_position_description: Optional[str] = None
    applicant_description: Optional[str] = None
    rendered_applicant_description: Optional[str] = None
    paid: bool
    paid_description: Optional[str] = None
    rendered_paid_description: Optional[str] = None
    duration: Optional[str] = None
    time_commitment: Optional[str] = None
    human_time_commitment: str = ""
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    status: str
    human_status: str
    viewable: bool
    contact_emails: List[str] = Field(default_factory=list)
    
    @field_validator("contact_emails", mode="before")
    @classmethod
    def _emails_as_strings(cls, value: Any) -> List[str]:
        return [str(item) for item in value or []]


class PositionQuestionCreate(BaseModel):
    """Attach a question to a position; order defaults to the next free slot."""
    
    question_id: UUID
    required: Optional[bool] = None
    order_position: Optional[int] = Field(default=None, ge=1)


class PositionQuestionUpdate(BaseModel):
    """Change the order or the required override of an attached question."""
    
    required: Optional[bool] = None
    order_position: Optional[int] = Field(default=None, ge=1)


class PositionQuestionRead(TimestampedRead):
    """Schema for reading an attached question."""
    
    position_id: UUID
    question_id: UUID
    order_position: Optional[int] = None
    required: Optional[bool] = None
    question: QuestionRead


class PositionSearchParams(BaseModel):
    """Filters accepted by the public position search."""
    
    q: Optional[str] = None
    team_id: Optional[UUID] = None
    paid: Optional[bool] = None
    time_commitment: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)
