"""
Position application Pydantic schemas.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

AnswerValue = Union[str, List[str], None]


class PositionApplicationCreate(BaseModel):
    """
    Schema for submitting an application.
    
    ``answers`` maps question ids to the applicant's answer; check box
    questions take a list of choices.
    """
    
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    answers: Dict[UUID, AnswerValue] = Field(default_factory=dict)


class AnswerRead(BaseModel):
    """Schema for reading one answer."""
    
    position_question_id: UUID
    short_name: str
    value: AnswerValue = None
    
    model_config = ConfigDict(from_attributes=True)


class PositionApplicationRead(BaseModel):
    """Schema for reading an application (API response)."""
    
    id: UUID
    position_id: UUID
    full_name: str
    email: str
    phone: Optional[str] = None
    submitted_at: datetime
    answers: List[AnswerRead] = Field(default_factory=list)
    
    model_config = ConfigDict(from_attributes=True)
