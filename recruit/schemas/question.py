"""
Question Pydantic schemas.

Clients never write ``metadata`` directly; they send ``editable_metadata``
(one choice per line, or a list) which the model normalises.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field

from recruit.models.question import QuestionType
from recruit.schemas.base import TimestampedRead

EditableMetadata = Union[str, List[str], None]


class QuestionCreate(BaseModel):
    """Schema for creating a question."""
    
    question: str = Field(..., max_length=255)
    short_name: str = Field(..., max_length=255)
    question_type: QuestionType
    hint: Optional[str] = None
    default_value: Optional[str] = Field(default=None, max_length=255)
    required_by_default: bool = False
    editable_metadata: EditableMetadata = None


class QuestionUpdate(BaseModel):
    """Schema for updating a question (all fields optional)."""
    
    question: Optional[str] = Field(default=None, max_length=255)
    short_name: Optional[str] = Field(default=None, max_length=255)
    question_type: Optional[QuestionType] = None
    hint: Optional[str] = None
    default_value: Optional[str] = Field(default=None, max_length=255)
    required_by_default: Optional[bool] = None
    editable_metadata: EditableMetadata = None


class QuestionRead(TimestampedRead):
    """Schema for reading question data (API response)."""
    
    question: str
    short_name: str
    question_type: str
    human_question_type: Optional[str] = None
    hint: Optional[str] = None
    default_value: Optional[str] = None
    required_by_default: bool
    metadata: Optional[Any] = Field(default=None, validation_alias="question_metadata")
    editable_metadata: str = ""


class QuestionTypeOption(BaseModel):
    """One entry of the question type select box."""
    
    label: str
    value: str
