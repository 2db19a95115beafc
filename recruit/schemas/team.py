"""
Team Pydantic schemas.
"""

from pydantic import BaseModel, Field

from recruit.schemas.base import TimestampedRead


class TeamCreate(BaseModel):
    """Schema for creating a team."""
    
    name: str = Field(..., min_length=1, max_length=255)


class TeamRead(TimestampedRead):
    """Schema for reading team data."""
    
    name: str
