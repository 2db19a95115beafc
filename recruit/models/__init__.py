"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from recruit.models.team import Team
from recruit.models.question import Question
from recruit.models.position import Position
from recruit.models.position_question import PositionQuestion
from recruit.models.contact_email import ContactEmail
from recruit.models.position_application import PositionApplication
from recruit.models.answer import Answer

# Export all models
__all__ = [
    "Team",
    "Question",
    "Position",
    "PositionQuestion",
    "ContactEmail",
    "PositionApplication",
    "Answer",
]
