"""
Form rendering directives.

A directive is a pure description of how one question should be presented
as a form field; rendering it into HTML is left to the client.
"""

from enum import Enum
from typing import List, Optional, Protocol
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class WidgetKind(str, Enum):
    """Input widgets a question can be rendered as."""
    DATETIME_PICKER = "datetime_picker"
    STRING = "string"
    TEXT = "text"
    RADIO_BUTTONS = "radio_buttons"
    CHECK_BOXES = "check_boxes"
    SELECT = "select"


class SupportsRequired(Protocol):
    """Anything carrying a per-answer ``required`` override (``None`` = no override)."""

    @property
    def required(self) -> Optional[bool]: ...


class RenderingDirective(BaseModel):
    """
    Form field options for a single question.

    ``widget`` is ``None`` when the question type has no explicit mapping
    and the client should fall back to its default input. ``hint`` and
    ``choices`` are omitted from serialized output when absent.
    """

    label: str
    widget: Optional[WidgetKind] = None
    hint: Optional[str] = None
    choices: Optional[List[str]] = None
    required: bool = False

    model_config = ConfigDict(use_enum_values=True)


class PositionFormField(BaseModel):
    """A rendering directive bound to the position question it answers."""

    position_question_id: UUID
    question_id: UUID
    short_name: str
    order_position: Optional[int] = None
    directive: RenderingDirective
