"""
Question model.

A reusable prompt with a declared answer type and optional choice metadata.
Positions reference questions through ``PositionQuestion``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recruit.core.i18n import humanize, translate
from recruit.models.base_model import TimestampedModel
from recruit.schemas.rendering import RenderingDirective, SupportsRequired, WidgetKind
from recruit.utils.question_metadata import (
    QuestionMetadata,
    editable_metadata_view,
    flatten_choices,
    parse_editable_metadata,
)

if TYPE_CHECKING:
    from recruit.models.position_question import PositionQuestion


class QuestionType(str, Enum):
    """Valid question types, in the order they are offered to administrators."""
    DATE_TIME = "date_time"
    SHORT_TEXT = "short_text"
    TEXT = "text"
    MULTIPLE_CHOICE = "multiple_choice"
    CHECK_BOXES = "check_boxes"
    SELECT = "select"
    SCALE = "scale"


VALID_TYPES: List[str] = [t.value for t in QuestionType]

# scale has no dedicated widget; clients use their default input
FIELD_TYPE_MAPPING: Dict[str, WidgetKind] = {
    QuestionType.DATE_TIME.value: WidgetKind.DATETIME_PICKER,
    QuestionType.SHORT_TEXT.value: WidgetKind.STRING,
    QuestionType.TEXT.value: WidgetKind.TEXT,
    QuestionType.MULTIPLE_CHOICE.value: WidgetKind.RADIO_BUTTONS,
    QuestionType.CHECK_BOXES.value: WidgetKind.CHECK_BOXES,
    QuestionType.SELECT.value: WidgetKind.SELECT,
}

CHOICE_TYPES = {
    QuestionType.MULTIPLE_CHOICE.value,
    QuestionType.CHECK_BOXES.value,
    QuestionType.SELECT.value,
}


def human_question_type_name(question_type: Any) -> str:
    """Localised label for a question type code."""
    code = question_type.value if isinstance(question_type, QuestionType) else str(question_type)
    return translate(code, scope="ui.question_types", default=humanize(code))


def types_for_select() -> List[Tuple[str, str]]:
    """(label, code) pairs for every valid type, in declaration order."""
    return [(human_question_type_name(t), t) for t in VALID_TYPES]


class Question(TimestampedModel):
    """
    Question table - a prompt shown to applicants.
    
    ``metadata`` is stored as JSON: absent, a scalar, or an ordered list of
    choice labels. The attribute is named ``question_metadata`` on the class
    because ``metadata`` is reserved by SQLAlchemy.
    """
    
    __tablename__ = "questions"
    
    question: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    short_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    question_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    
    hint: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    
    default_value: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    
    required_by_default: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    
    question_metadata: Mapped[Optional[Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
    )
    
    position_questions: Mapped[List["PositionQuestion"]] = relationship(
        "PositionQuestion",
        back_populates="question",
    )
    
    def is_type(self, question_type: Any) -> bool:
        """True when this question is of the given type (enum or code)."""
        code = question_type.value if isinstance(question_type, QuestionType) else question_type
        return self.question_type == code
    
    @property
    def human_question_type(self) -> Optional[str]:
        if not self.question_type:
            return None
        return human_question_type_name(self.question_type)
    
    @property
    def editable_metadata(self) -> str:
        return editable_metadata_view(self.question_metadata)
    
    @editable_metadata.setter
    def editable_metadata(self, value: Any) -> None:
        self.question_metadata = parse_editable_metadata(value)
    
    @property
    def choices(self) -> List[str]:
        return flatten_choices(self.question_metadata)
    
    def validation_errors(self) -> Dict[str, List[str]]:
        """Field-level errors; empty when the question can be saved."""
        errors: Dict[str, List[str]] = {}
        for field in ("question", "short_name", "question_type"):
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.setdefault(field, []).append("can't be blank")
        if self.question_type and self.question_type not in VALID_TYPES:
            errors.setdefault("question_type", []).append("is not included in the list")
        return errors
    
    def to_rendering_directive(self, answer: Optional[SupportsRequired] = None) -> RenderingDirective:
        """
        Describe how this question renders as a form field.
        
        The answer's ``required`` override wins when it is not ``None``;
        otherwise ``required_by_default`` applies.
        """
        override = answer.required if answer is not None else None
        return RenderingDirective(
            label=self.question,
            widget=FIELD_TYPE_MAPPING.get(self.question_type),
            hint=self.hint if self.hint and self.hint.strip() else None,
            choices=self.choices if self.question_type in CHOICE_TYPES else None,
            required=bool(self.required_by_default) if override is None else override,
        )
