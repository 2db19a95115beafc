"""
Unit tests for the question type registry and rendering directives.
"""

from types import SimpleNamespace

import pytest

from recruit.core.i18n import with_translations
from recruit.models.question import (
    VALID_TYPES,
    Question,
    QuestionType,
    human_question_type_name,
    types_for_select,
)
from recruit.schemas.rendering import WidgetKind

pytestmark = pytest.mark.unit


def build_question(**overrides):
    values = {
        "question": "What is your favourite colour?",
        "short_name": "colour",
        "question_type": "short_text",
        "required_by_default": False,
    }
    values.update(overrides)
    return Question(**values)


def test_valid_types_keep_declaration_order():
    assert VALID_TYPES == [
        "date_time",
        "short_text",
        "text",
        "multiple_choice",
        "check_boxes",
        "select",
        "scale",
    ]


def test_types_for_select_pairs_label_with_code():
    options = types_for_select()

    assert [code for _, code in options] == VALID_TYPES
    assert ("Multiple Choice", "multiple_choice") in options


def test_types_for_select_uses_translations():
    with with_translations({"ui": {"question_types": {"select": "Dropdown"}}}):
        options = dict((code, label) for label, code in types_for_select())

    assert options["select"] == "Dropdown"
    assert options["text"] == "Text"


def test_human_question_type_name_falls_back_to_humanized_code():
    assert human_question_type_name("free_form_essay") == "Free form essay"
    assert human_question_type_name(QuestionType.DATE_TIME) == "Date and Time"


def test_human_question_type():
    assert build_question(question_type="check_boxes").human_question_type == "Check Boxes"
    assert build_question(question_type="").human_question_type is None
    assert build_question(question_type=None).human_question_type is None


def test_is_type_accepts_enum_or_code():
    question = build_question(question_type="select")

    assert question.is_type("select")
    assert question.is_type(QuestionType.SELECT)
    assert not question.is_type(QuestionType.CHECK_BOXES)


def test_validation_errors():
    assert build_question().validation_errors() == {}

    errors = build_question(question=" ", short_name=None, question_type="slider").validation_errors()
    assert errors["question"] == ["can't be blank"]
    assert errors["short_name"] == ["can't be blank"]
    assert errors["question_type"] == ["is not included in the list"]


@pytest.mark.parametrize(
    "question_type, widget",
    [
        ("date_time", WidgetKind.DATETIME_PICKER),
        ("short_text", WidgetKind.STRING),
        ("text", WidgetKind.TEXT),
        ("multiple_choice", WidgetKind.RADIO_BUTTONS),
        ("check_boxes", WidgetKind.CHECK_BOXES),
        ("select", WidgetKind.SELECT),
    ],
)
def test_directive_widget_for_each_type(question_type, widget):
    directive = build_question(question_type=question_type).to_rendering_directive()

    assert directive.widget == widget.value
    assert directive.label == "What is your favourite colour?"


def test_scale_and_unknown_types_have_no_widget():
    assert build_question(question_type="scale").to_rendering_directive().widget is None
    assert build_question(question_type="slider").to_rendering_directive().widget is None


def test_hint_only_when_present():
    assert build_question(hint="Be honest").to_rendering_directive().hint == "Be honest"
    assert build_question(hint="  ").to_rendering_directive().hint is None
    assert build_question(hint=None).to_rendering_directive().hint is None


def test_choices_only_for_choice_types():
    metadata = ["Red", ["Green", "Blue"]]

    for question_type in ("multiple_choice", "check_boxes", "select"):
        directive = build_question(question_type=question_type, question_metadata=metadata).to_rendering_directive()
        assert directive.choices == ["Red", "Green", "Blue"]

    directive = build_question(question_type="text", question_metadata=metadata).to_rendering_directive()
    assert directive.choices is None


def test_choice_type_without_metadata_has_empty_choices():
    directive = build_question(question_type="select", question_metadata=None).to_rendering_directive()
    assert directive.choices == []


@pytest.mark.parametrize(
    "required_by_default, override, expected",
    [
        (False, None, False),
        (True, None, True),
        (False, True, True),
        (True, False, False),
    ],
)
def test_required_override(required_by_default, override, expected):
    question = build_question(required_by_default=required_by_default)
    answer = SimpleNamespace(required=override)

    assert question.to_rendering_directive(answer).required is expected


def test_required_without_answer_uses_default():
    assert build_question(required_by_default=True).to_rendering_directive().required is True


def test_directive_serialization_omits_absent_keys():
    directive = build_question(question_type="scale").to_rendering_directive()

    assert directive.model_dump(exclude_none=True) == {
        "label": "What is your favourite colour?",
        "required": False,
    }


def test_directive_does_not_mutate_question():
    question = build_question(question_type="select", question_metadata=["A", "B"], required_by_default=True)
    question.to_rendering_directive(SimpleNamespace(required=False))

    assert question.question_metadata == ["A", "B"]
    assert question.required_by_default is True


def test_editable_metadata_round_trip():
    question = build_question(question_type="select")
    question.editable_metadata = "  Yes \n\nNo\n"

    assert question.question_metadata == ["Yes", "No"]
    assert question.editable_metadata == "Yes\nNo"

    question.editable_metadata = ""
    assert question.question_metadata is None
    assert question.editable_metadata == ""
