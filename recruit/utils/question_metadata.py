"""
Normalisation of per-question metadata.

Stored metadata is one of three shapes: ``None`` (absent), a scalar, or an
ordered list of choice labels. Administrators edit it as a single block of
text with one choice per line.
"""

from typing import Any, List, Optional, Union

QuestionMetadata = Union[None, str, int, float, bool, List[Any]]


def editable_metadata_view(metadata: QuestionMetadata) -> str:
    """Join list metadata with newlines; scalars become their string form."""
    if metadata is None:
        return ""
    if isinstance(metadata, list):
        return "\n".join(str(item) for item in metadata)
    return str(metadata)


def parse_editable_metadata(value: Any) -> QuestionMetadata:
    """
    Turn the editable view back into stored metadata.

    Blank input clears the metadata. Text is split into lines, each line
    stripped and blank lines dropped. Values that are not strings are
    already structured and pass through untouched.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return [line.strip() for line in value.splitlines() if line.strip()]
    if isinstance(value, (list, tuple)) and not value:
        return None
    return list(value) if isinstance(value, tuple) else value


def flatten_choices(metadata: QuestionMetadata) -> List[str]:
    """Flatten metadata into an ordered list of choice labels."""
    if metadata is None:
        return []
    if not isinstance(metadata, list):
        return [str(metadata)]
    choices: List[str] = []
    for item in metadata:
        choices.extend(flatten_choices(item))
    return choices
