"""Markdown to HTML conversion for long-text fields."""

from typing import Optional

import markdown

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]


def render_markdown(text: Optional[str]) -> Optional[str]:
    """Render markdown source to HTML; blank input renders to ``None``."""
    if text is None or not text.strip():
        return None
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")
