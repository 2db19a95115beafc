"""Slug helpers for human-readable identifiers in URLs."""

import re
from typing import Iterable

SLUG_SEPARATOR = "--"


def slugify(text: str, fallback: str = "item") -> str:
    """Lower-case ``text`` and collapse anything non-alphanumeric into ``-``."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    return slug or fallback


def uniquify_slug(base: str, existing: Iterable[str]) -> str:
    """
    Return ``base`` or the first ``base--N`` (N >= 1) not in ``existing``.

    Comparison is case-insensitive.
    """
    taken = {s.lower() for s in existing}
    if base.lower() not in taken:
        return base
    n = 1
    while f"{base}{SLUG_SEPARATOR}{n}".lower() in taken:
        n += 1
    return f"{base}{SLUG_SEPARATOR}{n}"
