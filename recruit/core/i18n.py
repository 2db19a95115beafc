"""
Lightweight translation lookup.

Translations live in ``recruit/locales/<locale>.json`` as nested objects;
a key is looked up inside a dotted scope, e.g.
``translate("multiple_choice", scope="ui.question_types")``.
"""

import json
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from recruit.core.config import settings

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"

_overrides: Dict[str, Any] = {}


@lru_cache(maxsize=None)
def load_locale(locale: str) -> Dict[str, Any]:
    """Load and cache the translation tree for a locale."""
    path = LOCALES_DIR / f"{locale}.json"
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _lookup(tree: Dict[str, Any], parts: list) -> Optional[str]:
    node: Any = tree
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def translate(key: Any, scope: Optional[str] = None, default: Optional[str] = None) -> Optional[str]:
    """
    Translate ``key`` within ``scope``.

    Overrides installed with :func:`with_translations` win over the locale
    file. Falls back to ``default`` when neither has the key.
    """
    parts = (scope.split(".") if scope else []) + [str(key)]
    for tree in (_overrides, load_locale(settings.LOCALE)):
        value = _lookup(tree, parts)
        if value is not None:
            return value
    return default


def humanize(value: Any) -> str:
    """``"a_full_day"`` -> ``"A full day"``."""
    text = str(value).replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def _merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@contextmanager
def with_translations(translations: Dict[str, Any]) -> Iterator[None]:
    """Temporarily layer extra translations over the locale file."""
    global _overrides
    previous = _overrides
    _overrides = _merge(previous, translations)
    try:
        yield
    finally:
        _overrides = previous
