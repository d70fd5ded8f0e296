"""
Helpers shared by the emitters.
"""

from __future__ import annotations

import json

from tokenloom.core.formatting import format_number
from tokenloom.core.resolution import ResolvedToken, ResolvedTokenSet, TokenPredicate

GENERATED_NOTICE = "Do not edit directly, this file was auto-generated."


def banner() -> str:
    """Block comment placed at the top of generated CSS/JS/TS files."""
    return f"/**\n * {GENERATED_NOTICE}\n */\n"


def select_tokens(tokens: ResolvedTokenSet, selector: TokenPredicate | None) -> list[ResolvedToken]:
    """Apply a selector, dropping repeated names (first occurrence wins)."""
    seen: set[str] = set()
    selected: list[ResolvedToken] = []
    for token in tokens.select(selector):
        if token.name in seen:
            continue
        seen.add(token.name)
        selected.append(token)
    return selected


def css_value(value: str | int | float) -> str:
    """Render a formatted value inside a CSS declaration."""
    if isinstance(value, (int, float)):
        return format_number(value)
    return value


def js_value(value: str | int | float) -> str:
    """Render a formatted value as a JS/TS literal."""
    if isinstance(value, (int, float)):
        return format_number(value)
    return json.dumps(value, ensure_ascii=False)


def comment_text(text: str) -> str:
    """Make free text safe inside a ``/* */`` comment."""
    return " ".join(text.replace("*/", "* /").split())
