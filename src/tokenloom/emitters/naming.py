"""
Token naming strategies for generated artifacts.

Token names are ``/``-delimited paths whose segments may themselves contain
spaces, dashes, or underscores. Each strategy flattens the path into one
identifier for its platform.
"""

from __future__ import annotations

import re
from enum import StrEnum

_WORD_SPLIT = re.compile(r"[/\s\-_.]+")
_INVALID_CHARS = re.compile(r"[^0-9A-Za-z]")
_CAMEL_HUMP = re.compile(r"([a-z0-9])([A-Z])")


class NamingStrategy(StrEnum):
    """Identifier styles."""

    KEBAB = "kebab"  # color-gray-500
    CAMEL = "camel"  # colorGray500
    PASCAL = "pascal"  # ColorGray500
    SNAKE = "snake"  # color_gray_500
    CONSTANT = "constant"  # COLOR_GRAY_500


def split_words(name: str) -> list[str]:
    """Split a token name into identifier words.

    >>> split_words("color/saturatedRed/Semi Bold")
    ['color', 'saturated', 'Red', 'Semi', 'Bold']
    """
    words = []
    for word in _WORD_SPLIT.split(_CAMEL_HUMP.sub(r"\1 \2", name)):
        cleaned = _INVALID_CHARS.sub("", word)
        if cleaned:
            words.append(cleaned)
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def format_name(name: str, strategy: NamingStrategy, prefix: str | None = None) -> str:
    """Flatten a token name with ``strategy``.

    Args:
        name: Token name, e.g. ``color/gray/500``.
        strategy: Identifier style.
        prefix: Optional leading word(s), e.g. ``ds``.

    Returns:
        Identifier such as ``ds-color-gray-500``.
    """
    words = split_words(f"{prefix}/{name}" if prefix else name)
    if not words:
        return ""

    if strategy == NamingStrategy.KEBAB:
        return "-".join(word.lower() for word in words)
    if strategy == NamingStrategy.SNAKE:
        return "_".join(word.lower() for word in words)
    if strategy == NamingStrategy.CONSTANT:
        return "_".join(word.upper() for word in words)
    if strategy == NamingStrategy.PASCAL:
        identifier = "".join(_capitalize(word) for word in words)
    elif strategy == NamingStrategy.CAMEL:
        identifier = words[0].lower() + "".join(_capitalize(word) for word in words[1:])
    else:
        raise ValueError(f"Unknown naming strategy: {strategy}")

    # JS identifiers cannot start with a digit
    if identifier[:1].isdigit():
        identifier = f"_{identifier}"
    return identifier
