"""
Value formatting for resolved tokens.

Converts terminal mode values into typed literals, and typed literals into
the strings (or numbers) that land in generated artifacts. Pure functions;
the same input always renders the same output.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from enum import StrEnum

from .ir import (
    RGBA,
    ColorLiteral,
    DimensionLiteral,
    ModeValue,
    NumberLiteral,
    StringLiteral,
    TokenLiteral,
    VariableAlias,
    VariableType,
)


class ColorFormat(StrEnum):
    """Output representation for colors."""

    HEX = "hex"
    RGB = "rgb"


# Name fragments marking a FLOAT variable as unitless.
DEFAULT_UNITLESS_KEYWORDS: tuple[str, ...] = (
    "opacity",
    "font-weight",
    "z-index",
    "line-height-ratio",
    "flex",
)

FONT_WEIGHT_KEYWORD = "font-weight"

# Lexical font weight names and their CSS numeric weights
FONT_WEIGHTS: dict[str, str] = {
    "Thin": "100",
    "Extra Light": "200",
    "Light": "300",
    "Regular": "400",
    "Medium": "500",
    "Semi Bold": "600",
    "Bold": "700",
    "Extra Bold": "800",
    "Black": "900",
}

_WEIGHT_LOOKUP: dict[str, str] = {
    re.sub(r"[\s_-]", "", name).lower(): weight for name, weight in FONT_WEIGHTS.items()
}

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


# =============================================================================
# Numbers
# =============================================================================


def format_number(value: float, precision: int = 4) -> str:
    """Render a number without float noise or trailing zeros.

    >>> format_number(8.0)
    '8'
    >>> format_number(0.30000001)
    '0.3'
    """
    rounded = round(float(value), precision)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{precision}f}".rstrip("0").rstrip(".")


def _plain_number(value: float) -> int | float:
    rounded = round(float(value), 4)
    if rounded == int(rounded):
        return int(rounded)
    return rounded


# =============================================================================
# Colors
# =============================================================================


def _channel(value: float) -> int:
    """Convert a 0-1 channel float to 0-255, rounding half up and clamping."""
    return math.floor(min(max(value, 0.0), 1.0) * 255 + 0.5)


def color_to_hex(color: ColorLiteral) -> str:
    """Format as ``#rrggbb``, or ``#rrggbbaa`` when alpha is below 1."""
    hex_value = f"#{_channel(color.r):02x}{_channel(color.g):02x}{_channel(color.b):02x}"
    if not color.is_opaque:
        hex_value += f"{_channel(color.a):02x}"
    return hex_value


def color_to_rgb(color: ColorLiteral) -> str:
    """Format as ``rgb(r, g, b)``, or ``rgba(r, g, b, a)`` when alpha is below 1."""
    red, green, blue = _channel(color.r), _channel(color.g), _channel(color.b)
    if color.is_opaque:
        return f"rgb({red}, {green}, {blue})"
    alpha = format_number(min(max(color.a, 0.0), 1.0), precision=3)
    return f"rgba({red}, {green}, {blue}, {alpha})"


def parse_hex_color(text: str) -> ColorLiteral:
    """Decode ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` into a color literal.

    Inverse of ``color_to_hex`` up to 8-bit channel precision.

    Raises:
        ValueError: If ``text`` is not a hex color.
    """
    if not _HEX_RE.match(text):
        raise ValueError(f"Not a hex color: {text!r}")
    digits = text[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    alpha = channels[3] if len(channels) == 4 else 1.0
    return ColorLiteral(r=channels[0], g=channels[1], b=channels[2], a=alpha)


# =============================================================================
# Literal construction
# =============================================================================


def is_unitless(variable_name: str, unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS) -> bool:
    """Whether a FLOAT variable should render as a raw number."""
    lowered = variable_name.lower()
    return any(keyword in lowered for keyword in unitless_keywords)


def to_literal(
    value: ModeValue,
    resolved_type: VariableType,
    variable_name: str,
    unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
) -> TokenLiteral:
    """Convert a terminal (non-alias) mode value into a typed literal.

    Args:
        value: The literal stored in ``valuesByMode``.
        resolved_type: Type declared by the variable that holds the value.
        variable_name: Name of that variable; decides unit handling.
        unitless_keywords: Name fragments that mark FLOAT values unitless.

    Raises:
        TypeError: If ``value`` is an alias or does not match ``resolved_type``.
    """
    if isinstance(value, VariableAlias):
        raise TypeError(f"Alias {value.id} is not a literal")

    if resolved_type == VariableType.COLOR and isinstance(value, RGBA):
        return ColorLiteral(r=value.r, g=value.g, b=value.b, a=value.a)
    if resolved_type == VariableType.FLOAT and isinstance(value, (int, float)):
        if is_unitless(variable_name, unitless_keywords):
            return NumberLiteral(value=value)
        return DimensionLiteral(value=value)
    if resolved_type == VariableType.STRING and isinstance(value, str):
        return StringLiteral(value=value)

    raise TypeError(f"{type(value).__name__} value does not match {resolved_type.value}")


# =============================================================================
# Literal formatting
# =============================================================================


def map_font_weight(value: str) -> str:
    """Map a lexical weight (``Semi Bold``, ``SemiBold``) to its numeric weight."""
    if value in FONT_WEIGHTS:
        return FONT_WEIGHTS[value]
    return _WEIGHT_LOOKUP.get(re.sub(r"[\s_-]", "", value).lower(), value)


def format_literal(
    literal: TokenLiteral,
    variable_name: str = "",
    color_format: ColorFormat = ColorFormat.HEX,
) -> str | int | float:
    """Render a typed literal for an output artifact.

    - Colors: hex (default) or rgb()/rgba()
    - Dimensions: ``"{n}px"``
    - Numbers: raw int/float
    - Strings: pass-through; weight names map to numbers on font-weight tokens

    Args:
        literal: Resolved literal.
        variable_name: Name of the token being rendered.
        color_format: Color representation.

    Returns:
        Formatted value.
    """
    if isinstance(literal, ColorLiteral):
        if color_format == ColorFormat.RGB:
            return color_to_rgb(literal)
        return color_to_hex(literal)
    if isinstance(literal, DimensionLiteral):
        return f"{format_number(literal.value)}{literal.unit}"
    if isinstance(literal, NumberLiteral):
        return _plain_number(literal.value)
    if isinstance(literal, StringLiteral):
        if FONT_WEIGHT_KEYWORD in variable_name.lower():
            return map_font_weight(literal.value)
        return literal.value
    raise TypeError(f"Unsupported literal: {literal!r}")


def format_value(
    value: ModeValue,
    resolved_type: VariableType,
    variable_name: str,
    color_format: ColorFormat = ColorFormat.HEX,
    unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
) -> str | int | float:
    """Shortcut: ``format_literal(to_literal(...))``."""
    literal = to_literal(value, resolved_type, variable_name, unitless_keywords)
    return format_literal(literal, variable_name, color_format)
