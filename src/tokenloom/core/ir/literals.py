"""
Resolved literal types.

A resolved token value is one of a closed set of variants, discriminated by
``kind``. Formatting code dispatches over exactly these classes.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ColorLiteral(BaseModel):
    """An RGBA color with channels in the 0-1 range."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["color"] = "color"
    r: float
    g: float
    b: float
    a: float = 1.0

    @property
    def is_opaque(self) -> bool:
        return self.a >= 1.0


class DimensionLiteral(BaseModel):
    """A measurement rendered with a unit suffix."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["dimension"] = "dimension"
    value: float
    unit: str = "px"


class NumberLiteral(BaseModel):
    """A unitless number (opacity, font weight, z-index)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: float


class StringLiteral(BaseModel):
    """An enumerated or free-form string (font family, weight name)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    value: str


TokenLiteral = Annotated[
    Union[ColorLiteral, DimensionLiteral, NumberLiteral, StringLiteral],
    Field(discriminator="kind"),
]
