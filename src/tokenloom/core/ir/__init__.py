"""
tokenloom Intermediate Representation (IR) types.

Re-exports the export document models and the resolved literal variants.
"""

from .document import (
    ALIAS_TYPE,
    RGBA,
    Collection,
    Mode,
    ModeValue,
    TokenDocument,
    Variable,
    VariableAlias,
    VariableType,
)
from .literals import (
    ColorLiteral,
    DimensionLiteral,
    NumberLiteral,
    StringLiteral,
    TokenLiteral,
)

__all__ = [
    # Document
    "ALIAS_TYPE",
    "RGBA",
    "Collection",
    "Mode",
    "ModeValue",
    "TokenDocument",
    "Variable",
    "VariableAlias",
    "VariableType",
    # Literals
    "ColorLiteral",
    "DimensionLiteral",
    "NumberLiteral",
    "StringLiteral",
    "TokenLiteral",
]
