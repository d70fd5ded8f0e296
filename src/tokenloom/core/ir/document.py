"""
Token export IR types.

Mirrors the design-tool variables export: a document holds collections,
each collection declares its modes and owns its variables, and each variable
stores one value per mode. Values are literals or aliases to other variables.

Models are frozen; a parsed document is never mutated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

ALIAS_TYPE = "VARIABLE_ALIAS"


class VariableType(StrEnum):
    """Resolved type of a variable."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"


class RGBA(BaseModel):
    """Color channels as floats in the 0-1 range."""

    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float
    a: float = 1.0


class VariableAlias(BaseModel):
    """
    A value that points at another variable.

    ``id`` is a variable id from the same document, or a cross-document
    pointer of the form ``VariableID:<key>/<fragment>``.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["VARIABLE_ALIAS"] = ALIAS_TYPE
    id: str

    @property
    def is_cross_document(self) -> bool:
        """Any alias id containing a path separator points into another document."""
        return "/" in self.id

    @property
    def key(self) -> str | None:
        """Key part of a cross-document pointer, or None for local aliases."""
        if not self.is_cross_document:
            return None
        pointer = self.id.removeprefix("VariableID:")
        return pointer.rsplit("/", 1)[0]


# Order matters: alias dicts carry ``type`` and must not be read as colors.
ModeValue = Union[VariableAlias, RGBA, float, str]


class Mode(BaseModel):
    """One axis value within a collection (e.g. "Dark")."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode_id: str = Field(alias="modeId")
    name: str


class Variable(BaseModel):
    """A named, typed token slot with one value per mode."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    key: str
    name: str = Field(description="'/'-delimited path, e.g. color/gray/500")
    resolved_type: VariableType = Field(alias="resolvedType")
    values_by_mode: dict[str, ModeValue] = Field(default_factory=dict, alias="valuesByMode")
    description: str | None = None
    variable_collection_id: str | None = Field(default=None, alias="variableCollectionId")

    @model_validator(mode="after")
    def _check_literal_types(self) -> Variable:
        for mode_id, value in self.values_by_mode.items():
            if isinstance(value, VariableAlias):
                continue
            if not _literal_matches(value, self.resolved_type):
                raise ValueError(
                    f"variable '{self.name}' has {type(value).__name__} value in mode "
                    f"'{mode_id}' but resolvedType is {self.resolved_type.value}"
                )
        return self

    @property
    def path(self) -> list[str]:
        """Hierarchical name segments."""
        return [segment for segment in self.name.split("/") if segment]


def _literal_matches(value: ModeValue, resolved_type: VariableType) -> bool:
    if resolved_type == VariableType.COLOR:
        return isinstance(value, RGBA)
    if resolved_type == VariableType.FLOAT:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, str)


class Collection(BaseModel):
    """A named group of variables sharing a set of modes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    modes: list[Mode]
    default_mode_id: str = Field(alias="defaultModeId")
    variables: list[Variable] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_modes(self) -> Collection:
        mode_ids = {mode.mode_id for mode in self.modes}
        if self.default_mode_id not in mode_ids:
            raise ValueError(
                f"collection '{self.name}' default mode '{self.default_mode_id}' "
                f"is not one of its modes {sorted(mode_ids)}"
            )
        for variable in self.variables:
            unknown = set(variable.values_by_mode) - mode_ids
            if unknown:
                raise ValueError(
                    f"variable '{variable.name}' has values for modes {sorted(unknown)} "
                    f"that do not belong to collection '{self.name}'"
                )
        return self

    def mode_by_name(self, name: str) -> Mode | None:
        """Find a mode by its display name."""
        for mode in self.modes:
            if mode.name == name:
                return mode
        return None

    def mode_by_id(self, mode_id: str) -> Mode | None:
        """Find a mode by its id."""
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode
        return None

    @property
    def default_mode(self) -> Mode:
        mode = self.mode_by_id(self.default_mode_id)
        assert mode is not None  # guaranteed by _check_modes
        return mode


class TokenDocument(BaseModel):
    """A complete variables export."""

    model_config = ConfigDict(frozen=True)

    collections: list[Collection]
