"""
Runtime map emitters.

Runtime consumers (React Native themes, JS style objects) need concrete
values, so these emitters always write literals, never references.

Formats:
- nested JSON keyed by name segments
- flat ES module with one ``export const`` per token
- a single sorted theme object (``export const lightTokens = {...}``)
"""

from __future__ import annotations

import json
from typing import Any

from tokenloom.core.formatting import ColorFormat
from tokenloom.core.resolution import ResolvedToken, ResolvedTokenSet, TokenPredicate

from .common import banner, comment_text, js_value, select_tokens
from .naming import NamingStrategy, format_name

# Key used when a token name is both a leaf and a group
# (e.g. ``color/brand`` and ``color/brand/dark``).
DEFAULT_KEY = "DEFAULT"


def _insert(tree: dict[str, Any], path: list[str], value: Any) -> None:
    node = tree
    for segment in path[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {} if child is None else {DEFAULT_KEY: child}
            node[segment] = child
        node = child
    leaf = path[-1]
    if isinstance(node.get(leaf), dict):
        node[leaf][DEFAULT_KEY] = value
    else:
        node[leaf] = value


def build_runtime_map(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    *,
    color_format: ColorFormat = ColorFormat.HEX,
) -> dict[str, Any]:
    """Nest selected token values by their name segments.

    Args:
        tokens: Resolved token set.
        selector: Which tokens to include (all when None).
        color_format: Color representation.

    Returns:
        Nested dict, e.g. ``{"color": {"gray": {"500": "#a3a3a3"}}}``.
    """
    tree: dict[str, Any] = {}
    for token in select_tokens(tokens, selector):
        if token.path:
            _insert(tree, token.path, token.formatted(color_format))
    return tree


def emit_json(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    *,
    color_format: ColorFormat = ColorFormat.HEX,
) -> str:
    """Nested runtime map as JSON text."""
    tree = build_runtime_map(tokens, selector, color_format=color_format)
    return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


def flat_entries(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None,
    naming: NamingStrategy,
    prefix: str | None,
) -> list[tuple[str, ResolvedToken]]:
    """Identifier -> token pairs in document order; first identifier wins."""
    entries: dict[str, ResolvedToken] = {}
    for token in select_tokens(tokens, selector):
        identifier = format_name(token.name, naming, prefix)
        if identifier and identifier not in entries:
            entries[identifier] = token
    return list(entries.items())


def emit_js_module(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    naming: NamingStrategy = NamingStrategy.CAMEL,
    *,
    color_format: ColorFormat = ColorFormat.HEX,
    prefix: str | None = None,
    include_descriptions: bool = True,
) -> str:
    """Flat ES module: ``export const colorGray500 = "#a3a3a3";`` per token."""
    lines = [banner()]
    for identifier, token in flat_entries(tokens, selector, naming, prefix):
        if include_descriptions and token.description:
            lines.append(f"/** {comment_text(token.description)} */")
        lines.append(f"export const {identifier} = {js_value(token.formatted(color_format))};")
    return "\n".join(lines) + "\n"


def emit_theme_object(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    naming: NamingStrategy = NamingStrategy.CAMEL,
    *,
    object_name: str = "tokens",
    color_format: ColorFormat = ColorFormat.HEX,
    prefix: str | None = None,
) -> str:
    """One exported object with keys sorted, for theme providers."""
    entries = sorted(flat_entries(tokens, selector, naming, prefix), key=lambda item: item[0])
    lines = [banner(), f"export const {object_name} = {{"]
    for identifier, token in entries:
        lines.append(f"  {identifier}: {js_value(token.formatted(color_format))},")
    lines.append("};")
    return "\n".join(lines) + "\n"
