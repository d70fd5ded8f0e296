"""
TypeScript declaration emitter.

Describes the shape of the runtime artifacts (keys and primitive types) for
static-typing consumers. Values are never written.
"""

from __future__ import annotations

import json
import re
from typing import Any

from tokenloom.core.resolution import ResolvedTokenSet, TokenPredicate

from .common import banner
from .naming import NamingStrategy
from .runtime import build_runtime_map, flat_entries

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _ts_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def _ts_key(key: str) -> str:
    return key if _IDENTIFIER.match(key) else json.dumps(key)


def emit_declarations(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    naming: NamingStrategy = NamingStrategy.CAMEL,
    *,
    prefix: str | None = None,
) -> str:
    """Declarations matching ``emit_js_module``: ``export const name: string;``."""
    lines = [banner()]
    for identifier, token in flat_entries(tokens, selector, naming, prefix):
        lines.append(f"export const {identifier}: {_ts_type(token.value)};")
    return "\n".join(lines) + "\n"


def _render_shape(tree: dict[str, Any], depth: int) -> list[str]:
    indent = "  " * depth
    lines: list[str] = []
    for key, value in tree.items():
        if isinstance(value, dict):
            lines.append(f"{indent}{_ts_key(key)}: {{")
            lines.extend(_render_shape(value, depth + 1))
            lines.append(f"{indent}}};")
        else:
            lines.append(f"{indent}{_ts_key(key)}: {_ts_type(value)};")
    return lines


def emit_nested_declarations(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    *,
    object_name: str = "tokens",
) -> str:
    """Declaration matching ``emit_json``: one nested object type."""
    tree = build_runtime_map(tokens, selector)
    lines = [banner(), f"export declare const {object_name}: {{"]
    lines.extend(_render_shape(tree, 1))
    lines.append("};")
    return "\n".join(lines) + "\n"
