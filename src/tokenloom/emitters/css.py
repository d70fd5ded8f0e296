"""
CSS custom property emitter.

Renders tokens as ``--name: value;`` declarations inside one selector block,
e.g. ``:root`` for base tokens or ``[data-theme="dark"]`` for a theme.
"""

from __future__ import annotations

from tokenloom.core.formatting import ColorFormat
from tokenloom.core.resolution import ResolvedToken, ResolvedTokenSet, TokenPredicate

from .common import banner, comment_text, css_value, select_tokens
from .naming import NamingStrategy, format_name

DEFAULT_SELECTOR = ":root"


def css_variable_name(
    name: str,
    naming: NamingStrategy = NamingStrategy.KEBAB,
    prefix: str | None = None,
) -> str:
    """Custom property name for a token, e.g. ``--color-gray-500``."""
    return f"--{format_name(name, naming, prefix)}"


def emit_css(
    tokens: ResolvedTokenSet,
    selector: TokenPredicate | None = None,
    naming: NamingStrategy = NamingStrategy.KEBAB,
    *,
    scope: str = DEFAULT_SELECTOR,
    output_references: bool = False,
    color_format: ColorFormat = ColorFormat.HEX,
    prefix: str | None = None,
    include_descriptions: bool = True,
) -> str:
    """Render selected tokens as a CSS variable block.

    Args:
        tokens: Resolved token set.
        selector: Which tokens to emit (all when None).
        naming: Custom property naming strategy.
        scope: CSS selector wrapping the declarations.
        output_references: Render aliases as ``var(--target)`` when the target
            is emitted in the same block and renders to the same value;
            otherwise the literal.
        color_format: Hex or rgb()/rgba() colors.
        prefix: Optional name prefix.
        include_descriptions: Append token descriptions as comments.

    Returns:
        CSS text. Empty selections still produce a valid block.
    """
    selected = select_tokens(tokens, selector)
    emitted = {token.ref: token for token in selected}

    def render(token: ResolvedToken) -> str:
        value = token.formatted(color_format)
        if output_references and token.reference is not None:
            target = emitted.get((token.reference.document, token.reference.variable_id))
            # Unit and weight handling follow the referencing name, so the
            # target's own rendering can differ from this token's value.
            if target is not None and target.formatted(color_format) == value:
                return f"var({css_variable_name(target.name, naming, prefix)})"
        return css_value(value)

    lines = [banner(), f"{scope} {{"]
    for token in selected:
        declaration = f"  {css_variable_name(token.name, naming, prefix)}: {render(token)};"
        if include_descriptions and token.description:
            declaration += f" /* {comment_text(token.description)} */"
        lines.append(declaration)
    lines.append("}")
    return "\n".join(lines) + "\n"
