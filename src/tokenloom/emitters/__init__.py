"""
Platform emitters for resolved tokens.

- css.py: CSS custom property blocks
- runtime.py: nested JSON, flat ES module, sorted theme object
- typings.py: TypeScript declarations
- dtcg.py: W3C DTCG trees per collection/mode
"""

from enum import StrEnum

from .css import emit_css
from .dtcg import emit_dtcg, export_dtcg_files, generate_dtcg_tokens, write_dtcg_files
from .naming import NamingStrategy, format_name
from .runtime import build_runtime_map, emit_js_module, emit_json, emit_theme_object
from .selection import TokenSelector
from .typings import emit_declarations, emit_nested_declarations


class OutputFormat(StrEnum):
    """Artifact formats a build can produce."""

    CSS = "css"
    JSON = "json"
    JS = "js"
    THEME = "theme"
    DTS = "dts"
    DTS_NESTED = "dts-nested"
    DTCG = "dtcg"


__all__ = [
    "OutputFormat",
    "NamingStrategy",
    "TokenSelector",
    "build_runtime_map",
    "emit_css",
    "emit_declarations",
    "emit_dtcg",
    "emit_js_module",
    "emit_json",
    "emit_nested_declarations",
    "emit_theme_object",
    "export_dtcg_files",
    "format_name",
    "generate_dtcg_tokens",
    "write_dtcg_files",
]
