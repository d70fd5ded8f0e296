"""
tokenloom.toml project manifest.

Declares which exports to load, the default mode request, and the list of
builds (artifacts) to produce. Relative paths resolve against the directory
holding the manifest.
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tokenloom.emitters import NamingStrategy, OutputFormat, TokenSelector

from .errors import ManifestError
from .formatting import DEFAULT_UNITLESS_KEYWORDS, ColorFormat

MANIFEST_FILE = "tokenloom.toml"

# Default identifier style per output format
_DEFAULT_NAMING: dict[OutputFormat, NamingStrategy] = {
    OutputFormat.CSS: NamingStrategy.KEBAB,
    OutputFormat.JSON: NamingStrategy.CAMEL,
    OutputFormat.JS: NamingStrategy.CAMEL,
    OutputFormat.THEME: NamingStrategy.CAMEL,
    OutputFormat.DTS: NamingStrategy.CAMEL,
    OutputFormat.DTS_NESTED: NamingStrategy.CAMEL,
    OutputFormat.DTCG: NamingStrategy.KEBAB,
}


@dataclass
class DocumentConfig:
    """A token export to load."""

    name: str
    path: Path


@dataclass
class FormatConfig:
    """Value formatting defaults."""

    color: ColorFormat = ColorFormat.HEX
    unitless_keywords: list[str] = field(default_factory=lambda: list(DEFAULT_UNITLESS_KEYWORDS))


@dataclass
class BuildConfig:
    """One artifact to produce.

    Examples in tokenloom.toml:

        [[builds]]
        name = "css-dark"
        format = "css"
        destination = "semantic-color-dark.css"
        selector = '[data-theme="dark"]'
        output_references = true
        collections = ["Semantic: Color"]

        [builds.modes]
        "Semantic: Color" = "On Dark"
    """

    name: str
    format: OutputFormat
    destination: str
    naming: NamingStrategy = NamingStrategy.KEBAB
    selector: str = ":root"  # CSS scope
    output_references: bool = False
    color: ColorFormat | None = None  # overrides [format].color
    prefix: str | None = None
    object_name: str = "tokens"
    modes: dict[str, str] = field(default_factory=dict)
    documents: list[str] = field(default_factory=list)
    collections: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    exclude_contains: list[str] = field(default_factory=list)

    def token_selector(self) -> TokenSelector:
        return TokenSelector(
            documents=tuple(self.documents),
            collections=tuple(self.collections),
            include=tuple(self.include),
            exclude=tuple(self.exclude),
            exclude_contains=tuple(self.exclude_contains),
        )


@dataclass
class ProjectManifest:
    """Parsed tokenloom.toml."""

    name: str
    root: Path
    build_path: Path
    documents: list[DocumentConfig] = field(default_factory=list)
    modes: dict[str, str] = field(default_factory=dict)
    format: FormatConfig = field(default_factory=FormatConfig)
    builds: list[BuildConfig] = field(default_factory=list)
    max_workers: int = 1

    def build(self, name: str) -> BuildConfig | None:
        for build in self.builds:
            if build.name == name:
                return build
        return None


def _enum_value(enum_cls: Any, value: Any, what: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ManifestError(f"Unknown {what} '{value}' (expected one of: {allowed})") from None


def _string_list(data: dict[str, Any], key: str, where: str) -> list[str]:
    value = data.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ManifestError(f"{where}.{key} must be a list of strings")
    return list(value)


def _parse_build(data: dict[str, Any], index: int) -> BuildConfig:
    where = f"builds[{index}]"
    name = data.get("name")
    if not name:
        raise ManifestError(f"{where} is missing 'name'")
    if "format" not in data:
        raise ManifestError(f"Build '{name}' is missing 'format'")
    output_format = _enum_value(OutputFormat, data["format"], "build format")
    destination = data.get("destination")
    if not destination:
        raise ManifestError(f"Build '{name}' is missing 'destination'")

    naming = data.get("naming")
    color = data.get("color")

    return BuildConfig(
        name=name,
        format=output_format,
        destination=destination,
        naming=(
            _enum_value(NamingStrategy, naming, "naming strategy")
            if naming
            else _DEFAULT_NAMING[output_format]
        ),
        selector=data.get("selector", ":root"),
        output_references=bool(data.get("output_references", False)),
        color=_enum_value(ColorFormat, color, "color format") if color else None,
        prefix=data.get("prefix") or None,
        object_name=data.get("object_name", "tokens"),
        modes=dict(data.get("modes", {})),
        documents=_string_list(data, "documents", where),
        collections=_string_list(data, "collections", where),
        include=_string_list(data, "include", where),
        exclude=_string_list(data, "exclude", where),
        exclude_contains=_string_list(data, "exclude_contains", where),
    )


def load_manifest(path: Path) -> ProjectManifest:
    """Load a tokenloom.toml manifest.

    Args:
        path: Path to the manifest file.

    Returns:
        ProjectManifest with paths resolved against the manifest directory.

    Raises:
        ManifestError: If the file is missing, invalid TOML, or inconsistent.
    """
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    root = path.parent.resolve()
    project = data.get("project", {})
    format_data = data.get("format", {})

    documents = []
    seen_documents: set[str] = set()
    for index, doc in enumerate(data.get("documents", [])):
        if "path" not in doc:
            raise ManifestError(f"documents[{index}] is missing 'path'")
        doc_path = root / doc["path"]
        name = doc.get("name") or doc_path.stem
        if name in seen_documents:
            raise ManifestError(f"Duplicate document name '{name}'")
        seen_documents.add(name)
        documents.append(DocumentConfig(name=name, path=doc_path))

    format_config = FormatConfig(
        color=_enum_value(ColorFormat, format_data.get("color", "hex"), "color format"),
        unitless_keywords=(
            _string_list(format_data, "unitless_keywords", "format")
            if "unitless_keywords" in format_data
            else list(DEFAULT_UNITLESS_KEYWORDS)
        ),
    )

    builds = [_parse_build(build, index) for index, build in enumerate(data.get("builds", []))]
    seen_builds: set[str] = set()
    for build in builds:
        if build.name in seen_builds:
            raise ManifestError(f"Duplicate build name '{build.name}'")
        seen_builds.add(build.name)
        unknown = [name for name in build.documents if name not in seen_documents]
        if unknown:
            raise ManifestError(f"Build '{build.name}' references unknown documents {unknown}")

    return ProjectManifest(
        name=project.get("name", "tokens"),
        root=root,
        build_path=root / project.get("build_path", "dist"),
        documents=documents,
        modes=dict(data.get("modes", {})),
        format=format_config,
        builds=builds,
        max_workers=int(project.get("max_workers", 1)),
    )
