"""
Build runner: manifest -> resolved tokens -> artifacts on disk.

All documents are loaded before anything resolves; a structural error in any
of them aborts the run. Per-token failures only produce diagnostics, and every
artifact is still written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from tokenloom.emitters import (
    OutputFormat,
    emit_css,
    emit_declarations,
    emit_js_module,
    emit_json,
    emit_nested_declarations,
    emit_theme_object,
    generate_dtcg_tokens,
    write_dtcg_files,
)

from .document_loader import load_document_file
from .errors import Diagnostic, EmitError, ManifestError
from .formatting import ColorFormat
from .manifest import BuildConfig, ProjectManifest
from .resolution import ResolutionSummary, ResolvedTokenSet, resolve_graph
from .store import TokenGraph

logger = logging.getLogger(__name__)


@dataclass
class BuildOutput:
    """Result of one build."""

    name: str
    paths: list[Path]
    token_count: int
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class BuildReport:
    """Result of a build run."""

    outputs: list[BuildOutput] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for output in self.outputs for d in output.diagnostics]

    @property
    def summary(self) -> ResolutionSummary:
        resolved = sum(output.token_count for output in self.outputs)
        return ResolutionSummary(resolved=resolved, failed=len(self.diagnostics))

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def load_graphs(manifest: ProjectManifest) -> list[TokenGraph]:
    """Load every document declared in the manifest."""
    if not manifest.documents:
        raise ManifestError("Manifest declares no documents")
    return [load_document_file(doc.path, name=doc.name) for doc in manifest.documents]


def resolve_all(
    graphs: list[TokenGraph],
    requested: dict[str, str],
    manifest: ProjectManifest,
    color_format: ColorFormat | None = None,
) -> ResolvedTokenSet:
    """Resolve every graph, each with the others as cross-document references."""
    result = ResolvedTokenSet()
    for graph in graphs:
        others = [other for other in graphs if other is not graph]
        result = result.merge(
            resolve_graph(
                graph,
                requested,
                others,
                color_format=color_format or manifest.format.color,
                unitless_keywords=manifest.format.unitless_keywords,
                max_workers=manifest.max_workers,
            )
        )
    return result


def render_build(build: BuildConfig, tokens: ResolvedTokenSet, manifest: ProjectManifest) -> str:
    """Render the artifact text of a non-DTCG build."""
    selector = build.token_selector()
    color = build.color or manifest.format.color

    if build.format == OutputFormat.CSS:
        return emit_css(
            tokens,
            selector,
            build.naming,
            scope=build.selector,
            output_references=build.output_references,
            color_format=color,
            prefix=build.prefix,
        )
    if build.format == OutputFormat.JSON:
        return emit_json(tokens, selector, color_format=color)
    if build.format == OutputFormat.JS:
        return emit_js_module(tokens, selector, build.naming, color_format=color, prefix=build.prefix)
    if build.format == OutputFormat.THEME:
        return emit_theme_object(
            tokens,
            selector,
            build.naming,
            object_name=build.object_name,
            color_format=color,
            prefix=build.prefix,
        )
    if build.format == OutputFormat.DTS:
        return emit_declarations(tokens, selector, build.naming, prefix=build.prefix)
    if build.format == OutputFormat.DTS_NESTED:
        return emit_nested_declarations(tokens, selector, object_name=build.object_name)
    raise EmitError(f"Build '{build.name}' format {build.format} is not a single-file format")


def _run_dtcg(
    build: BuildConfig, graphs: list[TokenGraph], manifest: ProjectManifest, dry_run: bool
) -> BuildOutput:
    output_dir = manifest.build_path / build.destination
    wanted = set(build.documents)
    paths: list[Path] = []
    diagnostics: list[Diagnostic] = []
    for graph in graphs:
        if wanted and graph.name not in wanted:
            continue
        others = [other for other in graphs if other is not graph]
        export = generate_dtcg_tokens(
            graph,
            others,
            color_format=build.color or manifest.format.color,
            unitless_keywords=manifest.format.unitless_keywords,
        )
        diagnostics.extend(export.diagnostics)
        if dry_run:
            logger.info(f"[dry-run] {build.name}: {len(export.files)} trees for {graph.name}")
            continue
        target_dir = output_dir / graph.name if len(graphs) > 1 else output_dir
        paths.extend(write_dtcg_files(export, target_dir))
    count = sum(len(graph) for graph in graphs if not wanted or graph.name in wanted)
    return BuildOutput(name=build.name, paths=paths, token_count=count, diagnostics=diagnostics)


def run_build(
    build: BuildConfig,
    graphs: list[TokenGraph],
    manifest: ProjectManifest,
    *,
    dry_run: bool = False,
) -> BuildOutput:
    """Resolve and emit one build."""
    if build.format == OutputFormat.DTCG:
        return _run_dtcg(build, graphs, manifest, dry_run)

    requested = {**manifest.modes, **build.modes}
    tokens = resolve_all(graphs, requested, manifest, build.color)
    text = render_build(build, tokens, manifest)

    selector = build.token_selector()
    selected = tokens.select(selector)
    diagnostics = [d for d in tokens.diagnostics if selector.covers(d)]

    path = manifest.build_path / build.destination
    if dry_run:
        logger.info(f"[dry-run] {build.name}: {len(selected)} tokens -> {path}")
        return BuildOutput(name=build.name, paths=[], token_count=len(selected), diagnostics=diagnostics)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info(f"{build.name}: {len(selected)} tokens -> {path}")
    return BuildOutput(
        name=build.name, paths=[path], token_count=len(selected), diagnostics=diagnostics
    )


def run_builds(
    manifest: ProjectManifest,
    only: Iterable[str] | None = None,
    *,
    dry_run: bool = False,
) -> BuildReport:
    """Run the manifest's builds.

    Args:
        manifest: Parsed project manifest.
        only: Restrict to these build names.
        dry_run: Resolve and render without writing files.

    Returns:
        BuildReport with outputs and diagnostics.

    Raises:
        ManifestError: If ``only`` names an unknown build or no documents exist.
        StructuralError: If any document is malformed.
    """
    builds = manifest.builds
    if only:
        names = list(only)
        unknown = [name for name in names if manifest.build(name) is None]
        if unknown:
            raise ManifestError(f"Unknown builds: {unknown}")
        builds = [build for build in builds if build.name in names]

    graphs = load_graphs(manifest)

    report = BuildReport()
    for build in builds:
        report.outputs.append(run_build(build, graphs, manifest, dry_run=dry_run))

    logger.info(f"{len(report.outputs)} builds: {report.summary}")
    return report
