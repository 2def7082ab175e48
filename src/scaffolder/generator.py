"""Project generation orchestrator.

``ProjectGenerator.generate`` drives one run through its states::

    idle -> context_built -> features_resolved -> content_resolved
         -> rendering -> emitting -> complete

Unsupported frameworks or industries stop the run in ``failed`` before any
file is written.  Every other problem (AI content unavailable, unknown
features, pages without a bespoke template, a file that cannot be written) is
recorded in the ``GenerationReport`` and the run carries on.

Usage::

    from src.scaffolder import ProjectConfig, ProjectGenerator

    generator = ProjectGenerator()
    report = await generator.generate(
        ProjectConfig(project_name="joes-plumbing", selected_features=["contact-form"])
    )
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from rich.markup import escape

from src.catalog import (
    CORE_FEATURE_ID,
    FeatureCatalog,
    FeatureSpec,
    PageSetResolver,
    ResolvedPageSet,
)
from src.config import GeneratorConfig
from src.content import ContentBundle, ContentCollaborator, ContentResolver, IndustryLibrary
from src.content.ai_client import OllamaContentClient
from src.context import ProjectContext
from src.errors import ConfigurationError, IssueCategory
from src.renderers import PWAAssetBuilder, RenderedArtifact, Renderer, RendererRegistry
from src.utils import (
    console,
    format_duration,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
    slugify,
)

from .emitter import FileEmitter
from .models import GenerationReport, GenerationState, ProjectConfig


# ---------------------------------------------------------------------------
# Context construction
# ---------------------------------------------------------------------------


class ContextBuilder:
    """Turns a caller's ``ProjectConfig`` into the frozen ``ProjectContext``."""

    def __init__(self, library: IndustryLibrary) -> None:
        self.library = library

    def build(self, project: ProjectConfig, output_root: Path) -> ProjectContext:
        scheme = project.color_scheme or self.library.default_scheme(project.industry)
        return ProjectContext(
            project_name=project.project_name,
            project_slug=slugify(project.project_name) or "pwa-project",
            business_name=project.display_name,
            description=project.description,
            framework=project.framework,
            industry=project.industry,
            selected_features=frozenset(project.selected_features),
            color_scheme=scheme,
            palette=self.library.palette(scheme),
            typescript=project.typescript,
            output_root=output_root,
            business_metadata=dict(project.business_metadata),
        )


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Generates a complete PWA project for one of the registered frameworks.

    Every collaborator can be injected; defaults come from the packaged
    catalog, industry library and renderer registry.  When AI content is
    enabled and no collaborator is given, an ``OllamaContentClient`` built
    from ``config.ollama`` is used.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        catalog: FeatureCatalog | None = None,
        registry: RendererRegistry | None = None,
        library: IndustryLibrary | None = None,
        collaborator: ContentCollaborator | None = None,
        emitter: FileEmitter | None = None,
        assets: PWAAssetBuilder | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.catalog = catalog or FeatureCatalog.default()
        self.registry = registry or RendererRegistry.default()
        self.library = library or IndustryLibrary.default()
        self.emitter = emitter or FileEmitter(self.config.generation.max_parallel_writes)
        self.assets = assets or PWAAssetBuilder()
        self.context_builder = ContextBuilder(self.library)
        self.resolver = PageSetResolver(self.catalog)

        settings = self.config.generation
        if not settings.ai_enabled:
            collaborator = None
        elif collaborator is None:
            collaborator = OllamaContentClient(
                base_url=self.config.ollama.url,
                model=self.config.ollama.model,
                timeout=self.config.ollama.timeout,
            )
        self.collaborator = collaborator

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, project: ProjectConfig) -> Renderer:
        """Return the renderer for *project*.

        Raises:
            ConfigurationError: If the framework or industry is not supported.
        """
        renderer = self.registry.get(project.framework)
        if renderer is None:
            raise ConfigurationError("framework", project.framework, self.registry.names())
        if project.industry not in self.library:
            raise ConfigurationError("industry", project.industry, self.library.ids())
        return renderer

    def output_root_for(self, project: ProjectConfig) -> Path:
        if project.output_root is not None:
            return Path(project.output_root)
        return self.config.output_dir / (slugify(project.project_name) or "pwa-project")

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(self, project: ProjectConfig) -> GenerationReport:
        """Generate *project* and return the run report.

        Raises:
            ConfigurationError: If the framework or industry is unsupported.
                Nothing is written in that case.
        """
        start = time.monotonic()
        report = GenerationReport(
            project_name=project.project_name,
            framework=project.framework,
            industry=project.industry,
            started_at=datetime.now(timezone.utc),
        )

        try:
            renderer = self.validate(project)
        except ConfigurationError as exc:
            report.error(IssueCategory.CONFIGURATION_ERROR, exc.field, str(exc))
            report.advance(GenerationState.FAILED)
            if self.config.generation.verbose:
                print_error(escape(str(exc)))
            raise

        output_root = self.output_root_for(project)
        report.output_root = str(output_root)
        context = self.context_builder.build(project, output_root)
        report.advance(GenerationState.CONTEXT_BUILT)

        resolved = self.resolver.resolve((CORE_FEATURE_ID,), context.selected_features)
        self._record_resolution(report, resolved)
        report.advance(GenerationState.FEATURES_RESOLVED)

        bundles = await self._resolve_content(resolved, context)
        self._record_content_notes(report, resolved, bundles)
        report.advance(GenerationState.CONTENT_RESOLVED)

        report.advance(GenerationState.RENDERING)
        artifacts = await self._render(report, renderer, resolved, bundles, context)

        report.advance(GenerationState.EMITTING)
        result = await self.emitter.emit(artifacts, output_root)
        report.files_written = result.written
        for failure in result.errors:
            report.error(IssueCategory.EMIT_FAILURE, failure.path, failure.reason)
        written = set(result.written)
        report.pages_created = [
            p for p in report.pages_created if renderer.page_path(p, context) in written
        ]

        report.advance(GenerationState.COMPLETE)
        report.finished_at = datetime.now(timezone.utc)
        report.duration_seconds = round(time.monotonic() - start, 3)

        if self.config.generation.verbose:
            self.print_report(report)
        return report

    def generate_sync(self, project: ProjectConfig) -> GenerationReport:
        """Blocking wrapper around ``generate`` for callers without an event loop."""
        return asyncio.run(self.generate(project))

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _content_resolver(self) -> ContentResolver:
        return ContentResolver.default(
            self.collaborator,
            ai_timeout=self.config.generation.ai_timeout,
            library=self.library,
        )

    async def _resolve_content(
        self, resolved: ResolvedPageSet, context: ProjectContext
    ) -> dict[str, ContentBundle]:
        content = self._content_resolver()
        semaphore = asyncio.Semaphore(self.config.generation.max_parallel_writes)

        async def resolve_page(page_id: str) -> ContentBundle:
            async with semaphore:
                return await content.resolve_content(page_id, context)

        results = await asyncio.gather(*(resolve_page(p) for p in resolved.pages))
        return dict(zip(resolved.pages, results))

    async def _render(
        self,
        report: GenerationReport,
        renderer: Renderer,
        resolved: ResolvedPageSet,
        bundles: dict[str, ContentBundle],
        context: ProjectContext,
    ) -> list[RenderedArtifact]:
        semaphore = asyncio.Semaphore(self.config.generation.max_parallel_writes)

        async def render_page(page_id: str) -> tuple[list[RenderedArtifact], str]:
            bundle = bundles[page_id]
            components = resolved.page_components.get(page_id, ())
            async with semaphore:
                page = await asyncio.to_thread(renderer.render, page_id, bundle, context, components)
                css = await asyncio.to_thread(renderer.page_stylesheet, page_id, bundle, context)
            return page, css

        rendered = await asyncio.gather(*(render_page(p) for p in resolved.pages))

        artifacts: list[RenderedArtifact] = []
        artifacts.extend(renderer.render_project(resolved, context))
        artifacts.extend(
            self.assets.build(
                resolved,
                context,
                renderer,
                features=self._feature_specs(resolved.features_implemented),
                industry_name=self.library.display_name(context.industry),
            )
        )
        for component in resolved.components:
            artifacts.append(renderer.render_component(component, context, resolved))
        report.components_created = list(resolved.components)

        page_styles: list[tuple[str, str]] = []
        for page_id, (page_artifacts, css) in zip(resolved.pages, rendered):
            if not renderer.has_specialization(page_id):
                report.warn(
                    IssueCategory.RENDER_GAP,
                    page_id,
                    f"No {renderer.display_name} template for '{page_id}'; used the generic page",
                )
            artifacts.extend(page_artifacts)
            page_styles.append((page_id, css))
            report.pages_created.append(page_id)
        artifacts.append(self.assets.pages_stylesheet(renderer, page_styles))
        return artifacts

    def _feature_specs(self, feature_ids: Sequence[str]) -> list[FeatureSpec]:
        return [spec for spec in (self.catalog.lookup(f) for f in feature_ids) if spec is not None]

    # ------------------------------------------------------------------
    # Report helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _record_resolution(report: GenerationReport, resolved: ResolvedPageSet) -> None:
        report.features_implemented = list(resolved.features_implemented)
        for feature_id in resolved.unknown_features:
            report.warn(
                IssueCategory.UNKNOWN_FEATURE,
                feature_id,
                f"Unknown feature '{feature_id}' was ignored",
            )
        for conflict in resolved.dependency_conflicts:
            package = conflict.split(":", 1)[0]
            report.warn(IssueCategory.DEPENDENCY_CONFLICT, package, conflict)

    @staticmethod
    def _record_content_notes(
        report: GenerationReport,
        resolved: ResolvedPageSet,
        bundles: dict[str, ContentBundle],
    ) -> None:
        # The same AI failure is attached to every page; report it once.
        pages_by_note: dict[str, list[str]] = {}
        for page_id in resolved.pages:
            for note in bundles[page_id].notes:
                pages_by_note.setdefault(note, []).append(page_id)
        for note, pages in pages_by_note.items():
            report.warn(IssueCategory.CONTENT_UNAVAILABLE, ", ".join(pages), note)

    def print_report(self, report: GenerationReport) -> None:
        """Print a rich summary of *report*."""
        print_header(f"Generated {report.project_name}")
        print_summary_table(
            {
                "Framework": report.framework,
                "Industry": report.industry,
                "Output": report.output_root,
                "Pages": ", ".join(report.pages_created),
                "Components": str(len(report.components_created)),
                "Features": ", ".join(report.features_implemented) or "(none)",
                "Files written": str(len(report.files_written)),
                "Duration": format_duration(report.duration_seconds),
                "Status": report.status,
            },
            title="Generation Summary",
        )
        for entry in report.warnings:
            print_warning(f"  {entry.category.value} {escape(entry.subject)}: {escape(entry.message)}")
        for entry in report.errors:
            print_error(f"  {entry.category.value} {escape(entry.subject)}: {escape(entry.message)}")
        if report.status == "complete":
            print_success(f"Project written to {report.output_root}")
        else:
            console.print(f"[bold]Finished with status[/bold] {report.status}")
