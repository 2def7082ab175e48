"""Renderer base class and the ``RenderedArtifact`` model.

A renderer turns framework-independent inputs (``ContentBundle``,
``ResolvedPageSet``, ``ProjectContext``) into framework-specific source files.
Subclasses only declare *where* files go and which templates, packages and
binding syntax they use; all rendering goes through Jinja2 templates found on
the renderer's template search path.
"""

from __future__ import annotations

import json
import posixpath
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.catalog.models import ResolvedPageSet
from src.content.models import ContentBundle, HeroSection
from src.context import ProjectContext
from src.utils import humanize, to_kebab, to_pascal

from .templates import TemplateRenderer

# Layout components live in the app shell, never inside a page.
SHELL_COMPONENTS: frozenset[str] = frozenset({"Navigation", "LoadingSpinner", "ErrorFallback"})

_SCRIPT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


class ArtifactKind(str, Enum):
    SOURCE = "source"
    STYLE = "style"
    CONFIG = "config"
    ASSET = "asset"


class RenderedArtifact(BaseModel):
    """One file of the generated project.

    ``path`` is relative to the output root and uses POSIX separators.  When
    two artifacts share a path, the later one wins.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    kind: ArtifactKind = ArtifactKind.SOURCE


def route_for(page_id: str) -> str:
    """Return the URL route of *page_id* (``home`` is the site root)."""
    return "/" if page_id == "home" else f"/{page_id}"


def relative_import(from_file: str, to_file: str) -> str:
    """Return a ``./``-style import specifier from one artifact path to another.

    Script extensions are dropped; ``.css``, ``.vue``, ``.svelte`` and
    ``.astro`` are kept because bundlers need them.
    """
    rel = posixpath.relpath(to_file, posixpath.dirname(from_file) or ".")
    stem, ext = posixpath.splitext(rel)
    if ext in _SCRIPT_EXTENSIONS:
        rel = stem
    return rel if rel.startswith(".") else f"./{rel}"


class Renderer(ABC):
    """Base class for framework renderers.

    Class attributes describe the framework; subclasses implement the path
    methods and ``project_files``.
    """

    name: str = ""
    display_name: str = ""
    template_dirs: tuple[str, ...] = ("shared",)
    binding: str = "jsx"
    class_attribute: str = "class"
    # Column at which page sections start inside the page template.
    body_indent: int = 4
    colocated_styles: bool = False
    # Components need a "use client" directive (React Server Components).
    client_components: bool = False
    supports_javascript: bool = True
    package_type: str | None = "module"
    public_dir: str = "public"
    styles_dir: str = "src/styles"
    scripts: dict[str, str] = {}
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}
    typescript_dev_dependencies: dict[str, str] = {}

    def __init__(self, template_root: str | Path | None = None) -> None:
        self.templates = TemplateRenderer(
            self.template_dirs,
            binding=self.binding,
            globals={
                "cls": self.class_attribute,
                "framework": self.name,
                "body_indent": self.body_indent,
                "indent_str": " " * self.body_indent,
            },
            template_root=template_root,
        )

    # -- Naming and paths --------------------------------------------------

    def uses_typescript(self, context: ProjectContext) -> bool:
        return context.typescript or not self.supports_javascript

    def script_ext(self, context: ProjectContext) -> str:
        return "ts" if self.uses_typescript(context) else "js"

    def page_component_name(self, page_id: str) -> str:
        return f"{to_pascal(page_id)}Page"

    @abstractmethod
    def page_path(self, page_id: str, context: ProjectContext) -> str:
        """Path of the page source file."""

    def page_style_path(self, page_id: str, context: ProjectContext) -> str | None:
        """Path of the co-located page stylesheet, if the framework uses one."""
        return None

    @abstractmethod
    def component_path(self, component_id: str, context: ProjectContext) -> str:
        """Path of a component source file."""

    def style_path(self, filename: str) -> str:
        return f"{self.styles_dir}/{filename}"

    def public_path(self, filename: str) -> str:
        return f"{self.public_dir}/{filename}" if self.public_dir else filename

    # -- Pages -------------------------------------------------------------

    def has_specialization(self, page_id: str) -> bool:
        """Return ``True`` if this framework ships a bespoke template for *page_id*."""
        return self.templates.has_template(f"pages/{page_id}.j2")

    def page_template(self, page_id: str) -> str:
        if self.has_specialization(page_id):
            return f"pages/{page_id}.j2"
        return "page.j2"

    def page_context(
        self,
        page_id: str,
        bundle: ContentBundle,
        context: ProjectContext,
        components: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        embedded = [c for c in components if c not in SHELL_COMPONENTS]
        page_file = self.page_path(page_id, context)
        style_file = self.page_style_path(page_id, context)
        return {
            "page_id": page_id,
            "route": route_for(page_id),
            "title": bundle.title,
            "bundle": bundle,
            "sections": bundle.sections,
            "component_name": self.page_component_name(page_id),
            "components": embedded,
            "component_imports": {
                c: relative_import(page_file, self.component_path(c, context)) for c in embedded
            },
            "style_import": relative_import(page_file, style_file) if style_file else None,
            "uses_links": any(
                isinstance(s, HeroSection) and s.cta_label and s.cta_route
                for s in bundle.sections.values()
            ),
            "typescript": self.uses_typescript(context),
            "project": context,
        }

    def page_stylesheet(self, page_id: str, bundle: ContentBundle, context: ProjectContext) -> str:
        """Return the stylesheet text for one page."""
        return self.templates.render(
            "page.css.j2",
            {"page_id": page_id, "title": bundle.title, "bundle": bundle, "project": context},
        )

    def render(
        self,
        page_id: str,
        bundle: ContentBundle,
        context: ProjectContext,
        components: tuple[str, ...] = (),
    ) -> list[RenderedArtifact]:
        """Render one page into its source file (plus stylesheet where co-located)."""
        page_ctx = self.page_context(page_id, bundle, context, components)
        source = self.templates.render(self.page_template(page_id), page_ctx)
        artifacts = [
            RenderedArtifact(path=self.page_path(page_id, context), content=source),
        ]
        style_file = self.page_style_path(page_id, context)
        if style_file is not None:
            artifacts.append(
                RenderedArtifact(
                    path=style_file,
                    content=self.page_stylesheet(page_id, bundle, context),
                    kind=ArtifactKind.STYLE,
                )
            )
        return artifacts

    # -- Components --------------------------------------------------------

    def render_component(
        self,
        component_id: str,
        context: ProjectContext,
        resolved: ResolvedPageSet | None = None,
    ) -> RenderedArtifact:
        """Render a component, using a bespoke template when one exists."""
        template = f"components/{component_id}.j2"
        if not self.templates.has_template(template):
            template = "component.j2"
        variables = {
            "name": component_id,
            "selector": f"app-{to_kebab(component_id)}",
            "label": humanize(to_kebab(component_id)),
            "nav_items": self.nav_items(resolved) if resolved is not None else [],
            "use_client": self.client_components,
            "typescript": self.uses_typescript(context),
            "project": context,
        }
        return RenderedArtifact(
            path=self.component_path(component_id, context),
            content=self.templates.render(template, variables),
        )

    # -- Project -----------------------------------------------------------

    def nav_items(self, resolved: ResolvedPageSet) -> list[dict[str, str]]:
        """Navigation entries in resolved page order."""
        return [
            {"page_id": page, "route": route_for(page), "label": humanize(page)}
            for page in resolved.pages
        ]

    def stylesheets(self, resolved: ResolvedPageSet) -> list[str]:
        """Global stylesheet files imported by the app shell, in load order."""
        files = ["theme.css", *(f"{bundle}.css" for bundle in resolved.style_bundles)]
        if not self.colocated_styles:
            files.append("pages.css")
        return [self.style_path(f) for f in files]

    def project_context(self, resolved: ResolvedPageSet, context: ProjectContext) -> dict[str, Any]:
        pages = [
            {
                "page_id": page,
                "route": route_for(page),
                "label": humanize(page),
                "component_name": self.page_component_name(page),
                "path": self.page_path(page, context),
            }
            for page in resolved.pages
        ]
        return {
            "project": context,
            "resolved": resolved,
            "pages": pages,
            "nav_items": self.nav_items(resolved),
            "components": list(resolved.components),
            "stylesheets": self.stylesheets(resolved),
            "typescript": self.uses_typescript(context),
            "ext": self.script_ext(context),
            "relative_import": relative_import,
            "component_path": lambda c: self.component_path(c, context),
        }

    def package_json(self, resolved: ResolvedPageSet, context: ProjectContext) -> str:
        """Render ``package.json``: framework packages first, then feature packages."""
        dependencies = dict(self.dependencies)
        for name, version in resolved.dependency_map().items():
            dependencies.setdefault(name, version)
        dev_dependencies = dict(self.dev_dependencies)
        if self.uses_typescript(context):
            dev_dependencies.update(self.typescript_dev_dependencies)
        manifest: dict[str, Any] = {
            "name": context.project_slug,
            "version": "0.1.0",
            "private": True,
            "description": context.description,
        }
        if self.package_type:
            manifest["type"] = self.package_type
        manifest["scripts"] = dict(self.scripts)
        manifest["dependencies"] = dependencies
        manifest["devDependencies"] = dev_dependencies
        return json.dumps(manifest, indent=2) + "\n"

    @abstractmethod
    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        """``(template, output path, kind)`` for the framework's shell and config files."""

    def render_project(
        self, resolved: ResolvedPageSet, context: ProjectContext
    ) -> list[RenderedArtifact]:
        """Render the app shell, routing, entry point and config files."""
        variables = self.project_context(resolved, context)
        artifacts = [
            RenderedArtifact(
                path="package.json",
                content=self.package_json(resolved, context),
                kind=ArtifactKind.CONFIG,
            )
        ]
        for template, path, kind in self.project_files(context):
            artifacts.append(
                RenderedArtifact(
                    path=path,
                    content=self.templates.render(template, {**variables, "path": path}),
                    kind=kind,
                )
            )
        return artifacts
