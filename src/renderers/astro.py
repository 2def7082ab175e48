"""Astro renderer (static pages with ``.astro`` components)."""

from __future__ import annotations

from typing import Any

from src.content.models import ContentBundle
from src.context import ProjectContext

from .base import ArtifactKind, Renderer, relative_import

LAYOUT_PATH = "src/layouts/Layout.astro"


class AstroRenderer(Renderer):
    name = "astro"
    display_name = "Astro"
    template_dirs = ("astro", "shared")
    binding = "jsx"
    scripts = {
        "dev": "astro dev",
        "build": "astro build",
        "preview": "astro preview",
    }
    dependencies = {
        "astro": "^4.0.0",
    }
    typescript_dev_dependencies = {
        "@astrojs/check": "^0.3.0",
        "typescript": "^5.3.0",
    }

    def page_path(self, page_id: str, context: ProjectContext) -> str:
        name = "index" if page_id == "home" else page_id
        return f"src/pages/{name}.astro"

    def component_path(self, component_id: str, context: ProjectContext) -> str:
        return f"src/components/{component_id}.astro"

    def page_context(
        self,
        page_id: str,
        bundle: ContentBundle,
        context: ProjectContext,
        components: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        variables = super().page_context(page_id, bundle, context, components)
        variables["layout_import"] = relative_import(self.page_path(page_id, context), LAYOUT_PATH)
        return variables

    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        files = [
            ("Layout.astro.j2", LAYOUT_PATH, ArtifactKind.SOURCE),
            ("404.astro.j2", "src/pages/404.astro", ArtifactKind.SOURCE),
            ("astro.config.mjs.j2", "astro.config.mjs", ArtifactKind.CONFIG),
        ]
        if self.uses_typescript(context):
            files.append(("tsconfig.json.j2", "tsconfig.json", ArtifactKind.CONFIG))
        return files
