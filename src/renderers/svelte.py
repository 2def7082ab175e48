"""Svelte renderer (SvelteKit with the static adapter)."""

from __future__ import annotations

from src.context import ProjectContext

from .base import ArtifactKind, Renderer


class SvelteRenderer(Renderer):
    name = "svelte"
    display_name = "Svelte"
    template_dirs = ("svelte", "shared")
    body_indent = 2
    binding = "jsx"
    public_dir = "static"
    styles_dir = "src/lib/styles"
    scripts = {
        "dev": "vite dev",
        "build": "vite build",
        "preview": "vite preview",
    }
    dev_dependencies = {
        "@sveltejs/adapter-static": "^3.0.0",
        "@sveltejs/kit": "^2.0.0",
        "@sveltejs/vite-plugin-svelte": "^3.0.0",
        "svelte": "^4.2.7",
        "vite": "^5.0.0",
    }
    typescript_dev_dependencies = {
        "svelte-check": "^3.6.0",
        "tslib": "^2.6.2",
        "typescript": "^5.3.0",
    }

    def _route_dir(self, page_id: str) -> str:
        return "src/routes" if page_id == "home" else f"src/routes/{page_id}"

    def page_path(self, page_id: str, context: ProjectContext) -> str:
        return f"{self._route_dir(page_id)}/+page.svelte"

    def component_path(self, component_id: str, context: ProjectContext) -> str:
        return f"src/lib/components/{component_id}.svelte"

    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        ext = self.script_ext(context)
        files = [
            ("app.html.j2", "src/app.html", ArtifactKind.SOURCE),
            ("layout.j2", "src/routes/+layout.svelte", ArtifactKind.SOURCE),
            ("layout.ts.j2", f"src/routes/+layout.{ext}", ArtifactKind.SOURCE),
            ("error.j2", "src/routes/+error.svelte", ArtifactKind.SOURCE),
            ("svelte.config.js.j2", "svelte.config.js", ArtifactKind.CONFIG),
            ("vite.config.j2", f"vite.config.{ext}", ArtifactKind.CONFIG),
        ]
        if self.uses_typescript(context):
            files.append(("tsconfig.json.j2", "tsconfig.json", ArtifactKind.CONFIG))
        return files
