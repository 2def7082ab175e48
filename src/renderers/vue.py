"""Vue 3 renderer (Vite + Vue Router, single-file components)."""

from __future__ import annotations

from src.context import ProjectContext

from .base import ArtifactKind, Renderer


class VueRenderer(Renderer):
    name = "vue"
    display_name = "Vue"
    template_dirs = ("vue", "shared")
    binding = "mustache"
    scripts = {
        "dev": "vite",
        "build": "vite build",
        "preview": "vite preview",
    }
    dependencies = {
        "vue": "^3.3.11",
        "vue-router": "^4.2.5",
    }
    dev_dependencies = {
        "vite": "^5.0.0",
        "@vitejs/plugin-vue": "^4.5.2",
    }
    typescript_dev_dependencies = {
        "typescript": "^5.3.0",
        "vue-tsc": "^1.8.25",
    }

    def page_component_name(self, page_id: str) -> str:
        return super().page_component_name(page_id).removesuffix("Page") + "View"

    def page_path(self, page_id: str, context: ProjectContext) -> str:
        return f"src/views/{self.page_component_name(page_id)}.vue"

    def component_path(self, component_id: str, context: ProjectContext) -> str:
        return f"src/components/{component_id}.vue"

    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        ext = self.script_ext(context)
        files = [
            ("index.html.j2", "index.html", ArtifactKind.SOURCE),
            ("main.j2", f"src/main.{ext}", ArtifactKind.SOURCE),
            ("App.vue.j2", "src/App.vue", ArtifactKind.SOURCE),
            ("router.j2", f"src/router/index.{ext}", ArtifactKind.SOURCE),
            ("vite.config.j2", f"vite.config.{ext}", ArtifactKind.CONFIG),
        ]
        if self.uses_typescript(context):
            files.append(("tsconfig.json.j2", "tsconfig.json", ArtifactKind.CONFIG))
            files.append(("env.d.ts.j2", "src/env.d.ts", ArtifactKind.SOURCE))
        return files
