"""React renderer (Vite + React Router).

React is the reference renderer: it ships bespoke page templates for every
page the default catalog can produce, and Next.js reuses them through its
template search path.
"""

from __future__ import annotations

from src.context import ProjectContext

from .base import ArtifactKind, Renderer


class ReactRenderer(Renderer):
    name = "react"
    display_name = "React"
    template_dirs = ("react", "shared")
    binding = "jsx"
    class_attribute = "className"
    body_indent = 6
    colocated_styles = True
    scripts = {
        "dev": "vite",
        "build": "vite build",
        "preview": "vite preview",
    }
    dependencies = {
        "react": "^18.2.0",
        "react-dom": "^18.2.0",
        "react-router-dom": "^6.20.0",
    }
    dev_dependencies = {
        "vite": "^5.0.0",
        "@vitejs/plugin-react": "^4.2.0",
    }
    typescript_dev_dependencies = {
        "typescript": "^5.3.0",
        "@types/react": "^18.2.43",
        "@types/react-dom": "^18.2.17",
    }

    def jsx_ext(self, context: ProjectContext) -> str:
        return "tsx" if self.uses_typescript(context) else "jsx"

    def page_path(self, page_id: str, context: ProjectContext) -> str:
        return f"src/pages/{self.page_component_name(page_id)}.{self.jsx_ext(context)}"

    def page_style_path(self, page_id: str, context: ProjectContext) -> str | None:
        return f"src/pages/{self.page_component_name(page_id)}.css"

    def component_path(self, component_id: str, context: ProjectContext) -> str:
        return f"src/components/{component_id}.{self.jsx_ext(context)}"

    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        jsx = self.jsx_ext(context)
        ext = self.script_ext(context)
        files = [
            ("index.html.j2", "index.html", ArtifactKind.SOURCE),
            ("main.j2", f"src/main.{jsx}", ArtifactKind.SOURCE),
            ("App.j2", f"src/App.{jsx}", ArtifactKind.SOURCE),
            ("vite.config.j2", f"vite.config.{ext}", ArtifactKind.CONFIG),
        ]
        if self.uses_typescript(context):
            files.append(("tsconfig.json.j2", "tsconfig.json", ArtifactKind.CONFIG))
        return files
