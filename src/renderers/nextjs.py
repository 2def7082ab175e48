"""Next.js renderer (App Router).

Searches its own templates first, then React's, so React's bespoke pages and
components are reused with Next.js routing and ``'use client'`` components.
"""

from __future__ import annotations

from src.context import ProjectContext

from .base import ArtifactKind
from .react import ReactRenderer


class NextJSRenderer(ReactRenderer):
    name = "nextjs"
    display_name = "Next.js"
    template_dirs = ("nextjs", "react", "shared")
    package_type = None
    client_components = True
    styles_dir = "styles"
    scripts = {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
    }
    dependencies = {
        "next": "^14.0.4",
        "react": "^18.2.0",
        "react-dom": "^18.2.0",
    }
    dev_dependencies = {}
    typescript_dev_dependencies = {
        "typescript": "^5.3.0",
        "@types/node": "^20.10.0",
        "@types/react": "^18.2.43",
        "@types/react-dom": "^18.2.17",
    }

    def _route_dir(self, page_id: str) -> str:
        return "app" if page_id == "home" else f"app/{page_id}"

    def page_path(self, page_id: str, context: ProjectContext) -> str:
        return f"{self._route_dir(page_id)}/page.{self.jsx_ext(context)}"

    def page_style_path(self, page_id: str, context: ProjectContext) -> str | None:
        if page_id == "home":
            return "app/home.css"
        return f"{self._route_dir(page_id)}/page.css"

    def component_path(self, component_id: str, context: ProjectContext) -> str:
        return f"components/{component_id}.{self.jsx_ext(context)}"

    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        files = [
            ("layout.j2", f"app/layout.{self.jsx_ext(context)}", ArtifactKind.SOURCE),
            ("not-found.j2", f"app/not-found.{self.jsx_ext(context)}", ArtifactKind.SOURCE),
            ("next.config.js.j2", "next.config.js", ArtifactKind.CONFIG),
        ]
        if self.uses_typescript(context):
            files.append(("tsconfig.json.j2", "tsconfig.json", ArtifactKind.CONFIG))
        return files
