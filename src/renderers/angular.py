"""Angular renderer (standalone components, Angular CLI).

Angular projects are always TypeScript.  Page and component templates are
inlined into the component class; page styles live next to it.
"""

from __future__ import annotations

from src.context import ProjectContext
from src.utils import to_kebab

from .base import ArtifactKind, Renderer


class AngularRenderer(Renderer):
    name = "angular"
    display_name = "Angular"
    template_dirs = ("angular", "shared")
    body_indent = 2
    binding = "mustache"
    colocated_styles = True
    supports_javascript = False
    package_type = None
    scripts = {
        "ng": "ng",
        "start": "ng serve",
        "build": "ng build",
    }
    dependencies = {
        "@angular/common": "^17.0.0",
        "@angular/compiler": "^17.0.0",
        "@angular/core": "^17.0.0",
        "@angular/forms": "^17.0.0",
        "@angular/platform-browser": "^17.0.0",
        "@angular/router": "^17.0.0",
        "rxjs": "~7.8.0",
        "tslib": "^2.3.0",
        "zone.js": "~0.14.2",
    }
    dev_dependencies = {
        "@angular-devkit/build-angular": "^17.0.0",
        "@angular/cli": "^17.0.0",
        "@angular/compiler-cli": "^17.0.0",
        "typescript": "~5.2.2",
    }

    def page_component_name(self, page_id: str) -> str:
        return super().page_component_name(page_id) + "Component"

    def _page_dir(self, page_id: str) -> str:
        return f"src/app/pages/{to_kebab(page_id)}"

    def page_path(self, page_id: str, context: ProjectContext) -> str:
        return f"{self._page_dir(page_id)}/{to_kebab(page_id)}.page.ts"

    def page_style_path(self, page_id: str, context: ProjectContext) -> str | None:
        return f"{self._page_dir(page_id)}/{to_kebab(page_id)}.page.css"

    def component_path(self, component_id: str, context: ProjectContext) -> str:
        kebab = to_kebab(component_id)
        return f"src/app/components/{kebab}/{kebab}.component.ts"

    def project_files(self, context: ProjectContext) -> list[tuple[str, str, ArtifactKind]]:
        return [
            ("index.html.j2", "src/index.html", ArtifactKind.SOURCE),
            ("main.j2", "src/main.ts", ArtifactKind.SOURCE),
            ("app.component.j2", "src/app/app.component.ts", ArtifactKind.SOURCE),
            ("app.routes.j2", "src/app/app.routes.ts", ArtifactKind.SOURCE),
            ("app.config.j2", "src/app/app.config.ts", ArtifactKind.SOURCE),
            ("angular.json.j2", "angular.json", ArtifactKind.CONFIG),
            ("tsconfig.json.j2", "tsconfig.json", ArtifactKind.CONFIG),
            ("tsconfig.app.json.j2", "tsconfig.app.json", ArtifactKind.CONFIG),
        ]
