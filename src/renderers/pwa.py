"""Framework-agnostic PWA assets.

Builds the web app manifest, the service worker, SVG icons, ``robots.txt``,
``README.md``, ``.gitignore`` and the global stylesheets.  Where each file
lands is decided by the framework renderer (``public_dir`` / ``styles_dir``);
the content is the same for every framework.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from src.catalog.models import FeatureSpec, ResolvedPageSet
from src.context import ProjectContext
from src.utils import humanize

from .base import ArtifactKind, RenderedArtifact, Renderer, route_for
from .templates import TemplateRenderer

_DEFAULT_STYLES_DIR = Path(__file__).parent / "styles"

ICON_SIZES: tuple[int, ...] = (192, 512)

# Pages that should not be indexed by crawlers.
PRIVATE_PAGES: tuple[str, ...] = ("login", "register", "profile", "cart")

PAGES_STYLESHEET = "pages.css"


class PWAAssetBuilder:
    """Renders the assets every generated project shares."""

    def __init__(
        self,
        templates: TemplateRenderer | None = None,
        styles_dir: str | Path | None = None,
    ) -> None:
        self.templates = templates or TemplateRenderer(["shared"])
        self.styles_dir = Path(styles_dir) if styles_dir is not None else _DEFAULT_STYLES_DIR
        self._bundle_cache: dict[str, str] = {}

    # -- Individual assets -------------------------------------------------

    def manifest(self, resolved: ResolvedPageSet, context: ProjectContext) -> str:
        """Return ``manifest.json`` for the project."""
        short_name = context.business_name if len(context.business_name) <= 12 else context.project_slug[:12]
        icons = [
            {
                "src": f"/icons/icon-{size}.svg",
                "sizes": f"{size}x{size}",
                "type": "image/svg+xml",
                "purpose": "any maskable",
            }
            for size in ICON_SIZES
        ]
        shortcuts = [
            {"name": humanize(page), "url": route_for(page)}
            for page in resolved.pages
            if page != "home" and page not in PRIVATE_PAGES
        ][:4]
        manifest = {
            "name": context.business_name,
            "short_name": short_name,
            "description": context.description or f"{context.business_name} web app",
            "start_url": "/",
            "scope": "/",
            "display": "standalone",
            "background_color": context.palette.background,
            "theme_color": context.palette.primary,
            "categories": [context.industry],
            "icons": icons,
            "shortcuts": shortcuts,
        }
        return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"

    def precache_urls(self, resolved: ResolvedPageSet) -> list[str]:
        urls = [route_for(page) for page in resolved.pages]
        urls += ["/manifest.json", "/favicon.svg"]
        urls += [f"/icons/icon-{size}.svg" for size in ICON_SIZES]
        return urls

    def service_worker(self, resolved: ResolvedPageSet, context: ProjectContext) -> str:
        return self.templates.render(
            "sw.js.j2",
            {
                "project": context,
                "cache_name": f"{context.project_slug}-v1",
                "precache_urls": self.precache_urls(resolved),
            },
        )

    def icon(self, context: ProjectContext, size: int, round: bool = False) -> str:
        initial = (context.business_name.strip()[:1] or "P").upper()
        return self.templates.render(
            "icon.svg.j2",
            {"size": size, "round": round, "initial": initial, "palette": context.palette},
        )

    def robots(self, resolved: ResolvedPageSet) -> str:
        disallow = [route_for(page) for page in resolved.pages if page in PRIVATE_PAGES]
        return self.templates.render("robots.txt.j2", {"disallow": disallow})

    def readme(
        self,
        resolved: ResolvedPageSet,
        context: ProjectContext,
        renderer: Renderer,
        features: Sequence[FeatureSpec] = (),
        industry_name: str = "",
    ) -> str:
        return self.templates.render(
            "README.md.j2",
            {
                "project": context,
                "framework_name": renderer.display_name or renderer.name,
                "industry_name": industry_name or humanize(context.industry),
                "dev_command": f"npm run {'dev' if 'dev' in renderer.scripts else 'start'}",
                "build_command": "npm run build",
                "pages": [{"label": humanize(p), "route": route_for(p)} for p in resolved.pages],
                "features": list(features),
                "manifest_path": renderer.public_path("manifest.json"),
                "sw_path": renderer.public_path("sw.js"),
                "theme_path": renderer.style_path("theme.css"),
            },
        )

    def theme_stylesheet(self, context: ProjectContext) -> str:
        return self.templates.render("theme.css.j2", {"project": context, "palette": context.palette})

    def bundle_stylesheet(self, bundle: str) -> str:
        """Return the packaged CSS for a style bundle (a stub for unknown bundles)."""
        if bundle not in self._bundle_cache:
            path = self.styles_dir / f"{bundle}.css"
            if path.is_file():
                self._bundle_cache[bundle] = path.read_text(encoding="utf-8")
            else:
                self._bundle_cache[bundle] = f"/* {bundle} styles */\n"
        return self._bundle_cache[bundle]

    def combined_page_styles(self, page_styles: Sequence[tuple[str, str]]) -> str:
        """Concatenate per-page stylesheets in the given (resolved) page order."""
        parts = [f"/* --- {page_id} --- */\n{css.rstrip()}\n" for page_id, css in page_styles]
        return "\n".join(parts)

    # -- Artifact sets -----------------------------------------------------

    def build(
        self,
        resolved: ResolvedPageSet,
        context: ProjectContext,
        renderer: Renderer,
        features: Sequence[FeatureSpec] = (),
        industry_name: str = "",
    ) -> list[RenderedArtifact]:
        """Return every shared asset except the combined page stylesheet."""
        artifacts = [
            RenderedArtifact(
                path=renderer.public_path("manifest.json"),
                content=self.manifest(resolved, context),
                kind=ArtifactKind.CONFIG,
            ),
            RenderedArtifact(
                path=renderer.public_path("sw.js"),
                content=self.service_worker(resolved, context),
                kind=ArtifactKind.SOURCE,
            ),
            RenderedArtifact(
                path=renderer.public_path("favicon.svg"),
                content=self.icon(context, 32, round=True),
                kind=ArtifactKind.ASSET,
            ),
            *(
                RenderedArtifact(
                    path=renderer.public_path(f"icons/icon-{size}.svg"),
                    content=self.icon(context, size),
                    kind=ArtifactKind.ASSET,
                )
                for size in ICON_SIZES
            ),
            RenderedArtifact(
                path=renderer.public_path("robots.txt"),
                content=self.robots(resolved),
                kind=ArtifactKind.ASSET,
            ),
            RenderedArtifact(
                path="README.md",
                content=self.readme(resolved, context, renderer, features, industry_name),
                kind=ArtifactKind.ASSET,
            ),
            RenderedArtifact(
                path=".gitignore",
                content=self.templates.render("gitignore.j2", {}),
                kind=ArtifactKind.CONFIG,
            ),
            RenderedArtifact(
                path=renderer.style_path("theme.css"),
                content=self.theme_stylesheet(context),
                kind=ArtifactKind.STYLE,
            ),
        ]
        for bundle in resolved.style_bundles:
            artifacts.append(
                RenderedArtifact(
                    path=renderer.style_path(f"{bundle}.css"),
                    content=self.bundle_stylesheet(bundle),
                    kind=ArtifactKind.STYLE,
                )
            )
        return artifacts

    def pages_stylesheet(
        self, renderer: Renderer, page_styles: Sequence[tuple[str, str]]
    ) -> RenderedArtifact:
        return RenderedArtifact(
            path=renderer.style_path(PAGES_STYLESHEET),
            content=self.combined_page_styles(page_styles),
            kind=ArtifactKind.STYLE,
        )
