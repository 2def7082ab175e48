"""Framework renderers.

Every renderer turns the same framework-independent inputs into source files
for one front-end framework.  ``RendererRegistry.default()`` holds all of
them; ``src.renderers.pwa`` adds the framework-agnostic PWA assets.
"""

from src.renderers.angular import AngularRenderer
from src.renderers.astro import AstroRenderer
from src.renderers.base import (
    SHELL_COMPONENTS,
    ArtifactKind,
    RenderedArtifact,
    Renderer,
    relative_import,
    route_for,
)
from src.renderers.nextjs import NextJSRenderer
from src.renderers.pwa import PWAAssetBuilder
from src.renderers.react import ReactRenderer
from src.renderers.registry import RendererRegistry
from src.renderers.svelte import SvelteRenderer
from src.renderers.templates import TemplateRenderer
from src.renderers.vue import VueRenderer

__all__ = [
    "SHELL_COMPONENTS",
    "AngularRenderer",
    "ArtifactKind",
    "AstroRenderer",
    "NextJSRenderer",
    "PWAAssetBuilder",
    "ReactRenderer",
    "RenderedArtifact",
    "Renderer",
    "RendererRegistry",
    "SvelteRenderer",
    "TemplateRenderer",
    "VueRenderer",
    "relative_import",
    "route_for",
]
