"""Explicit table of available framework renderers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .angular import AngularRenderer
from .astro import AstroRenderer
from .base import Renderer
from .nextjs import NextJSRenderer
from .react import ReactRenderer
from .svelte import SvelteRenderer
from .vue import VueRenderer


class RendererRegistry:
    """Maps framework names to renderer instances."""

    def __init__(self, renderers: Iterable[Renderer] = ()) -> None:
        self._renderers: dict[str, Renderer] = {}
        for renderer in renderers:
            self.register(renderer)

    @classmethod
    def default(cls) -> "RendererRegistry":
        """Registry holding every bundled renderer."""
        return cls(
            [
                ReactRenderer(),
                NextJSRenderer(),
                VueRenderer(),
                AngularRenderer(),
                SvelteRenderer(),
                AstroRenderer(),
            ]
        )

    def register(self, renderer: Renderer) -> None:
        if not renderer.name:
            raise ValueError(f"{type(renderer).__name__} has no framework name")
        self._renderers[renderer.name] = renderer

    def get(self, framework: str) -> Renderer | None:
        return self._renderers.get(framework)

    def names(self) -> list[str]:
        return list(self._renderers)

    def __contains__(self, framework: object) -> bool:
        return framework in self._renderers

    def __iter__(self) -> Iterator[Renderer]:
        return iter(self._renderers.values())

    def __len__(self) -> int:
        return len(self._renderers)
