"""Per-page content resolution through an ordered provider chain."""

from __future__ import annotations

from collections.abc import Sequence

from src.context import ProjectContext

from .industries import IndustryLibrary
from .models import ContentBundle
from .providers import (
    AIContentProvider,
    ContentCollaborator,
    ContentProvider,
    IndustryDefaultProvider,
    PlaceholderProvider,
)


class ContentResolver:
    """Walks a list of providers until one yields a bundle.

    The chain must end with a provider that never fails; ``default`` appends a
    ``PlaceholderProvider`` for that reason.  Warnings raised by providers that
    were skipped are carried on the returned bundle's ``notes``.
    """

    def __init__(self, providers: Sequence[ContentProvider]) -> None:
        if not providers:
            raise ValueError("ContentResolver needs at least one provider")
        self.providers = list(providers)

    @classmethod
    def default(
        cls,
        collaborator: ContentCollaborator | None = None,
        *,
        ai_timeout: float = 30.0,
        library: IndustryLibrary | None = None,
    ) -> "ContentResolver":
        """Build the standard chain: AI (if given) -> industry default -> placeholder."""
        providers: list[ContentProvider] = []
        if collaborator is not None:
            providers.append(AIContentProvider(collaborator, timeout=ai_timeout))
        providers.append(IndustryDefaultProvider(library))
        providers.append(PlaceholderProvider())
        return cls(providers)

    async def resolve_content(self, page_id: str, context: ProjectContext) -> ContentBundle:
        """Return the content bundle for *page_id*.  Never raises for missing content."""
        notes: list[str] = []
        for provider in self.providers:
            result = await provider.provide(page_id, context)
            notes.extend(w for w in result.warnings if w not in notes)
            if result.bundle is not None:
                return result.bundle.model_copy(update={"notes": tuple(notes)})

        # Only reachable with a custom chain lacking a terminal provider.
        fallback = (await PlaceholderProvider().provide(page_id, context)).bundle
        assert fallback is not None
        return fallback.model_copy(update={"notes": tuple(notes)})
