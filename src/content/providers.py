"""Content providers: the ordered strategies of the content fallback chain.

Each provider returns a ``ProviderResult`` that is either ``ok`` (carrying a
``ContentBundle``) or ``unavailable`` (carrying a reason and, optionally, a
warning for the generation report).  Providers never raise for content
problems; the resolver just walks the list until one succeeds.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from src.context import ProjectContext
from src.errors import ContentUnavailable
from src.utils import humanize

from .blueprints import apply_blueprint
from .industries import IndustryLibrary
from .models import ContentBundle, FreeTextSection, HeroSection, SiteContent


@dataclass(frozen=True)
class ProviderResult:
    """Tagged result of a single provider attempt."""

    bundle: ContentBundle | None = None
    reason: str = ""
    warnings: tuple[str, ...] = field(default=())

    @property
    def is_ok(self) -> bool:
        return self.bundle is not None

    @classmethod
    def ok(cls, bundle: ContentBundle) -> "ProviderResult":
        return cls(bundle=bundle)

    @classmethod
    def unavailable(cls, reason: str, *warnings: str) -> "ProviderResult":
        return cls(reason=reason, warnings=tuple(warnings))


@runtime_checkable
class ContentCollaborator(Protocol):
    """External service that produces site-wide copy for a business."""

    async def generate_content(self, industry: str, business_metadata: dict[str, Any]) -> dict:
        ...


class ContentProvider:
    """Base class for providers in the fallback chain."""

    name: str = "provider"

    async def provide(self, page_id: str, context: ProjectContext) -> ProviderResult:
        raise NotImplementedError


def _page_title(page_id: str) -> str:
    return humanize(page_id)


def _bundle_from_site(
    provider: str, page_id: str, site: SiteContent, context: ProjectContext
) -> ProviderResult:
    sections = apply_blueprint(page_id, site, context)
    if not sections:
        return ProviderResult.unavailable(f"{provider} has no content for page '{page_id}'")
    return ProviderResult.ok(
        ContentBundle(page_id=page_id, title=_page_title(page_id), sections=sections, source=provider)
    )


class AIContentProvider(ContentProvider):
    """Asks the AI collaborator for site-wide copy, once per run.

    The first page to ask triggers the call; concurrent pages wait on the same
    lock and reuse the cached outcome.  Failures and timeouts are cached too,
    so a dead service costs at most one timeout per run.
    """

    name = "ai"

    def __init__(self, collaborator: ContentCollaborator, timeout: float = 30.0) -> None:
        self.collaborator = collaborator
        self.timeout = timeout
        self._lock = asyncio.Lock()
        self._cache: dict[tuple, SiteContent | str] = {}

    @staticmethod
    def _cache_key(context: ProjectContext) -> tuple:
        metadata = tuple(sorted((k, repr(v)) for k, v in context.business_metadata.items()))
        return (context.industry, context.business_name, metadata)

    async def _fetch(self, context: ProjectContext) -> SiteContent | str:
        metadata = {
            "business_name": context.business_name,
            "description": context.description,
            **context.business_metadata,
        }
        try:
            payload = await asyncio.wait_for(
                self.collaborator.generate_content(context.industry, metadata),
                timeout=self.timeout,
            )
            return SiteContent.model_validate(payload)
        except asyncio.TimeoutError:
            return f"AI content timed out after {self.timeout:g}s"
        except ContentUnavailable as exc:
            return f"AI content unavailable: {exc}"
        except ValidationError as exc:
            return f"AI content was malformed ({exc.error_count()} validation errors)"
        except Exception as exc:  # noqa: BLE001
            return f"AI content failed: {exc}"

    async def site_content(self, context: ProjectContext) -> SiteContent | str:
        """Return the memoised site content, or the failure reason as a string."""
        key = self._cache_key(context)
        async with self._lock:
            if key not in self._cache:
                self._cache[key] = await self._fetch(context)
            return self._cache[key]

    async def provide(self, page_id: str, context: ProjectContext) -> ProviderResult:
        outcome = await self.site_content(context)
        if isinstance(outcome, str):
            return ProviderResult.unavailable(outcome, outcome)
        return _bundle_from_site(self.name, page_id, outcome, context)


class IndustryDefaultProvider(ContentProvider):
    """Serves the packaged default copy for the project's industry."""

    name = "industry_default"

    def __init__(self, library: IndustryLibrary | None = None) -> None:
        self.library = library or IndustryLibrary.default()

    async def provide(self, page_id: str, context: ProjectContext) -> ProviderResult:
        if context.industry not in self.library:
            return ProviderResult.unavailable(f"no default content for industry '{context.industry}'")
        site = self.library.site_content(context.industry, context.business_name, context.location)
        return _bundle_from_site(self.name, page_id, site, context)


class PlaceholderProvider(ContentProvider):
    """Last resort: a titled page with boilerplate copy.  Never unavailable."""

    name = "placeholder"

    async def provide(self, page_id: str, context: ProjectContext) -> ProviderResult:
        title = _page_title(page_id)
        bundle = ContentBundle(
            page_id=page_id,
            title=title,
            sections={
                "hero": HeroSection(
                    title=title,
                    subtitle=f"{title} from {context.business_name}",
                ),
                "body": FreeTextSection(
                    body=(
                        f"This is the {title.lower()} page for {context.business_name}. "
                        "Replace this text with your own content."
                    ),
                ),
            },
            source=self.name,
        )
        return ProviderResult.ok(bundle)
