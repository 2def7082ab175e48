"""Page content: models, industry defaults and the provider fallback chain."""

from src.content.ai_client import OllamaContentClient
from src.content.blueprints import PAGE_BLUEPRINTS, apply_blueprint
from src.content.industries import DEFAULT_COLOR_SCHEME, IndustryLibrary
from src.content.models import (
    ContactInfoSection,
    ContentBundle,
    FreeTextSection,
    HeroSection,
    ListSection,
    SectionContent,
    SiteContent,
    Testimonial,
    TestimonialSetSection,
)
from src.content.providers import (
    AIContentProvider,
    ContentCollaborator,
    ContentProvider,
    IndustryDefaultProvider,
    PlaceholderProvider,
    ProviderResult,
)
from src.content.resolver import ContentResolver

__all__ = [
    "AIContentProvider",
    "ContactInfoSection",
    "ContentBundle",
    "ContentCollaborator",
    "ContentProvider",
    "ContentResolver",
    "DEFAULT_COLOR_SCHEME",
    "FreeTextSection",
    "HeroSection",
    "IndustryDefaultProvider",
    "IndustryLibrary",
    "ListSection",
    "OllamaContentClient",
    "PAGE_BLUEPRINTS",
    "PlaceholderProvider",
    "ProviderResult",
    "SectionContent",
    "SiteContent",
    "Testimonial",
    "TestimonialSetSection",
    "apply_blueprint",
]
