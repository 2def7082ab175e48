"""Page blueprints: how site-wide copy is sliced into per-page sections.

Each blueprint takes a ``SiteContent`` and the project context and returns an
ordered ``{section_key: SectionContent}`` mapping.  Sections whose source copy
is empty are left out.  Pages without a blueprint (``login``, ``booking``, ...)
get no site content at all and fall through to the placeholder provider.
"""

from __future__ import annotations

from collections.abc import Callable

from src.context import ProjectContext

from .models import (
    ContactInfoSection,
    FreeTextSection,
    HeroSection,
    ListSection,
    SectionContent,
    SiteContent,
    TestimonialSetSection,
)

Blueprint = Callable[[SiteContent, ProjectContext], dict[str, SectionContent]]


def _primary_cta_route(context: ProjectContext) -> str:
    if context.has_feature("contact-form"):
        return "/contact"
    if context.has_feature("booking"):
        return "/booking"
    return "/services"


def _home(site: SiteContent, context: ProjectContext) -> dict[str, SectionContent]:
    sections: dict[str, SectionContent] = {
        "hero": HeroSection(
            title=site.hero.title,
            subtitle=site.hero.subtitle,
            cta_label=site.hero.cta,
            cta_route=_primary_cta_route(context),
        ),
    }
    if site.services:
        sections["highlights"] = ListSection(title="What We Offer", items=tuple(site.services[:3]))
    if site.testimonials:
        sections["testimonials"] = TestimonialSetSection(
            title="What Our Clients Say", testimonials=tuple(site.testimonials[:3])
        )
    return sections


def _about(site: SiteContent, context: ProjectContext) -> dict[str, SectionContent]:
    sections: dict[str, SectionContent] = {}
    if site.about.content:
        sections["story"] = FreeTextSection(
            title=site.about.title or f"About {context.business_name}",
            body=site.about.content,
        )
    if site.about.benefits:
        sections["values"] = ListSection(title="Why Choose Us", items=tuple(site.about.benefits))
    return sections


def _services(site: SiteContent, context: ProjectContext) -> dict[str, SectionContent]:
    if not site.services:
        return {}
    return {
        "intro": HeroSection(
            title="Our Services",
            subtitle=f"What {context.business_name} can do for you",
        ),
        "services": ListSection(title="Services", items=tuple(site.services)),
    }


def _contact(site: SiteContent, context: ProjectContext) -> dict[str, SectionContent]:
    contact = site.contact
    if not any((contact.phone, contact.email, contact.address)):
        return {}
    return {
        "intro": HeroSection(
            title="Contact Us",
            subtitle=f"We'd love to hear from you. Reach {context.business_name} any time.",
        ),
        "details": ContactInfoSection(
            phone=contact.phone,
            email=contact.email,
            address=contact.address,
            hours=contact.hours,
        ),
    }


def _testimonials(site: SiteContent, context: ProjectContext) -> dict[str, SectionContent]:
    if not site.testimonials:
        return {}
    return {
        "testimonials": TestimonialSetSection(
            title="What Our Clients Say", testimonials=tuple(site.testimonials)
        ),
    }


def _reviews(site: SiteContent, context: ProjectContext) -> dict[str, SectionContent]:
    if not site.testimonials:
        return {}
    return {
        "intro": HeroSection(
            title="Customer Reviews",
            subtitle=f"Honest feedback from people who chose {context.business_name}.",
        ),
        "reviews": TestimonialSetSection(title="Latest Reviews", testimonials=tuple(site.testimonials)),
    }


PAGE_BLUEPRINTS: dict[str, Blueprint] = {
    "home": _home,
    "about": _about,
    "services": _services,
    "contact": _contact,
    "testimonials": _testimonials,
    "reviews": _reviews,
}


def apply_blueprint(
    page_id: str, site: SiteContent, context: ProjectContext
) -> dict[str, SectionContent]:
    """Return the sections for *page_id*, or an empty dict if it has no blueprint."""
    blueprint = PAGE_BLUEPRINTS.get(page_id)
    if blueprint is None:
        return {}
    return blueprint(site, context)
