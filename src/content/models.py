"""Pydantic v2 models for page content.

A ``ContentBundle`` is the framework-independent description of one page: an
ordered mapping of section keys to ``SectionContent`` values.  Section content
is a tagged union discriminated by ``kind``.

``SiteContent`` is the site-wide shape produced by the AI collaborator and by
the packaged industry defaults; page blueprints slice it into bundles.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Section content (tagged union)
# ---------------------------------------------------------------------------


class HeroSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["hero"] = "hero"
    title: str
    subtitle: str = ""
    cta_label: str = ""
    cta_route: str = ""


class ListSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    title: str = ""
    items: tuple[str, ...] = ()


class Testimonial(BaseModel):
    model_config = ConfigDict(frozen=True)

    quote: str
    author: str = ""
    role: str = ""


class TestimonialSetSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["testimonial_set"] = "testimonial_set"
    title: str = ""
    testimonials: tuple[Testimonial, ...] = ()


class ContactInfoSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["contact_info"] = "contact_info"
    title: str = "Get in Touch"
    phone: str = ""
    email: str = ""
    address: str = ""
    hours: str = ""


class FreeTextSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["free_text"] = "free_text"
    title: str = ""
    body: str


SectionContent = Annotated[
    Union[HeroSection, ListSection, TestimonialSetSection, ContactInfoSection, FreeTextSection],
    Field(discriminator="kind"),
]


class ContentBundle(BaseModel):
    """Content for a single page.

    ``sections`` preserves insertion order; renderers emit sections in exactly
    this order.  ``source`` names the provider that produced the bundle and
    ``notes`` carries warnings raised while resolving it.
    """

    model_config = ConfigDict(frozen=True)

    page_id: str
    title: str
    sections: dict[str, SectionContent]
    source: str = ""
    notes: tuple[str, ...] = ()

    @field_validator("sections")
    @classmethod
    def _require_sections(cls, value: dict[str, SectionContent]) -> dict[str, SectionContent]:
        if not value:
            raise ValueError("a content bundle needs at least one section")
        return value

    def section_keys(self) -> list[str]:
        return list(self.sections)


# ---------------------------------------------------------------------------
# Site-wide content (AI payloads and industry defaults)
# ---------------------------------------------------------------------------


class SiteHero(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    subtitle: str = ""
    cta: str = "Get Started"


class SiteAbout(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    content: str = ""
    benefits: list[str] = Field(default_factory=list)


class SiteContact(BaseModel):
    model_config = ConfigDict(extra="ignore")

    phone: str = ""
    email: str = ""
    address: str = ""
    hours: str = ""


class SiteContent(BaseModel):
    """Site-wide copy for one business."""

    model_config = ConfigDict(extra="ignore")

    hero: SiteHero
    about: SiteAbout = Field(default_factory=SiteAbout)
    services: list[str] = Field(default_factory=list)
    testimonials: list[Testimonial] = Field(default_factory=list)
    contact: SiteContact = Field(default_factory=SiteContact)

    @field_validator("services", mode="before")
    @classmethod
    def _service_names(cls, value):
        # AI payloads sometimes return {"name": ..., "description": ...} objects.
        if not isinstance(value, list):
            return value
        names = []
        for entry in value:
            if isinstance(entry, dict):
                entry = entry.get("name") or entry.get("title") or ""
            if entry:
                names.append(entry)
        return names

    @field_validator("testimonials", mode="before")
    @classmethod
    def _testimonial_objects(cls, value):
        if not isinstance(value, list):
            return value
        normalised = []
        for i, entry in enumerate(value, start=1):
            if isinstance(entry, str):
                normalised.append(
                    {"quote": entry, "author": f"Customer {i}", "role": "Satisfied Client"}
                )
            elif isinstance(entry, dict) and "quote" not in entry and "text" in entry:
                normalised.append({**entry, "quote": entry["text"]})
            else:
                normalised.append(entry)
        return normalised
