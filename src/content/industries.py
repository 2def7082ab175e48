"""Packaged per-industry default content and colour schemes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from src.context import Palette
from src.utils import load_yaml

from .models import SiteContent

_DEFAULT_INDUSTRIES_PATH = Path(__file__).parent / "data" / "industries.yaml"

DEFAULT_COLOR_SCHEME = "professional"


class _SafeFormat(dict):
    """``str.format_map`` mapping that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _fill(value: Any, variables: dict[str, str]) -> Any:
    if isinstance(value, str):
        return value.format_map(_SafeFormat(variables))
    if isinstance(value, list):
        return [_fill(v, variables) for v in value]
    if isinstance(value, dict):
        return {k: _fill(v, variables) for k, v in value.items()}
    return value


class IndustryLibrary:
    """Lookup table of industry defaults and named colour palettes."""

    def __init__(
        self,
        industries: dict[str, dict[str, Any]],
        color_schemes: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._industries = dict(industries)
        self._schemes = {name: Palette(**colors) for name, colors in (color_schemes or {}).items()}

    @classmethod
    def from_yaml(cls, path: str | Path) -> "IndustryLibrary":
        raw = load_yaml(path)
        return cls(raw.get("industries", {}), raw.get("color_schemes", {}))

    @classmethod
    def default(cls) -> "IndustryLibrary":
        return cls.from_yaml(_DEFAULT_INDUSTRIES_PATH)

    def __contains__(self, industry: object) -> bool:
        return industry in self._industries

    def ids(self) -> list[str]:
        return list(self._industries)

    def display_name(self, industry: str) -> str:
        return self._industries[industry].get("name", industry)

    def color_schemes(self) -> list[str]:
        return list(self._schemes)

    def default_scheme(self, industry: str) -> str:
        return self._industries.get(industry, {}).get("color_scheme", DEFAULT_COLOR_SCHEME)

    def palette(self, scheme: str) -> Palette:
        """Return the palette for *scheme*, or the default palette if unknown."""
        return self._schemes.get(scheme) or self._schemes.get(DEFAULT_COLOR_SCHEME) or Palette()

    def site_content(
        self,
        industry: str,
        business_name: str,
        location: str = "Your City",
    ) -> SiteContent:
        """Return the default copy for *industry*, personalised for the business.

        Raises:
            KeyError: If *industry* is not in the library.
        """
        entry = self._industries[industry]
        variables = {"business_name": business_name, "location": location}
        payload = {
            key: _fill(entry[key], variables)
            for key in ("hero", "about", "services", "testimonials", "contact")
            if key in entry
        }
        return SiteContent.model_validate(payload)
