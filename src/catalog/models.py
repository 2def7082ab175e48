"""Pydantic v2 models for the feature catalog and the resolved page set."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# "name@range" where name may itself be scoped ("@scope/name").
_PACKAGE_RE = re.compile(r"^(?P<name>@?[^@\s]+)(?:@(?P<version>[^@\s]+))?$")


class PackageRef(BaseModel):
    """An npm package reference such as ``react-hook-form@^7.48.0``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    version: str = Field(default="latest")

    @classmethod
    def parse(cls, ref: str) -> "PackageRef":
        """Parse ``"name@range"`` (scoped names like ``@scope/pkg@^1`` included)."""
        match = _PACKAGE_RE.match(ref.strip())
        if match is None:
            raise ValueError(f"Invalid package reference: {ref!r}")
        return cls(name=match["name"], version=match["version"] or "latest")

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


class FeatureSpec(BaseModel):
    """Everything a single selectable feature contributes to a project."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    description: str = Field(default="")
    pages: tuple[str, ...] = Field(default=())
    components: tuple[str, ...] = Field(default=())
    dependencies: tuple[PackageRef, ...] = Field(default=())
    style_bundles: tuple[str, ...] = Field(default=())
    functionality: str = Field(default="content")

    @field_validator("dependencies", mode="before")
    @classmethod
    def _parse_dependency_strings(cls, value):
        if value is None:
            return ()
        return tuple(PackageRef.parse(v) if isinstance(v, str) else v for v in value)


class ResolvedPageSet(BaseModel):
    """The deduplicated, order-stable result of feature resolution.

    ``pages`` and ``components`` keep first-occurrence order; navigation is
    derived from ``pages``.  ``page_owners`` maps every page to the feature
    that first declared it, and that feature's components and style bundles
    are the ones associated with the page.
    """

    model_config = ConfigDict(frozen=True)

    pages: tuple[str, ...]
    components: tuple[str, ...]
    dependencies: tuple[PackageRef, ...]
    style_bundles: tuple[str, ...]
    page_owners: dict[str, str] = Field(default_factory=dict)
    page_components: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    page_styles: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    features_implemented: tuple[str, ...] = Field(default=())
    unknown_features: tuple[str, ...] = Field(default=())
    dependency_conflicts: tuple[str, ...] = Field(default=())

    def dependency_map(self) -> dict[str, str]:
        """Return ``{package: version}`` in resolution order."""
        return {ref.name: ref.version for ref in self.dependencies}
