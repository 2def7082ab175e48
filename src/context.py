"""Read-only per-run project context shared by content providers and renderers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Palette(BaseModel):
    """Theme colours derived from a named colour scheme."""

    model_config = ConfigDict(frozen=True)

    primary: str = Field(default="#667eea")
    secondary: str = Field(default="#764ba2")
    accent: str = Field(default="#f6ad55")
    background: str = Field(default="#ffffff")
    text: str = Field(default="#2d3748")


class ProjectContext(BaseModel):
    """Everything a generation run knows about the project being generated.

    Built once per run by ``ProjectGenerator`` and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str
    project_slug: str
    business_name: str
    description: str = Field(default="")
    framework: str
    industry: str
    selected_features: frozenset[str] = Field(default_factory=frozenset)
    color_scheme: str = Field(default="professional")
    palette: Palette = Field(default_factory=Palette)
    typescript: bool = Field(default=True)
    output_root: Path
    business_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def location(self) -> str:
        return str(self.business_metadata.get("location") or "Your City")

    def has_feature(self, feature_id: str) -> bool:
        return feature_id in self.selected_features
