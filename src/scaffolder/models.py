"""Caller input and run report models for the project generator."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, computed_field

from src.errors import IssueCategory
from src.utils import load_structured

DEFAULT_FRAMEWORK = "react"
DEFAULT_INDUSTRY = "small-business"


# ---------------------------------------------------------------------------
# Caller input
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to generate."""

    project_name: str = Field(..., min_length=1, description="Project name (used for the package name)")
    business_name: str = Field(default="", description="Display name; defaults to project_name")
    description: str = Field(default="", description="Short project description")
    framework: str = Field(default=DEFAULT_FRAMEWORK)
    industry: str = Field(default=DEFAULT_INDUSTRY)
    selected_features: list[str] = Field(
        default_factory=list,
        description="Feature ids from the catalog, e.g. contact-form, gallery",
    )
    business_metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form details (location, phone, ...) handed to content providers",
    )
    color_scheme: str | None = Field(
        default=None, description="Named colour scheme; the industry default when unset"
    )
    typescript: bool = Field(default=True)
    output_root: Path | None = Field(
        default=None, description="Target directory; derived from the generator config when unset"
    )

    @property
    def display_name(self) -> str:
        return self.business_name or self.project_name

    @classmethod
    def from_file(cls, path: str | Path) -> "ProjectConfig":
        """Load a project description from a ``.yaml``/``.yml`` or ``.json`` file."""
        return cls.model_validate(load_structured(path))


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------


class GenerationState(str, Enum):
    IDLE = "idle"
    CONTEXT_BUILT = "context_built"
    FEATURES_RESOLVED = "features_resolved"
    CONTENT_RESOLVED = "content_resolved"
    RENDERING = "rendering"
    EMITTING = "emitting"
    COMPLETE = "complete"
    FAILED = "failed"

    def can_transition(self, target: "GenerationState") -> bool:
        """Return ``True`` if a run in this state may move to *target*."""
        return target in _TRANSITIONS[self]


# Each state moves forward one step; only configuration problems fail a run,
# and those are detected before anything is rendered.
_TRANSITIONS: dict[GenerationState, frozenset[GenerationState]] = {
    GenerationState.IDLE: frozenset({GenerationState.CONTEXT_BUILT, GenerationState.FAILED}),
    GenerationState.CONTEXT_BUILT: frozenset(
        {GenerationState.FEATURES_RESOLVED, GenerationState.FAILED}
    ),
    GenerationState.FEATURES_RESOLVED: frozenset({GenerationState.CONTENT_RESOLVED}),
    GenerationState.CONTENT_RESOLVED: frozenset({GenerationState.RENDERING}),
    GenerationState.RENDERING: frozenset({GenerationState.EMITTING}),
    GenerationState.EMITTING: frozenset({GenerationState.COMPLETE}),
    GenerationState.COMPLETE: frozenset(),
    GenerationState.FAILED: frozenset(),
}


class ReportEntry(BaseModel):
    """A single warning or error recorded during a run."""

    category: IssueCategory
    subject: str
    message: str


class GenerationReport(BaseModel):
    """Outcome of one generation run.  Written only by ``ProjectGenerator``."""

    project_name: str
    framework: str
    industry: str
    output_root: str = ""
    state: GenerationState = GenerationState.IDLE
    pages_created: list[str] = Field(default_factory=list)
    components_created: list[str] = Field(default_factory=list)
    features_implemented: list[str] = Field(default_factory=list)
    files_written: list[str] = Field(default_factory=list)
    warnings: list[ReportEntry] = Field(default_factory=list)
    errors: list[ReportEntry] = Field(default_factory=list)
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration_seconds: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> str:
        if self.state is GenerationState.FAILED:
            return "failed"
        if self.state is not GenerationState.COMPLETE:
            return "in_progress"
        return "complete_with_errors" if self.errors else "complete"

    def advance(self, target: GenerationState) -> None:
        """Move to *target*, rejecting skipped or backward transitions."""
        if not self.state.can_transition(target):
            raise ValueError(f"Invalid generation state transition: {self.state.value} -> {target.value}")
        self.state = target

    def warn(self, category: IssueCategory, subject: str, message: str) -> None:
        self.warnings.append(ReportEntry(category=category, subject=subject, message=message))

    def error(self, category: IssueCategory, subject: str, message: str) -> None:
        self.errors.append(ReportEntry(category=category, subject=subject, message=message))

    def warnings_for(self, category: IssueCategory) -> list[ReportEntry]:
        return [w for w in self.warnings if w.category == category]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, including ``status``."""
        return self.model_dump(mode="json")
