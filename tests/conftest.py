"""Shared pytest fixtures for the PWA generator test suite.

Provides reusable fixtures for:
- Temporary output directories
- Project contexts and configs
- Stubbed AI content collaborators (deterministic, failing, slow)
- Generator configuration with AI disabled or stubbed
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from src.config import GenerationSettings, GeneratorConfig
from src.context import Palette, ProjectContext
from src.errors import ContentUnavailable
from src.scaffolder.models import ProjectConfig


# ---------------------------------------------------------------------------
# Stub collaborators
# ---------------------------------------------------------------------------

AI_SITE_PAYLOAD: dict[str, Any] = {
    "hero": {
        "title": "Pipes Fixed Fast",
        "subtitle": "Same-day plumbing across Springfield.",
        "cta": "Book a Visit",
    },
    "about": {
        "title": "About Joe's Plumbing",
        "content": "Family run since 1998.\n\nLicensed and insured.",
        "benefits": ["Licensed", "Insured", "Local"],
    },
    "services": [
        {"name": "Leak Repair", "description": "Stop drips for good."},
        "Drain Cleaning",
        "Water Heaters",
        "Emergency Call-outs",
    ],
    "testimonials": [
        {"quote": "Fixed our leak in an hour.", "author": "Dana", "role": "Homeowner"},
        "Friendly and on time.",
    ],
    "contact": {
        "phone": "(555) 010-2020",
        "email": "hello@joesplumbing.test",
        "address": "42 Elm Street, Springfield",
        "hours": "24/7",
    },
}


class DeterministicCollaborator:
    """Always returns the same payload and counts calls."""

    def __init__(self, payload: dict[str, Any] | None = None) -> None:
        self.payload = payload if payload is not None else AI_SITE_PAYLOAD
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def generate_content(self, industry: str, business_metadata: dict[str, Any]) -> dict:
        self.calls.append((industry, dict(business_metadata)))
        return self.payload


class FailingCollaborator:
    """Always raises; ``error`` picks the exception raised."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or ContentUnavailable("service offline")
        self.calls = 0

    async def generate_content(self, industry: str, business_metadata: dict[str, Any]) -> dict:
        self.calls += 1
        raise self.error


class SlowCollaborator:
    """Sleeps longer than any test timeout before answering."""

    def __init__(self, delay: float = 5.0) -> None:
        self.delay = delay
        self.calls = 0

    async def generate_content(self, industry: str, business_metadata: dict[str, Any]) -> dict:
        self.calls += 1
        await asyncio.sleep(self.delay)
        return AI_SITE_PAYLOAD


@pytest.fixture
def ai_payload() -> dict[str, Any]:
    return AI_SITE_PAYLOAD


@pytest.fixture
def deterministic_collaborator() -> DeterministicCollaborator:
    return DeterministicCollaborator()


@pytest.fixture
def failing_collaborator() -> FailingCollaborator:
    return FailingCollaborator()


@pytest.fixture
def slow_collaborator() -> SlowCollaborator:
    return SlowCollaborator()


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated projects (auto-cleanup)."""
    project_dir = tmp_path / "generated"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Project context / config
# ---------------------------------------------------------------------------


def make_context(
    tmp_path: Path,
    *,
    framework: str = "react",
    industry: str = "small-business",
    features: frozenset[str] | set[str] = frozenset(),
    typescript: bool = True,
    **overrides: Any,
) -> ProjectContext:
    fields: dict[str, Any] = {
        "project_name": "Joe's Plumbing",
        "project_slug": "joe-s-plumbing",
        "business_name": "Joe's Plumbing",
        "description": "Plumbing and heating in Springfield",
        "framework": framework,
        "industry": industry,
        "selected_features": frozenset(features),
        "color_scheme": "professional",
        "palette": Palette(primary="#2b6cb0", background="#ffffff"),
        "typescript": typescript,
        "output_root": tmp_path,
        "business_metadata": {"location": "Springfield"},
    }
    fields.update(overrides)
    return ProjectContext(**fields)


@pytest.fixture
def context_factory(tmp_path: Path):
    """Build contexts with per-test overrides: ``context_factory(framework="vue")``."""

    def factory(**kwargs: Any) -> ProjectContext:
        return make_context(tmp_path, **kwargs)

    return factory


@pytest.fixture
def project_context(tmp_path: Path) -> ProjectContext:
    """React / small-business context with the contact form selected."""
    return make_context(tmp_path, features={"contact-form"})


@pytest.fixture
def project_config(tmp_project_dir: Path) -> ProjectConfig:
    return ProjectConfig(
        project_name="joes-plumbing",
        business_name="Joe's Plumbing",
        description="Plumbing and heating in Springfield",
        framework="react",
        industry="small-business",
        selected_features=["contact-form"],
        business_metadata={"location": "Springfield"},
        output_root=tmp_project_dir,
    )


@pytest.fixture
def offline_config(tmp_path: Path) -> GeneratorConfig:
    """Generator config with the AI collaborator disabled."""
    return GeneratorConfig(
        output_dir=tmp_path / "out",
        generation=GenerationSettings(ai_enabled=False, max_parallel_writes=4),
    )


@pytest.fixture
def ai_config(tmp_path: Path) -> GeneratorConfig:
    """Generator config with AI enabled and a short timeout (pair with a stub)."""
    return GeneratorConfig(
        output_dir=tmp_path / "out",
        generation=GenerationSettings(ai_enabled=True, ai_timeout=0.2, max_parallel_writes=4),
    )
