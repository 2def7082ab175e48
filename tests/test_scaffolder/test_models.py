"""Tests for the generator input and report models.

Covers:
- ProjectConfig defaults, validation and loading from YAML / JSON
- GenerationState transition table
- GenerationReport status, advance(), warn()/error() and to_dict()
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.errors import IssueCategory
from src.scaffolder.models import (
    DEFAULT_FRAMEWORK,
    DEFAULT_INDUSTRY,
    GenerationReport,
    GenerationState,
    ProjectConfig,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


@pytest.fixture
def report() -> GenerationReport:
    return GenerationReport(project_name="joes-plumbing", framework="react", industry="small-business")


def _advance_to(report: GenerationReport, target: GenerationState) -> None:
    for state in (
        GenerationState.CONTEXT_BUILT,
        GenerationState.FEATURES_RESOLVED,
        GenerationState.CONTENT_RESOLVED,
        GenerationState.RENDERING,
        GenerationState.EMITTING,
        GenerationState.COMPLETE,
    ):
        report.advance(state)
        if state is target:
            return


# ---------------------------------------------------------------------------
# ProjectConfig
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_defaults(self):
        project = ProjectConfig(project_name="demo")
        assert project.framework == DEFAULT_FRAMEWORK
        assert project.industry == DEFAULT_INDUSTRY
        assert project.selected_features == []
        assert project.typescript is True
        assert project.color_scheme is None
        assert project.output_root is None

    def test_display_name_falls_back_to_project_name(self):
        assert ProjectConfig(project_name="demo").display_name == "demo"
        assert ProjectConfig(project_name="demo", business_name="Demo Co").display_name == "Demo Co"

    def test_project_name_required(self):
        with pytest.raises(ValidationError):
            ProjectConfig(project_name="")

    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "project.yaml"
        path.write_text(
            "project_name: joes-plumbing\n"
            "business_name: Joe's Plumbing\n"
            "framework: vue\n"
            "selected_features: [contact-form, gallery]\n"
            "business_metadata:\n"
            "  location: Springfield\n",
            encoding="utf-8",
        )
        project = ProjectConfig.from_file(path)
        assert project.framework == "vue"
        assert project.selected_features == ["contact-form", "gallery"]
        assert project.business_metadata == {"location": "Springfield"}

    def test_from_json(self, tmp_path: Path):
        path = tmp_path / "project.json"
        path.write_text(
            json.dumps({"project_name": "shop", "industry": "e-commerce", "typescript": False}),
            encoding="utf-8",
        )
        project = ProjectConfig.from_file(path)
        assert project.industry == "e-commerce"
        assert project.typescript is False

    def test_from_file_rejects_unknown_format(self, tmp_path: Path):
        path = tmp_path / "project.toml"
        path.write_text("project_name = 'x'\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported config format"):
            ProjectConfig.from_file(path)


# ---------------------------------------------------------------------------
# GenerationState / GenerationReport
# ---------------------------------------------------------------------------


class TestGenerationState:
    def test_forward_steps(self):
        assert GenerationState.IDLE.can_transition(GenerationState.CONTEXT_BUILT)
        assert GenerationState.EMITTING.can_transition(GenerationState.COMPLETE)

    def test_no_skipping(self):
        assert not GenerationState.IDLE.can_transition(GenerationState.RENDERING)

    def test_failure_only_before_rendering(self):
        assert GenerationState.IDLE.can_transition(GenerationState.FAILED)
        assert GenerationState.CONTEXT_BUILT.can_transition(GenerationState.FAILED)
        assert not GenerationState.RENDERING.can_transition(GenerationState.FAILED)

    def test_terminal_states(self):
        for state in GenerationState:
            assert not GenerationState.COMPLETE.can_transition(state)
            assert not GenerationState.FAILED.can_transition(state)


class TestGenerationReport:
    def test_initial_status(self, report: GenerationReport):
        assert report.state is GenerationState.IDLE
        assert report.status == "in_progress"

    def test_complete(self, report: GenerationReport):
        _advance_to(report, GenerationState.COMPLETE)
        assert report.status == "complete"

    def test_complete_with_errors(self, report: GenerationReport):
        report.error(IssueCategory.EMIT_FAILURE, "public/sw.js", "disk full")
        _advance_to(report, GenerationState.COMPLETE)
        assert report.status == "complete_with_errors"

    def test_warnings_do_not_change_status(self, report: GenerationReport):
        report.warn(IssueCategory.RENDER_GAP, "booking", "generic page")
        _advance_to(report, GenerationState.COMPLETE)
        assert report.status == "complete"

    def test_failed(self, report: GenerationReport):
        report.advance(GenerationState.FAILED)
        assert report.status == "failed"

    def test_invalid_transition_raises(self, report: GenerationReport):
        with pytest.raises(ValueError, match="idle -> complete"):
            report.advance(GenerationState.COMPLETE)
        assert report.state is GenerationState.IDLE

    def test_warnings_for(self, report: GenerationReport):
        report.warn(IssueCategory.UNKNOWN_FEATURE, "flux-capacitor", "ignored")
        report.warn(IssueCategory.RENDER_GAP, "booking", "generic page")
        assert [w.subject for w in report.warnings_for(IssueCategory.RENDER_GAP)] == ["booking"]

    def test_to_dict_is_json_ready(self, report: GenerationReport):
        report.warn(IssueCategory.UNKNOWN_FEATURE, "flux-capacitor", "ignored")
        data = report.to_dict()
        assert data["status"] == "in_progress"
        assert data["state"] == "idle"
        assert data["warnings"][0]["category"] == "unknown_feature"
        json.dumps(data)
