"""PWA project scaffolder -- runs a generation and writes the project tree.

Takes a ``ProjectConfig`` (business details, framework, industry and selected
features) and produces a complete multi-file PWA project for the chosen
framework, plus a ``GenerationReport`` describing what happened.

Quick usage::

    from src.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig(
        project_name="joes-plumbing",
        business_name="Joe's Plumbing",
        framework="vue",
        selected_features=["contact-form", "testimonials"],
    )
    report = ProjectGenerator().generate_sync(config)
    report.status  # "complete"
"""

from src.scaffolder.emitter import EmitResult, FileEmitter
from src.scaffolder.generator import ContextBuilder, ProjectGenerator
from src.scaffolder.models import (
    GenerationReport,
    GenerationState,
    ProjectConfig,
    ReportEntry,
)

__all__ = [
    "ContextBuilder",
    "EmitResult",
    "FileEmitter",
    "GenerationReport",
    "GenerationState",
    "ProjectConfig",
    "ProjectGenerator",
    "ReportEntry",
]
