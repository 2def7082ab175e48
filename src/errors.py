"""Exception types and issue categories for the PWA generator.

Only configuration problems abort a generation run.  Everything else is
recovered where it happens and recorded in the ``GenerationReport`` under one
of the ``IssueCategory`` values below.
"""

from __future__ import annotations

from enum import Enum


class IssueCategory(str, Enum):
    """Category attached to every warning or error in a generation report."""

    CONFIGURATION_ERROR = "configuration_error"
    CONTENT_UNAVAILABLE = "content_unavailable"
    UNKNOWN_FEATURE = "unknown_feature"
    RENDER_GAP = "render_gap"
    EMIT_FAILURE = "emit_failure"
    DEPENDENCY_CONFLICT = "dependency_conflict"


class GeneratorError(Exception):
    """Base class for all generator errors."""


class ConfigurationError(GeneratorError):
    """Raised when a project configuration cannot be generated at all.

    Unsupported frameworks and industries land here.  The generator raises it
    before any file is written.
    """

    def __init__(self, field: str, value: str, supported: list[str] | None = None) -> None:
        self.field = field
        self.value = value
        self.supported = sorted(supported or [])
        message = f"Unsupported {field}: {value!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class ContentUnavailable(GeneratorError):
    """Raised by the AI content collaborator when it cannot produce content."""


class EmitFailure(GeneratorError):
    """Raised when a single artifact cannot be written to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")
