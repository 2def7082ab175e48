"""PWA generator configuration.

Centralised, typed configuration for the generator runtime.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.

This is the *runtime* configuration (where to write, how much concurrency,
whether to call the AI collaborator).  What to generate is described per run
by ``src.scaffolder.models.ProjectConfig``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from src.utils import ensure_dir


class OllamaConfig(BaseModel):
    """Configuration for the local Ollama server used for AI content."""

    url: str = Field(default="http://localhost:11434")
    model: str = Field(default="llama3.1:8b")
    timeout: int = Field(default=60, ge=1, description="Per-request HTTP timeout in seconds")


class GenerationSettings(BaseModel):
    """Tuning knobs for a generation run."""

    max_parallel_writes: int = Field(
        default=8, ge=1, description="Maximum concurrent page renders and file writes"
    )
    ai_enabled: bool = Field(default=True, description="Whether to ask the AI collaborator for content")
    ai_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for AI content before falling back to defaults",
    )
    verbose: bool = Field(default=False, description="Print a rich summary after each run")


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Instances are typically created once by the CLI entry point (or by tests)
    and then handed to ``ProjectGenerator``.
    """

    output_dir: Path = Field(default=Path("./generated-pwa"))
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        ensure_dir(target.parent)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            PWA_OUTPUT_DIR, PWA_OLLAMA_URL, PWA_OLLAMA_MODEL,
            PWA_OLLAMA_TIMEOUT, PWA_AI_ENABLED, PWA_AI_TIMEOUT,
            PWA_MAX_PARALLEL_WRITES, PWA_VERBOSE.
        """
        ollama_kwargs: dict[str, Any] = {}
        if os.environ.get("PWA_OLLAMA_URL"):
            ollama_kwargs["url"] = os.environ["PWA_OLLAMA_URL"]
        if os.environ.get("PWA_OLLAMA_MODEL"):
            ollama_kwargs["model"] = os.environ["PWA_OLLAMA_MODEL"]
        if os.environ.get("PWA_OLLAMA_TIMEOUT"):
            ollama_kwargs["timeout"] = int(os.environ["PWA_OLLAMA_TIMEOUT"])

        generation_kwargs: dict[str, Any] = {}
        if os.environ.get("PWA_MAX_PARALLEL_WRITES"):
            generation_kwargs["max_parallel_writes"] = int(os.environ["PWA_MAX_PARALLEL_WRITES"])
        if os.environ.get("PWA_AI_TIMEOUT"):
            generation_kwargs["ai_timeout"] = float(os.environ["PWA_AI_TIMEOUT"])
        if os.environ.get("PWA_AI_ENABLED"):
            generation_kwargs["ai_enabled"] = _env_flag(os.environ["PWA_AI_ENABLED"])
        if os.environ.get("PWA_VERBOSE"):
            generation_kwargs["verbose"] = _env_flag(os.environ["PWA_VERBOSE"])

        return cls(
            output_dir=Path(os.environ.get("PWA_OUTPUT_DIR", "./generated-pwa")),
            ollama=OllamaConfig(**ollama_kwargs),
            generation=GenerationSettings(**generation_kwargs),
        )


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
