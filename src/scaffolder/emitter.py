"""Writes rendered artifacts to disk.

Writes run in worker threads, at most ``max_parallel_writes`` at a time.  A
failure on one path is recorded and the rest of the batch is still written.

Files are only ever added or overwritten.  Re-running into an existing root
with fewer features leaves the files of the dropped features in place; clear
the output root first for a tree that matches a fresh run exactly.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from src.errors import EmitFailure
from src.renderers.base import RenderedArtifact


@dataclass
class EmitResult:
    """Paths written (sorted, relative to the output root) and per-path failures."""

    written: list[str] = field(default_factory=list)
    errors: list[EmitFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def collapse(artifacts: Iterable[RenderedArtifact]) -> dict[str, RenderedArtifact]:
    """Keep the last artifact for every path, in first-seen path order."""
    by_path: dict[str, RenderedArtifact] = {}
    for artifact in artifacts:
        by_path[artifact.path] = artifact
    return by_path


def _target_path(output_root: Path, relative: str) -> Path:
    """Resolve *relative* under *output_root*.

    Raises:
        EmitFailure: If the path is absolute or escapes the output root.
    """
    posix = PurePosixPath(relative)
    if not relative or posix.is_absolute() or ".." in posix.parts or Path(relative).is_absolute():
        raise EmitFailure(relative, "path escapes the output root")
    return output_root.joinpath(*posix.parts)


def _write(target: Path, content: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


class FileEmitter:
    """Materialises ``RenderedArtifact`` lists under an output directory."""

    def __init__(self, max_parallel_writes: int = 8) -> None:
        if max_parallel_writes < 1:
            raise ValueError("max_parallel_writes must be at least 1")
        self.max_parallel_writes = max_parallel_writes

    async def emit(self, artifacts: Iterable[RenderedArtifact], output_root: str | Path) -> EmitResult:
        """Write every artifact below *output_root*.

        Parent directories are created as needed and existing files are
        overwritten.  When several artifacts share a path the last one wins.
        """
        root = Path(output_root)
        semaphore = asyncio.Semaphore(self.max_parallel_writes)
        result = EmitResult()

        async def write_one(artifact: RenderedArtifact) -> None:
            try:
                target = _target_path(root, artifact.path)
                async with semaphore:
                    await asyncio.to_thread(_write, target, artifact.content)
            except EmitFailure as exc:
                result.errors.append(exc)
            except OSError as exc:
                result.errors.append(EmitFailure(artifact.path, exc.strerror or str(exc)))
            else:
                result.written.append(artifact.path)

        by_path = collapse(artifacts)
        try:
            await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            reason = f"cannot create output root: {exc.strerror or exc}"
            result.errors.extend(EmitFailure(path, reason) for path in sorted(by_path))
            return result
        await asyncio.gather(*(write_one(a) for a in by_path.values()))

        result.written.sort()
        result.errors.sort(key=lambda e: e.path)
        return result
