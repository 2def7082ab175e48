"""Tests for writing rendered artifacts to disk (src.scaffolder.emitter).

Covers:
- Directory creation and overwrite of existing files
- Last-artifact-wins for duplicate paths
- Rejection of paths that escape the output root
- Per-path OSError isolation
- Idempotent reruns
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.errors import EmitFailure
from src.renderers import RenderedArtifact
from src.scaffolder.emitter import EmitResult, FileEmitter, collapse
from src.utils import list_files


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


def _artifact(path: str, content: str = "x\n") -> RenderedArtifact:
    return RenderedArtifact(path=path, content=content)


class TestCollapse:
    def test_last_artifact_wins(self):
        collapsed = collapse([_artifact("a.txt", "1"), _artifact("b.txt"), _artifact("a.txt", "2")])
        assert list(collapsed) == ["a.txt", "b.txt"]
        assert collapsed["a.txt"].content == "2"


class TestFileEmitter:
    def test_rejects_zero_parallelism(self):
        with pytest.raises(ValueError):
            FileEmitter(max_parallel_writes=0)

    async def test_writes_nested_files(self, tmp_project_dir: Path):
        emitter = FileEmitter(max_parallel_writes=2)
        result = await emitter.emit(
            [_artifact("src/pages/HomePage.tsx", "home\n"), _artifact("package.json", "{}\n")],
            tmp_project_dir,
        )
        assert result.ok
        assert result.written == ["package.json", "src/pages/HomePage.tsx"]
        assert (tmp_project_dir / "src" / "pages" / "HomePage.tsx").read_text(encoding="utf-8") == "home\n"

    async def test_creates_missing_output_root(self, tmp_path: Path):
        root = tmp_path / "does" / "not" / "exist"
        result = await FileEmitter().emit([_artifact("index.html")], root)
        assert result.written == ["index.html"]
        assert (root / "index.html").is_file()

    async def test_duplicate_paths_last_wins(self, tmp_project_dir: Path):
        result = await FileEmitter().emit(
            [_artifact("theme.css", "first"), _artifact("theme.css", "second")], tmp_project_dir
        )
        assert result.written == ["theme.css"]
        assert (tmp_project_dir / "theme.css").read_text(encoding="utf-8") == "second"

    @pytest.mark.parametrize("bad_path", ["../escape.txt", "/etc/passwd", "a/../../b.txt", ""])
    async def test_rejects_escaping_paths(self, tmp_project_dir: Path, bad_path: str):
        result = await FileEmitter().emit([_artifact(bad_path), _artifact("ok.txt")], tmp_project_dir)
        assert result.written == ["ok.txt"]
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], EmitFailure)
        assert result.errors[0].path == bad_path

    async def test_os_error_is_isolated(self, tmp_project_dir: Path):
        # A regular file where a directory is needed.
        (tmp_project_dir / "public").write_text("not a directory", encoding="utf-8")
        result = await FileEmitter().emit(
            [_artifact("public/manifest.json"), _artifact("package.json")], tmp_project_dir
        )
        assert not result.ok
        assert result.written == ["package.json"]
        assert [e.path for e in result.errors] == ["public/manifest.json"]
        assert result.errors[0].reason

    async def test_unusable_root_fails_every_path(self, tmp_path: Path):
        root = tmp_path / "occupied"
        root.write_text("x", encoding="utf-8")
        artifacts = [_artifact("b.txt"), _artifact("a/c.txt"), _artifact("b.txt")]
        result = await FileEmitter().emit(artifacts, root)
        assert result.written == []
        assert [e.path for e in result.errors] == ["a/c.txt", "b.txt"]
        assert all("output root" in e.reason for e in result.errors)

    async def test_rerun_is_idempotent(self, tmp_project_dir: Path):
        artifacts = [_artifact("a/b.txt", "b"), _artifact("c.txt", "c")]
        emitter = FileEmitter()
        first = await emitter.emit(artifacts, tmp_project_dir)
        snapshot = {p: (tmp_project_dir / p).read_text(encoding="utf-8") for p in list_files(tmp_project_dir)}
        second = await emitter.emit(artifacts, tmp_project_dir)
        assert first.written == second.written
        assert {p: (tmp_project_dir / p).read_text(encoding="utf-8") for p in list_files(tmp_project_dir)} == snapshot

    async def test_overwrites_existing_file(self, tmp_project_dir: Path):
        (tmp_project_dir / "README.md").write_text("old", encoding="utf-8")
        await FileEmitter().emit([_artifact("README.md", "new")], tmp_project_dir)
        assert (tmp_project_dir / "README.md").read_text(encoding="utf-8") == "new"


class TestEmitResult:
    def test_ok(self):
        assert EmitResult().ok
        assert not EmitResult(errors=[EmitFailure("a", "b")]).ok
