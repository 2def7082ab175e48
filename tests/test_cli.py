"""Tests for the command-line entry point (src.cli)."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from src.cli import build_parser, main

pytestmark = pytest.mark.unit


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    path = tmp_path / "project.yaml"
    path.write_text(
        "project_name: joes-plumbing\n"
        "business_name: Joe's Plumbing\n"
        "industry: small-business\n"
        "selected_features: [contact-form]\n"
        "business_metadata:\n"
        "  location: Springfield\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("PWA_"):
            monkeypatch.delenv(key)


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["project.yaml"])
        assert args.config == "project.yaml"
        assert args.output is None
        assert args.framework is None
        assert not args.no_ai
        assert not args.quiet

    def test_short_flags(self):
        args = build_parser().parse_args(["p.json", "-o", "out", "-f", "vue", "-q"])
        assert (args.output, args.framework, args.quiet) == ("out", "vue", True)


class TestMain:
    def test_list_features(self, capsys):
        assert main(["--list-features"]) == 0
        out = capsys.readouterr().out
        assert "contact-form" in out
        assert "core" not in out.split()

    def test_missing_config_argument(self):
        assert main([]) == 1

    def test_missing_file(self, tmp_path: Path):
        assert main([str(tmp_path / "nope.yaml")]) == 1

    def test_invalid_file(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("business_name: no project name\n", encoding="utf-8")
        assert main([str(path), "--no-ai", "-q"]) == 1

    def test_generate_offline_with_report(self, project_file: Path, tmp_path: Path):
        output = tmp_path / "site"
        report_path = tmp_path / "report.json"
        code = main(
            [str(project_file), "--no-ai", "-q", "-o", str(output), "--report", str(report_path)]
        )
        assert code == 0
        assert (output / "src" / "pages" / "ContactPage.tsx").is_file()

        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["status"] == "complete"
        assert report["pages_created"] == ["home", "about", "services", "contact"]
        assert "public/manifest.json" in report["files_written"]

    def test_framework_override(self, project_file: Path, tmp_path: Path):
        output = tmp_path / "site"
        assert main([str(project_file), "--no-ai", "-q", "-o", str(output), "-f", "svelte"]) == 0
        assert (output / "src" / "routes" / "+page.svelte").is_file()
        assert (output / "static" / "manifest.json").is_file()

    def test_unsupported_framework(self, project_file: Path, tmp_path: Path):
        output = tmp_path / "site"
        assert main([str(project_file), "--no-ai", "-q", "-o", str(output), "-f", "ember"]) == 1
        assert not output.exists()
