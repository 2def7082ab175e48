"""Command-line entry point for the PWA generator.

Usage::

    python -m src.cli project.yaml
    python -m src.cli project.yaml --output ./joes-plumbing --framework vue
    python -m src.cli project.json --no-ai --report report.json
    python -m src.cli --list-features
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import yaml
from rich.markup import escape
from rich.table import Table

from src.catalog import FeatureCatalog
from src.config import GeneratorConfig
from src.errors import ConfigurationError
from src.scaffolder import ProjectConfig, ProjectGenerator
from src.utils import console, print_error, print_success, print_warning, save_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="PWA generator -- multi-framework progressive web app projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.cli project.yaml\n"
            "  python -m src.cli project.yaml -o ./my-pwa --framework svelte\n"
            "  python -m src.cli --list-features\n"
        ),
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Project description (.yaml, .yml or .json)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: the project file's output_root, else PWA_OUTPUT_DIR/<slug>)",
    )
    parser.add_argument(
        "--framework", "-f",
        default=None,
        help="Override the framework named in the project file",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip the AI content service and use industry defaults",
    )
    parser.add_argument(
        "--report",
        default=None,
        help="Write the generation report as JSON to this path",
    )
    parser.add_argument(
        "--list-features",
        action="store_true",
        help="List the selectable features and exit",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not print the generation summary",
    )
    return parser


def list_features(catalog: FeatureCatalog) -> None:
    table = Table(title="Features", show_header=True, header_style="bold cyan")
    table.add_column("Feature", style="bold", no_wrap=True)
    table.add_column("Pages")
    table.add_column("Description", style="dim")
    for spec in catalog.selectable():
        table.add_row(spec.id, ", ".join(spec.pages) or "-", spec.description)
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m src.cli``.  Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_features:
        list_features(FeatureCatalog.default())
        return 0

    if not args.config:
        parser.print_usage()
        print_error("Error: a project file is required")
        return 1

    config_path = Path(args.config)
    if not config_path.exists():
        print_error(f"Error: project file not found: {escape(str(config_path))}")
        return 1

    try:
        project = ProjectConfig.from_file(config_path)
    except (ValueError, yaml.YAMLError) as exc:
        print_error(f"Error: invalid project file {escape(str(config_path))}")
        console.print(escape(str(exc)))
        return 1

    updates: dict[str, object] = {}
    if args.framework:
        updates["framework"] = args.framework
    if args.output:
        updates["output_root"] = Path(args.output)
    if updates:
        project = project.model_copy(update=updates)

    settings = GeneratorConfig.from_env()
    settings.generation.verbose = not args.quiet
    if args.no_ai:
        settings.generation.ai_enabled = False

    generator = ProjectGenerator(settings)
    try:
        report = generator.generate_sync(project)
    except ConfigurationError as exc:
        if args.quiet:
            print_error(escape(str(exc)))
        return 1

    if args.report:
        asyncio.run(save_json(report.to_dict(), args.report))
        console.print(f"  Report written to {escape(args.report)}")

    if report.status == "complete":
        if args.quiet:
            print_success(f"Project written to {escape(report.output_root)}")
        return 0
    print_warning(f"Generation finished with status {report.status}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
