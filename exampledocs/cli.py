"""CLI entrypoints for exampledocs commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Dict

from .config import ConfigError, ExampleDocsConfig, TemplateConfig, load_config
from .generator import DocGenerator
from .logging import configure_logging
from .parsing import available_languages
from .rendering import RenderError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing .exampledocs.yml (defaults to current directory).",
    )
    parser.add_argument(
        "-s",
        "--source",
        action="append",
        dest="sources",
        metavar="DIR",
        help="Source directory to scan; repeat for several. Overrides configured sources.",
    )
    parser.add_argument(
        "--language",
        choices=available_languages(),
        help="Source language of the examples.",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Extract from files with syntax errors instead of skipping them.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exampledocs",
        description="Generate documentation pages from examples declared in source code.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render the index and one page per example.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_source_options(generate_parser)
    generate_parser.add_argument("-o", "--output", help="Output directory for generated pages.")
    generate_parser.add_argument("--project-name", help="Project name shown on the index page.")
    generate_parser.add_argument("--project-description", help="Project description for the index page.")
    generate_parser.add_argument(
        "--templates-dir",
        help="Directory searched for templates before the built-in ones.",
    )
    generate_parser.add_argument("--index-template", help="Template used for the index page.")
    generate_parser.add_argument("--example-template", help="Template used for example pages.")

    extract_parser = subparsers.add_parser(
        "extract",
        help="Print extracted examples as JSON without rendering.",
    )
    _add_verbose_option(extract_parser, suppress_default=True)
    _add_source_options(extract_parser)

    return parser


def _resolve_config(args: argparse.Namespace) -> ExampleDocsConfig:
    config = load_config(Path(args.path))
    cwd = Path.cwd()

    overrides: Dict[str, Any] = {}
    if args.sources:
        overrides["sources"] = [(cwd / source).resolve() for source in args.sources]
    if args.language:
        overrides["language"] = args.language
    if args.lenient:
        overrides["strict_parsing"] = False

    if args.command == "generate":
        if args.output:
            overrides["output_dir"] = (cwd / args.output).resolve()
        if args.project_name:
            overrides["project_name"] = args.project_name
        if args.project_description is not None:
            overrides["project_description"] = args.project_description
        templates = config.templates
        overrides["templates"] = TemplateConfig(
            dir=(cwd / args.templates_dir).resolve() if args.templates_dir else templates.dir,
            index=args.index_template or templates.index,
            example=args.example_template or templates.example,
        )

    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for exampledocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbose = bool(getattr(args, "verbose", False))
    configure_logging(verbose=verbose, quiet=args.command == "extract")

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    generator = DocGenerator(config)

    if args.command == "generate":
        try:
            outcome = generator.run()
        except (RenderError, OSError) as exc:
            parser.exit(1, f"exampledocs generate failed: {exc}\nRun with --verbose for more details.\n")
        if not outcome.rendered:
            print("No examples found; nothing generated")
        else:
            print(
                f"Generated {len(outcome.example_files)} example pages in {_relativize(outcome.output_dir)}"
            )
        if outcome.skipped:
            print(f"Skipped {len(outcome.skipped)} unparseable files")
    elif args.command == "extract":
        try:
            result = generator.extract()
        except OSError as exc:
            parser.exit(1, f"exampledocs extract failed: {exc}\n")
        payload = {
            "examples": [asdict(example) for example in result.examples],
            "skipped": [asdict(skipped) for skipped in result.skipped],
            "files_scanned": result.files_scanned,
        }
        print(json.dumps(payload, indent=2))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
