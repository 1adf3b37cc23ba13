"""CLI entrypoint for settergen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .generator import SetterGenerator
from .logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="settergen",
        description="Generate setter methods for Go structs annotated with //gen:setters.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Root directory to scan for .go files (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit with status 1 when any file could not be processed.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for settergen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    root = Path(args.path)
    try:
        config = load_config(root)
    except ConfigError as exc:
        parser.exit(1, f"settergen: {exc}\n")

    generator = SetterGenerator(config)
    try:
        report = generator.run(root)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    for output in report.generated:
        print(f"Generated {_relativize(output)}")
    summary = f"{len(report.generated)} generated, {len(report.skipped)} without setters"
    if report.failed:
        summary += f", {len(report.failed)} failed (run with --verbose for details)"
    print(summary)

    if args.fail_on_error and not report.ok:
        parser.exit(1)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
