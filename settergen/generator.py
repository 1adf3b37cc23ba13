"""Per-file scan, synthesize and emit pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import GeneratorConfig
from .discovery import list_go_files
from .emitter import SetterEmitter
from .errors import SetterGenError
from .formatting import GoFormatter
from .logging import get_logger
from .scanner import DeclarationScanner
from .synthesizer import synthesize
from .type_printer import TypePrinter


@dataclass
class FileFailure:
    """A source file that was skipped because generation failed."""

    path: Path
    error: SetterGenError


@dataclass
class RunReport:
    """Outcome of one generation run."""

    generated: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failed: List[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class SetterGenerator:
    """Coordinates discovery and the per-file pipeline.

    Files are processed one after another. A failure in one file is logged
    and recorded, never propagated, so the remaining files still get their
    setters.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        scanner: DeclarationScanner | None = None,
        emitter: SetterEmitter | None = None,
        printer: TypePrinter | None = None,
    ) -> None:
        self.config = config
        self.scanner = scanner or DeclarationScanner(marker=config.marker)
        self.emitter = emitter or SetterEmitter(
            formatter=GoFormatter(
                gofmt=config.formatter.gofmt,
                gofmt_path=config.formatter.gofmt_path,
            )
        )
        self.printer = printer or TypePrinter(
            legacy_channel_keyword=config.compat.legacy_channel_keyword
        )
        self.logger = get_logger("generator")

    def run(self, root: Path | str | None = None) -> RunReport:
        """Generate setters for every Go file below ``root`` (defaults to the config root)."""
        root_path = Path(root) if root is not None else self.config.root
        files = list_go_files(root_path)
        self.logger.info("Scanning %d Go file(s) under %s", len(files), root_path)

        report = RunReport()
        for path in files:
            try:
                output = self.process_file(path)
            except SetterGenError as exc:
                if exc.path is None:
                    exc.path = path
                self.logger.warning("Skipping %s: %s", path, exc)
                report.failed.append(FileFailure(path=path, error=exc))
                continue
            if output is None:
                report.skipped.append(path)
            else:
                report.generated.append(output)

        self.logger.info(
            "Generated %d file(s), skipped %d, failed %d",
            len(report.generated),
            len(report.skipped),
            len(report.failed),
        )
        return report

    def process_file(self, path: Path) -> Path | None:
        """Run the pipeline for one file; return the companion path or None when nothing applies."""
        unit = self.scanner.scan(path)
        result = synthesize(unit, self.config.target_fields, self.printer)
        if result.is_empty:
            self.logger.debug("No setters to generate for %s", path)
            return None
        output = self.emitter.emit(unit, result)
        self.logger.info("Generated %s", output)
        return output


__all__ = ["FileFailure", "RunReport", "SetterGenerator"]
