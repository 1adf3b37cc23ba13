"""Renders setter descriptors into companion Go files."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .errors import RenderError, WriteError
from .formatting import GoFormatter
from .logging import get_logger
from .models import AccessorDescriptor, ImportEntry, SourceUnit, SynthesisResult

TEMPLATE_NAME = "setters.go.j2"
COMPANION_SUFFIX = "_setters"


class SetterEmitter:
    """Turns a synthesis result into a formatted ``<name>_setters.go`` file."""

    def __init__(
        self,
        formatter: GoFormatter | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.formatter = formatter or GoFormatter()
        self.logger = get_logger("emitter")
        self._env = self._create_env(templates_dir)

    def emit(self, unit: SourceUnit, result: SynthesisResult) -> Path:
        """Render, canonicalize and write setters for ``unit``; return the output path."""
        if result.is_empty:
            raise ValueError(f"No setters to generate for {unit.path}")
        output_path = self.companion_path(unit)
        rendered = self.render(unit.package_name, result.used_imports, result.descriptors, unit.path)
        formatted = self.formatter.format(rendered, unit.path)
        try:
            output_path.write_text(formatted, encoding="utf-8", newline="\n")
        except OSError as exc:
            raise WriteError(f"cannot write {output_path.name}: {exc.strerror or exc}", unit.path) from exc
        self.logger.debug(
            "Wrote %d setter(s) and %d import(s) to %s",
            len(result.descriptors),
            len(result.used_imports),
            output_path,
        )
        return output_path

    def render(
        self,
        package_name: str,
        imports: Sequence[ImportEntry],
        descriptors: Sequence[AccessorDescriptor],
        path: Path | None = None,
    ) -> str:
        """Render the raw (unformatted) setter file."""
        try:
            template = self._env.get_template(TEMPLATE_NAME)
            return template.render(
                package_name=package_name,
                imports=sorted(imports, key=lambda entry: entry.path),
                setters=list(descriptors),
            )
        except TemplateError as exc:
            raise RenderError(f"failed to render {TEMPLATE_NAME}: {exc}", path) from exc

    @staticmethod
    def companion_path(unit: SourceUnit) -> Path:
        filename = Path(unit.filename)
        extension = filename.suffix or ".go"
        return unit.directory / f"{filename.stem}{COMPANION_SUFFIX}{extension}"

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


__all__ = ["COMPANION_SUFFIX", "SetterEmitter", "TEMPLATE_NAME"]
