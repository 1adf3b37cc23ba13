"""Canonical formatting for generated Go source."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List

from .errors import CanonicalizeError
from .parsing import describe_error, first_error, new_parser


class GoFormatter:
    """Normalises layout and rejects generated text that is not valid Go.

    Layout rules: LF newlines, no trailing whitespace, no runs of blank
    lines, no leading or trailing blank lines and exactly one final newline.
    When ``gofmt`` is enabled the result is additionally piped through it.
    """

    def __init__(self, *, gofmt: bool = False, gofmt_path: str = "gofmt") -> None:
        self.gofmt = gofmt
        self.gofmt_path = gofmt_path
        self._parser = new_parser()

    def format(self, source: str, path: Path | None = None) -> str:
        normalized = self.normalize(source)
        self.validate(normalized, path)
        if self.gofmt:
            return self._run_gofmt(normalized, path)
        return normalized

    @staticmethod
    def normalize(source: str) -> str:
        lines = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        cleaned: List[str] = []
        previous_blank = True
        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                if previous_blank:
                    continue
                previous_blank = True
                cleaned.append("")
                continue
            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"

    def validate(self, source: str, path: Path | None = None) -> None:
        tree = self._parser.parse(source.encode("utf-8"))
        error = first_error(tree.root_node)
        if error is not None:
            raise CanonicalizeError(f"generated code is invalid: {describe_error(error)}", path)

    def _run_gofmt(self, source: str, path: Path | None) -> str:
        try:
            completed = subprocess.run(
                [self.gofmt_path],
                input=source,
                check=True,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise CanonicalizeError(f"gofmt executable not found: {self.gofmt_path}", path) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise CanonicalizeError(f"gofmt failed: {detail}", path) from exc
        return completed.stdout


__all__ = ["GoFormatter"]
