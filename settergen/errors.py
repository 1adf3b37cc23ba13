"""Error taxonomy for setter generation.

Every error below is scoped to a single source unit: the pipeline logs it,
records it in the run report and moves on to the next file.
"""

from __future__ import annotations

from pathlib import Path


class SetterGenError(RuntimeError):
    """Base class for failures tied to one source file."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{self.path}: {message}"
        return message


class ParseError(SetterGenError):
    """Raised when a Go source file cannot be read or parsed."""


class UnsupportedTypeError(SetterGenError):
    """Raised when a field type uses a node kind the type printer cannot render."""

    def __init__(self, kind: str, source: str = "", path: Path | str | None = None) -> None:
        detail = f"unsupported type: {kind}"
        if source:
            detail += f" ({source})"
        super().__init__(detail, path)
        self.kind = kind


class RenderError(SetterGenError):
    """Raised when the setter template fails to render."""


class CanonicalizeError(SetterGenError):
    """Raised when rendered Go code cannot be formatted into canonical form."""


class WriteError(SetterGenError):
    """Raised when the companion file cannot be written."""


__all__ = [
    "CanonicalizeError",
    "ParseError",
    "RenderError",
    "SetterGenError",
    "UnsupportedTypeError",
    "WriteError",
]
