"""Core data models shared across settergen components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

_MAJOR_VERSION = re.compile(r"^v[0-9]+$")
_GOPKG_VERSION = re.compile(r"\.v[0-9]+$")


@dataclass(frozen=True)
class ImportRef:
    """One import spec as written in the source unit."""

    path: str
    alias: Optional[str] = None


@dataclass(frozen=True)
class StructField:
    """A named struct field with its raw (unprinted) type."""

    name: str
    type_node: Any = field(compare=False, repr=False)
    type_source: str = ""


@dataclass(frozen=True)
class AnnotatedType:
    """A struct type declared in a group carrying the marker comment."""

    name: str
    fields: Tuple[StructField, ...] = ()
    type_params: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceUnit:
    """One parsed Go file."""

    package_name: str
    directory: Path
    filename: str
    imports: Tuple[ImportRef, ...] = ()
    types: Tuple[AnnotatedType, ...] = ()

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    @property
    def import_paths(self) -> List[str]:
        return [ref.path for ref in self.imports]


def default_import_name(path: str) -> str:
    """Return the package qualifier Go infers for an unaliased import path."""
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return path
    name = segments[-1]
    if _MAJOR_VERSION.match(name) and len(segments) > 1:
        name = segments[-2]
    return _GOPKG_VERSION.sub("", name)


@dataclass
class ImportEntry:
    """An import of the source unit and whether generated code references it."""

    name: str
    path: str
    alias: Optional[str] = None
    used: bool = False

    @classmethod
    def from_ref(cls, ref: ImportRef) -> "ImportEntry":
        name = ref.alias if ref.alias else default_import_name(ref.path)
        return cls(name=name, path=ref.path, alias=ref.alias)


@dataclass(frozen=True)
class AccessorDescriptor:
    """One setter to generate: owning type, field name and canonical field type."""

    type_name: str
    field_name: str
    field_type: str
    type_params: Tuple[str, ...] = ()

    @property
    def receiver(self) -> str:
        if not self.type_params:
            return self.type_name
        return f"{self.type_name}[{', '.join(self.type_params)}]"

    @property
    def method_name(self) -> str:
        return f"Set{self.field_name}"


@dataclass
class SynthesisResult:
    """Descriptors synthesized for one unit plus the unit's import usage."""

    descriptors: List[AccessorDescriptor] = field(default_factory=list)
    imports: List[ImportEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.descriptors

    @property
    def used_imports(self) -> List[ImportEntry]:
        return sorted((entry for entry in self.imports if entry.used), key=lambda entry: entry.path)
