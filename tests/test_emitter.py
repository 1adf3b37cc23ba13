"""Tests for settergen.emitter."""

from __future__ import annotations

from pathlib import Path

import pytest

from settergen.emitter import SetterEmitter
from settergen.errors import CanonicalizeError, RenderError, WriteError
from settergen.models import AccessorDescriptor, ImportEntry, SourceUnit, SynthesisResult

_EXPECTED = """\
// Code generated by settergen. DO NOT EDIT.

package example

import (
\t"time"
)

func (s *example) SetCreatedAt(v time.Time) {
\ts.CreatedAt = v
}

func (s *example) SetUpdatedAt(v time.Time) {
\ts.UpdatedAt = v
}
"""


def _unit(directory: Path, filename: str = "example_v1.go") -> SourceUnit:
    return SourceUnit(package_name="example", directory=directory, filename=filename)


def _result() -> SynthesisResult:
    return SynthesisResult(
        descriptors=[
            AccessorDescriptor("example", "CreatedAt", "time.Time"),
            AccessorDescriptor("example", "UpdatedAt", "time.Time"),
        ],
        imports=[
            ImportEntry(name="log", path="log"),
            ImportEntry(name="time", path="time", used=True),
        ],
    )


def test_companion_path_sits_next_to_source(tmp_path: Path) -> None:
    assert SetterEmitter.companion_path(_unit(tmp_path)) == tmp_path / "example_v1_setters.go"
    assert SetterEmitter.companion_path(_unit(tmp_path, "model.go")) == tmp_path / "model_setters.go"


def test_emit_writes_formatted_setters(tmp_path: Path) -> None:
    output = SetterEmitter().emit(_unit(tmp_path), _result())

    assert output == tmp_path / "example_v1_setters.go"
    assert output.read_text(encoding="utf-8") == _EXPECTED


def test_emit_is_idempotent_and_overwrites(tmp_path: Path) -> None:
    emitter = SetterEmitter()
    target = tmp_path / "example_v1_setters.go"
    target.write_text("stale content\n", encoding="utf-8")

    first = emitter.emit(_unit(tmp_path), _result()).read_bytes()
    second = emitter.emit(_unit(tmp_path), _result()).read_bytes()

    assert first == second
    assert b"stale content" not in first


def test_render_omits_import_block_without_used_imports(tmp_path: Path) -> None:
    rendered = SetterEmitter().render(
        "p",
        [],
        [AccessorDescriptor("T", "CreatedAt", "int64")],
    )
    assert "import" not in rendered
    assert "func (s *T) SetCreatedAt(v int64) {" in rendered


def test_render_keeps_aliases_and_sorts_imports() -> None:
    rendered = SetterEmitter().render(
        "p",
        [
            ImportEntry(name="tm", path="time", alias="tm", used=True),
            ImportEntry(name="uuid", path="github.com/google/uuid", used=True),
        ],
        [
            AccessorDescriptor("T", "CreatedAt", "tm.Time"),
            AccessorDescriptor("T", "UpdatedAt", "uuid.UUID"),
        ],
    )
    assert '\t"github.com/google/uuid"\n\ttm "time"\n' in rendered


def test_render_generic_receiver() -> None:
    rendered = SetterEmitter().render(
        "p",
        [],
        [AccessorDescriptor("Pair", "CreatedAt", "K", ("K", "V"))],
    )
    assert "func (s *Pair[K, V]) SetCreatedAt(v K) {" in rendered


def test_emit_refuses_empty_result(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        SetterEmitter().emit(_unit(tmp_path), SynthesisResult())
    assert not (tmp_path / "example_v1_setters.go").exists()


def test_render_error_from_broken_template(tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "setters.go.j2").write_text("package {{ package }}\n", encoding="utf-8")

    emitter = SetterEmitter(templates_dir=templates)
    with pytest.raises(RenderError):
        emitter.emit(_unit(tmp_path), _result())
    assert not (tmp_path / "example_v1_setters.go").exists()


def test_canonicalize_error_leaves_no_file(tmp_path: Path) -> None:
    result = SynthesisResult(descriptors=[AccessorDescriptor("T", "CreatedAt", "]]")])
    with pytest.raises(CanonicalizeError):
        SetterEmitter().emit(_unit(tmp_path), result)
    assert not (tmp_path / "example_v1_setters.go").exists()


def test_write_error_when_directory_is_missing(tmp_path: Path) -> None:
    with pytest.raises(WriteError) as excinfo:
        SetterEmitter().emit(_unit(tmp_path / "gone"), _result())
    assert excinfo.value.path == tmp_path / "gone" / "example_v1.go"
