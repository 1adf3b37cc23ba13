"""Tests for settergen.synthesizer."""

from __future__ import annotations

import pytest

from settergen.config import DEFAULT_TARGET_FIELDS
from settergen.errors import UnsupportedTypeError
from settergen.models import AccessorDescriptor
from settergen.synthesizer import synthesize
from settergen.type_printer import TypePrinter


def _used_paths(result) -> list[str]:
    return [entry.path for entry in result.used_imports]


def test_synthesize_concrete_example(scan_go) -> None:
    unit = scan_go(
        """
        package example

        import (
            "log"
            "time"
        )

        //gen:setters
        type example struct {
            Name      string
            CreatedAt time.Time
            UpdatedAt time.Time
        }
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)

    assert result.descriptors == [
        AccessorDescriptor("example", "CreatedAt", "time.Time"),
        AccessorDescriptor("example", "UpdatedAt", "time.Time"),
    ]
    assert _used_paths(result) == ["time"]
    assert [entry.path for entry in result.imports] == ["log", "time"]


def test_synthesize_follows_declaration_order_not_target_order(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type T struct {
            CreatedAt int64
            UpdatedAt int64
        }
        """
    )
    result = synthesize(unit, ("UpdatedAt", "CreatedAt"))
    assert [d.field_name for d in result.descriptors] == ["CreatedAt", "UpdatedAt"]


def test_synthesize_keeps_same_named_fields_per_type(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type (
            A struct {
                CreatedAt int64
            }
            B struct {
                CreatedAt string
            }
        )
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)
    assert result.descriptors == [
        AccessorDescriptor("A", "CreatedAt", "int64"),
        AccessorDescriptor("B", "CreatedAt", "string"),
    ]


def test_synthesize_prunes_imports_used_only_by_other_fields(scan_go) -> None:
    unit = scan_go(
        """
        package p

        import (
            "database/sql"
            "time"
        )

        //gen:setters
        type Row struct {
            Label     sql.NullString
            CreatedAt int64
        }

        var _ = time.Now
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)
    assert len(result.descriptors) == 1
    assert result.used_imports == []


def test_synthesize_marks_imports_inside_composite_types(scan_go) -> None:
    unit = scan_go(
        """
        package p

        import (
            "github.com/google/uuid"
            "time"
        )

        //gen:setters
        type Audit struct {
            CreatedAt *time.Time
            UpdatedAt map[uuid.UUID][]time.Time
        }
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)
    assert [d.field_type for d in result.descriptors] == [
        "*time.Time",
        "map[uuid.UUID][]time.Time",
    ]
    assert _used_paths(result) == ["github.com/google/uuid", "time"]


def test_synthesize_matches_aliased_and_versioned_imports(scan_go) -> None:
    unit = scan_go(
        """
        package p

        import (
            tm "time"
            "gopkg.in/guregu/null.v4"
        )

        //gen:setters
        type Event struct {
            CreatedAt tm.Time
            UpdatedAt null.Time
        }
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)
    used = {entry.path: entry.alias for entry in result.used_imports}
    assert used == {"time": "tm", "gopkg.in/guregu/null.v4": None}


def test_synthesize_reports_nothing_for_types_without_targets(scan_go) -> None:
    unit = scan_go(
        """
        package p

        import "time"

        //gen:setters
        type Plain struct {
            Name      string
            DeletedAt time.Time
        }
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)
    assert result.is_empty
    assert result.used_imports == []


def test_synthesize_uses_exact_name_matching(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type T struct {
            createdAt int64
            CreatedAtUTC int64
        }
        """
    )
    assert synthesize(unit, DEFAULT_TARGET_FIELDS).is_empty


def test_synthesize_carries_type_parameters_to_receiver(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type Box[T any] struct {
            CreatedAt T
        }
        """
    )
    (descriptor,) = synthesize(unit, DEFAULT_TARGET_FIELDS).descriptors
    assert descriptor.receiver == "Box[T]"
    assert descriptor.field_type == "T"


def test_synthesize_ignores_unsupported_non_target_fields(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type Job struct {
            Run       func() error
            CreatedAt int64
        }
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS)
    assert [d.field_name for d in result.descriptors] == ["CreatedAt"]


def test_synthesize_raises_for_unsupported_target_field(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type Job struct {
            CreatedAt func() int64
        }
        """,
        "job.go",
    )
    with pytest.raises(UnsupportedTypeError) as excinfo:
        synthesize(unit, DEFAULT_TARGET_FIELDS)
    assert excinfo.value.path == unit.path


def test_synthesize_uses_supplied_printer(scan_go) -> None:
    unit = scan_go(
        """
        package p

        //gen:setters
        type Feed struct {
            UpdatedAt chan int64
        }
        """
    )
    result = synthesize(unit, DEFAULT_TARGET_FIELDS, TypePrinter(legacy_channel_keyword=True))
    assert result.descriptors[0].field_type == "chann int64"
