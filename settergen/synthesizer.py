"""Builds setter descriptors for the target fields of annotated structs."""

from __future__ import annotations

from typing import Dict, List, Sequence

from .errors import UnsupportedTypeError
from .models import AccessorDescriptor, ImportEntry, SourceUnit, SynthesisResult
from .type_printer import TypePrinter, parse_type, qualifiers


def synthesize(
    unit: SourceUnit,
    target_fields: Sequence[str],
    printer: TypePrinter | None = None,
) -> SynthesisResult:
    """Return descriptors for every target field of every annotated type in ``unit``.

    Descriptors follow struct order, then field order within each struct;
    the order of ``target_fields`` plays no part. Each package qualifier
    appearing in a descriptor's type marks the matching import as used.
    Raises ``UnsupportedTypeError`` when a target field's type cannot be
    printed.
    """
    printer = printer or TypePrinter()
    targets = frozenset(target_fields)

    entries = [ImportEntry.from_ref(ref) for ref in unit.imports]
    by_name: Dict[str, ImportEntry] = {}
    for entry in entries:
        by_name.setdefault(entry.name, entry)

    descriptors: List[AccessorDescriptor] = []
    for annotated in unit.types:
        for struct_field in annotated.fields:
            if struct_field.name not in targets:
                continue
            try:
                expr = parse_type(struct_field.type_node)
                field_type = printer.print(expr)
            except UnsupportedTypeError as exc:
                if exc.path is None:
                    exc.path = unit.path
                raise
            for qualifier in qualifiers(expr):
                entry = by_name.get(qualifier)
                if entry is not None:
                    entry.used = True
            descriptors.append(
                AccessorDescriptor(
                    type_name=annotated.name,
                    field_name=struct_field.name,
                    field_type=field_type,
                    type_params=annotated.type_params,
                )
            )

    return SynthesisResult(descriptors=descriptors, imports=entries)


__all__ = ["synthesize"]
