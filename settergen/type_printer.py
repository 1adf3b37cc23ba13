"""Canonical text rendering for Go type expressions.

Tree-sitter nodes are first lowered into a small closed set of frozen
dataclasses (``TypeExpr``). Only the kinds listed here can appear in a
generated setter signature; every other node kind raises
``UnsupportedTypeError`` while lowering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from .errors import UnsupportedTypeError
from .parsing import node_text

LEGACY_CHANNEL_KEYWORD = "chann"


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class Pointer:
    elem: "TypeExpr"


@dataclass(frozen=True)
class Qualified:
    package: str
    member: str


@dataclass(frozen=True)
class Slice:
    elem: "TypeExpr"


@dataclass(frozen=True)
class Array:
    length: str
    elem: "TypeExpr"


@dataclass(frozen=True)
class Map:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class EmptyInterface:
    pass


@dataclass(frozen=True)
class Channel:
    elem: "TypeExpr"
    direction: str = "both"  # "both", "send" or "receive"


@dataclass(frozen=True)
class Variadic:
    elem: "TypeExpr"


TypeExpr = Union[Name, Pointer, Qualified, Slice, Array, Map, EmptyInterface, Channel, Variadic]


def parse_type(node) -> TypeExpr:  # type: ignore[no-untyped-def]
    """Lower a tree-sitter type node into a ``TypeExpr``."""
    kind = node.type
    if kind in {"type_identifier", "identifier"}:
        return Name(node_text(node))
    if kind == "pointer_type":
        return Pointer(parse_type(_only_type_child(node)))
    if kind == "qualified_type":
        package = _field(node, "package")
        member = _field(node, "name")
        return Qualified(node_text(package), node_text(member))
    if kind == "slice_type":
        return Slice(parse_type(_field(node, "element")))
    if kind == "array_type":
        length = _field(node, "length")
        return Array(node_text(length).strip(), parse_type(_field(node, "element")))
    if kind == "map_type":
        return Map(parse_type(_field(node, "key")), parse_type(_field(node, "value")))
    if kind == "interface_type":
        members = [child for child in node.named_children if child.type != "comment"]
        if members:
            raise UnsupportedTypeError("non-empty interface", node_text(node))
        return EmptyInterface()
    if kind == "channel_type":
        return Channel(parse_type(_field(node, "value")), _channel_direction(node))
    if kind == "variadic_parameter_declaration":
        return Variadic(parse_type(_field(node, "type")))
    raise UnsupportedTypeError(kind, node_text(node))


def _field(node, name: str):  # type: ignore[no-untyped-def]
    child = node.child_by_field_name(name)
    if child is None:
        raise UnsupportedTypeError(f"{node.type} without {name}", node_text(node))
    return child


def _only_type_child(node):  # type: ignore[no-untyped-def]
    children = [child for child in node.named_children if child.type != "comment"]
    if len(children) != 1:
        raise UnsupportedTypeError(node.type, node_text(node))
    return children[0]


def _channel_direction(node) -> str:  # type: ignore[no-untyped-def]
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens[:1] == ["<-"]:
        return "receive"
    if "<-" in tokens:
        return "send"
    return "both"


class TypePrinter:
    """Renders ``TypeExpr`` values as canonical Go source text."""

    def __init__(self, *, legacy_channel_keyword: bool = False) -> None:
        self.legacy_channel_keyword = legacy_channel_keyword

    def render(self, node) -> str:  # type: ignore[no-untyped-def]
        return self.print(parse_type(node))

    def print(self, expr: TypeExpr) -> str:
        if isinstance(expr, Name):
            return expr.name
        if isinstance(expr, Pointer):
            return "*" + self.print(expr.elem)
        if isinstance(expr, Qualified):
            return f"{expr.package}.{expr.member}"
        if isinstance(expr, Slice):
            return "[]" + self.print(expr.elem)
        if isinstance(expr, Array):
            return f"[{expr.length}]" + self.print(expr.elem)
        if isinstance(expr, Map):
            return f"map[{self.print(expr.key)}]{self.print(expr.value)}"
        if isinstance(expr, EmptyInterface):
            return "interface{}"
        if isinstance(expr, Channel):
            return self._print_channel(expr)
        if isinstance(expr, Variadic):
            return "..." + self.print(expr.elem)
        raise UnsupportedTypeError(type(expr).__name__)

    def _print_channel(self, expr: Channel) -> str:
        elem = self.print(expr.elem)
        if self.legacy_channel_keyword:
            return f"{LEGACY_CHANNEL_KEYWORD} {elem}"
        if expr.direction == "send":
            return f"chan<- {elem}"
        if expr.direction == "receive":
            return f"<-chan {elem}"
        return f"chan {elem}"


def qualifiers(expr: TypeExpr) -> Iterator[str]:
    """Yield every package qualifier referenced by ``expr``."""
    if isinstance(expr, Qualified):
        yield expr.package
    elif isinstance(expr, (Pointer, Slice, Array, Channel, Variadic)):
        yield from qualifiers(expr.elem)
    elif isinstance(expr, Map):
        yield from qualifiers(expr.key)
        yield from qualifiers(expr.value)


__all__ = [
    "Array",
    "Channel",
    "EmptyInterface",
    "LEGACY_CHANNEL_KEYWORD",
    "Map",
    "Name",
    "Pointer",
    "Qualified",
    "Slice",
    "TypeExpr",
    "TypePrinter",
    "Variadic",
    "parse_type",
    "qualifiers",
]
