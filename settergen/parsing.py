"""Thin helpers around the tree-sitter Go grammar."""

from __future__ import annotations

from typing import Iterator, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

GO_LANGUAGE = Language(tree_sitter_go.language())


def new_parser() -> Parser:
    return Parser(GO_LANGUAGE)


def parse_go(source: bytes, parser: Parser | None = None) -> Tree:
    """Parse Go source bytes, keeping comments as nodes in the tree."""
    return (parser or new_parser()).parse(source)


def node_text(node: Node) -> str:
    text = node.text
    return text.decode("utf-8", errors="replace") if text is not None else ""


def iter_nodes(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from iter_nodes(child)


def first_error(node: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node below ``node`` in source order."""
    if not node.has_error:
        return None
    for candidate in iter_nodes(node):
        if candidate.type == "ERROR" or candidate.is_missing:
            return candidate
    return node


def describe_error(node: Node) -> str:
    row, column = node.start_point
    if node.is_missing:
        return f"syntax error at line {row + 1}, column {column + 1}: missing {node.type}"
    snippet = node_text(node).strip().splitlines()
    near = f" near {snippet[0][:40]!r}" if snippet else ""
    return f"syntax error at line {row + 1}, column {column + 1}{near}"


__all__ = [
    "GO_LANGUAGE",
    "describe_error",
    "first_error",
    "iter_nodes",
    "new_parser",
    "node_text",
    "parse_go",
]
