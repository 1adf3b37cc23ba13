"""Locates marker-annotated struct declarations in Go source files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from .config import MARKER
from .errors import ParseError
from .models import AnnotatedType, ImportRef, SourceUnit, StructField
from .parsing import describe_error, first_error, iter_nodes, new_parser, node_text


class DeclarationScanner:
    """Parses one Go file into a ``SourceUnit``.

    Only top-level ``type`` declaration groups are inspected. A group is
    annotated when its doc comment block (the comments sitting on the lines
    directly above the ``type`` keyword) contains a line starting with the
    marker. Package name and imports are collected for every file.
    """

    def __init__(self, marker: str = MARKER) -> None:
        self.marker = marker
        self._parser = new_parser()

    def scan(self, path: Path | str) -> SourceUnit:
        """Read and scan the file at ``path``."""
        file_path = Path(path)
        try:
            source = file_path.read_bytes()
        except OSError as exc:
            raise ParseError(f"cannot read source: {exc.strerror or exc}", file_path) from exc
        return self.scan_source(source, file_path)

    def scan_source(self, source: bytes | str, path: Path | str) -> SourceUnit:
        """Scan in-memory Go source attributed to ``path``."""
        file_path = Path(path)
        if isinstance(source, str):
            source = source.encode("utf-8")
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"source is not valid UTF-8: {exc.reason}", file_path) from exc

        tree = self._parser.parse(source)
        root = tree.root_node
        error = first_error(root)
        if error is not None:
            raise ParseError(describe_error(error), file_path)

        package_name = self._package_name(root)
        if package_name is None:
            raise ParseError("expected 'package' clause", file_path)

        lines = source.split(b"\n")
        comments = self._comments_by_end_row(root, lines)
        types: List[AnnotatedType] = []
        for decl in root.named_children:
            if decl.type != "type_declaration":
                continue
            doc = self._doc_comments(decl, comments)
            if not any(text.startswith(self.marker) for text in doc):
                continue
            types.extend(self._annotated_types(decl))

        return SourceUnit(
            package_name=package_name,
            directory=file_path.parent,
            filename=file_path.name,
            imports=tuple(self._imports(root)),
            types=tuple(types),
        )

    @staticmethod
    def _package_name(root) -> str | None:  # type: ignore[no-untyped-def]
        for child in root.named_children:
            if child.type != "package_clause":
                continue
            for name_node in child.named_children:
                if name_node.type in {"package_identifier", "identifier"}:
                    return node_text(name_node)
        return None

    @staticmethod
    def _imports(root) -> List[ImportRef]:  # type: ignore[no-untyped-def]
        imports: List[ImportRef] = []
        for decl in root.named_children:
            if decl.type != "import_declaration":
                continue
            for spec in iter_nodes(decl):
                if spec.type != "import_spec":
                    continue
                path_node = spec.child_by_field_name("path")
                if path_node is None:
                    continue
                literal = node_text(path_node)
                name_node = spec.child_by_field_name("name")
                alias = node_text(name_node) if name_node is not None else None
                imports.append(ImportRef(path=literal[1:-1], alias=alias))
        return imports

    @staticmethod
    def _comments_by_end_row(root, lines: Sequence[bytes]) -> Dict[int, object]:  # type: ignore[no-untyped-def]
        # Only comments that open their line can belong to a doc block; trailing
        # comments after code on the same line are attached to that code.
        comments: Dict[int, object] = {}
        for node in iter_nodes(root):
            if node.type != "comment":
                continue
            row, column = node.start_point
            if lines[row][:column].strip():
                continue
            comments[node.end_point[0]] = node
        return comments

    @staticmethod
    def _doc_comments(decl, comments: Dict[int, object]) -> List[str]:  # type: ignore[no-untyped-def]
        doc: List[str] = []
        row = decl.start_point[0] - 1
        while row >= 0:
            comment = comments.get(row)
            if comment is None:
                break
            doc.insert(0, node_text(comment))  # type: ignore[arg-type]
            row = comment.start_point[0] - 1  # type: ignore[attr-defined]
        return doc

    def _annotated_types(self, decl) -> List[AnnotatedType]:  # type: ignore[no-untyped-def]
        found: List[AnnotatedType] = []
        for spec in decl.named_children:
            if spec.type != "type_spec":
                continue
            name_node = spec.child_by_field_name("name")
            type_node = spec.child_by_field_name("type")
            if name_node is None or type_node is None or type_node.type != "struct_type":
                continue
            found.append(
                AnnotatedType(
                    name=node_text(name_node),
                    fields=tuple(self._struct_fields(type_node)),
                    type_params=tuple(self._type_params(spec)),
                )
            )
        return found

    @staticmethod
    def _struct_fields(struct_node) -> List[StructField]:  # type: ignore[no-untyped-def]
        fields: List[StructField] = []
        for field_list in struct_node.named_children:
            if field_list.type != "field_declaration_list":
                continue
            for declaration in field_list.named_children:
                if declaration.type != "field_declaration":
                    continue
                type_node = declaration.child_by_field_name("type")
                names = declaration.children_by_field_name("name")
                # embedded fields have no names
                if type_node is None or not names:
                    continue
                for name_node in names:
                    fields.append(
                        StructField(
                            name=node_text(name_node),
                            type_node=type_node,
                            type_source=node_text(type_node),
                        )
                    )
        return fields

    @staticmethod
    def _type_params(spec) -> List[str]:  # type: ignore[no-untyped-def]
        params_node = spec.child_by_field_name("type_parameters")
        if params_node is None:
            return []
        params: List[str] = []
        for declaration in params_node.named_children:
            if declaration.type != "type_parameter_declaration":
                continue
            params.extend(node_text(name) for name in declaration.children_by_field_name("name"))
        return params


__all__ = ["DeclarationScanner"]
