"""Tree-sitter powered extraction of exported TypeScript declarations."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Parser

from .logging import get_logger
from .models import (
    DeclarationKind,
    ExportedDeclaration,
    ExportKind,
    ParameterShape,
    SourceFile,
)

_DECLARATION_KINDS = {
    "function_declaration": DeclarationKind.FUNCTION,
    "generator_function_declaration": DeclarationKind.FUNCTION,
    "interface_declaration": DeclarationKind.INTERFACE,
    "type_alias_declaration": DeclarationKind.TYPE_ALIAS,
}

_PATTERN_SHAPES = {
    "identifier": ParameterShape.IDENTIFIER,
    "this": ParameterShape.IDENTIFIER,
    "undefined": ParameterShape.IDENTIFIER,
    "array_pattern": ParameterShape.ARRAY_PATTERN,
    "object_pattern": ParameterShape.OBJECT_PATTERN,
    "rest_pattern": ParameterShape.REST,
    "member_expression": ParameterShape.MEMBER_ACCESS,
    "subscript_expression": ParameterShape.MEMBER_ACCESS,
}

_GRAMMARS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_PARAMETER_NODES = {"required_parameter", "optional_parameter"}
_PROPERTY_MODIFIERS = {"accessibility_modifier", "override_modifier", "readonly"}


class ExtractionError(RuntimeError):
    """Raised when a source file cannot be turned into export declarations."""


class SourceSyntaxError(ExtractionError):
    """Raised when a source file does not parse cleanly."""

    def __init__(self, path: str, line: int, column: int) -> None:
        super().__init__(f"{path}:{line}:{column}: syntax error")
        self.path = path
        self.line = line
        self.column = column


class UnsupportedParameterError(ExtractionError):
    """Raised for parameter shapes that have no textual rendering."""


def _language_key(path: str) -> str:
    return "tsx" if path.lower().endswith(".tsx") else "typescript"


class DeclarationExtractor:
    """Finds exported functions, interfaces and type aliases in TypeScript sources."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}
        self.logger = get_logger("extractor")

    def extract(self, source_file: SourceFile, text: str) -> List[ExportedDeclaration]:
        """Return the documented-candidate exports of one file, in source order."""
        source_bytes = text.encode("utf-8")
        parser = self._get_parser(_language_key(source_file.path.name))
        tree = parser.parse(source_bytes)
        if tree.root_node.has_error:
            line, column = _first_error_point(tree.root_node)
            raise SourceSyntaxError(source_file.display_path, line, column)

        declarations: List[ExportedDeclaration] = []
        comments: List[str] = []
        for child in tree.root_node.children:
            if child.type == "comment":
                comments.append(self._node_text(child, source_bytes))
                continue
            leading = tuple(comments)
            comments = []
            if child.type != "export_statement":
                continue
            declaration = self._build_declaration(source_file, child, source_bytes, leading)
            if declaration is not None:
                declarations.append(declaration)

        self.logger.debug(
            "Found %d exported declarations in %s", len(declarations), source_file.display_path
        )
        return declarations

    def _get_parser(self, language_key: str) -> Parser:
        parser = self._parsers.get(language_key)
        if parser is not None:
            return parser
        parser = Parser(Language(_GRAMMARS[language_key]()))
        self._parsers[language_key] = parser
        return parser

    @staticmethod
    def _node_text(node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _build_declaration(  # type: ignore[no-untyped-def]
        self, source_file: SourceFile, node, source_bytes: bytes, leading: Tuple[str, ...]
    ) -> Optional[ExportedDeclaration]:
        if any(child.type == "default" for child in node.children):
            return None
        wrapped = node.child_by_field_name("declaration")
        if wrapped is None:
            return None
        if wrapped.type == "ambient_declaration":
            # `export declare interface/type` documents like its plain form.
            wrapped = _unwrap_ambient(wrapped)
            if wrapped is None:
                return None

        kind = _DECLARATION_KINDS.get(wrapped.type, DeclarationKind.OTHER)
        if kind is DeclarationKind.OTHER:
            return None

        name_node = wrapped.child_by_field_name("name")
        name = self._node_text(name_node, source_bytes) if name_node is not None else ""
        if not name:
            # Unnamed exports are unsupported.
            return None

        if kind is DeclarationKind.FUNCTION:
            params = wrapped.child_by_field_name("parameters")
            rendered = self._render_parameters(params, source_bytes) if params is not None else []
            identifier = f"`{name}({', '.join(rendered)})`"
            export_kind = ExportKind.FUNCTION
        elif kind is DeclarationKind.INTERFACE or kind is DeclarationKind.TYPE_ALIAS:
            identifier = name
            export_kind = ExportKind.TYPE
        else:  # pragma: no cover - OTHER returns above
            raise AssertionError(f"Unhandled declaration kind: {kind}")

        return ExportedDeclaration(
            name=name,
            kind=export_kind,
            category=source_file.category,
            identifier=identifier,
            source=source_file.display_path,
            leading_comments=leading,
        )

    def _render_parameters(self, params, source_bytes: bytes) -> List[str]:  # type: ignore[no-untyped-def]
        return [
            self._render_parameter(child, source_bytes)
            for child in params.named_children
            if child.type in _PARAMETER_NODES
        ]

    def _render_parameter(self, node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
        if any(child.type in _PROPERTY_MODIFIERS for child in node.children):
            shape = ParameterShape.PROPERTY_INJECTION
            target = node
        elif node.child_by_field_name("value") is not None:
            shape = ParameterShape.DEFAULT_VALUED
            target = node
        else:
            target = node.child_by_field_name("pattern")
            if target is None:
                raise UnsupportedParameterError(
                    f"Unsupported parameter type: {self._node_text(node, source_bytes)}"
                )
            shape = self._pattern_shape(target)
        return self._render_shape(shape, target, source_bytes)

    @staticmethod
    def _pattern_shape(node) -> ParameterShape:  # type: ignore[no-untyped-def]
        shape = _PATTERN_SHAPES.get(node.type)
        if shape is None:
            raise UnsupportedParameterError(f"Unsupported parameter type: {node.type}")
        return shape

    def _render_pattern(self, node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
        return self._render_shape(self._pattern_shape(node), node, source_bytes)

    def _render_shape(self, shape: ParameterShape, node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
        if shape is ParameterShape.IDENTIFIER:
            return self._node_text(node, source_bytes)
        if shape is ParameterShape.DEFAULT_VALUED:
            pattern = node.child_by_field_name("pattern")
            if pattern is None:
                raise UnsupportedParameterError("Unsupported parameter type: missing pattern")
            return self._render_pattern(pattern, source_bytes)
        if shape is ParameterShape.ARRAY_PATTERN:
            return "[]"
        if shape is ParameterShape.OBJECT_PATTERN:
            return "{}"
        if shape is ParameterShape.REST:
            inner = node.named_children[0] if node.named_children else None
            if inner is None:
                raise UnsupportedParameterError("Unsupported parameter type: empty rest pattern")
            return f"...{self._render_pattern(inner, source_bytes)}"
        if shape is ParameterShape.PROPERTY_INJECTION or shape is ParameterShape.MEMBER_ACCESS:
            raise UnsupportedParameterError(f"Unsupported parameter type: {shape.value}")
        raise AssertionError(f"Unhandled parameter shape: {shape}")  # pragma: no cover


def _unwrap_ambient(node):  # type: ignore[no-untyped-def]
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def _first_error_point(node) -> Tuple[int, int]:  # type: ignore[no-untyped-def]
    for candidate in _walk(node):
        if candidate.type == "ERROR" or candidate.is_missing:
            row, column = candidate.start_point
            return row + 1, column + 1
    row, column = node.start_point
    return row + 1, column + 1


def _walk(node) -> Iterator:  # type: ignore[no-untyped-def]
    yield node
    for child in node.children:
        yield from _walk(child)


__all__ = [
    "DeclarationExtractor",
    "ExtractionError",
    "SourceSyntaxError",
    "UnsupportedParameterError",
]
