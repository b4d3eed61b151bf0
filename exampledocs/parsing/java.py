"""Tree-sitter backed parser for Java sources annotated with ``@DocExample``."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tree_sitter_java
from tree_sitter import Language, Parser

from .base import (
    ArrayLiteral,
    BoolLiteral,
    Declaration,
    IntLiteral,
    Marker,
    MarkerValue,
    MarkerVocabulary,
    Member,
    OtherExpression,
    ParserConfig,
    SourceParser,
    SourceUnit,
    StringLiteral,
    declaration_text,
    first_syntax_error,
    iter_nodes,
    node_text,
)

JAVA_LANGUAGE = Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = frozenset({"class_declaration", "interface_declaration"})
_ANNOTATIONS = {"annotation", "marker_annotation"}
_COMMENTS = {"line_comment", "block_comment"}
_INTEGER_LITERALS = {
    "decimal_integer_literal",
    "hex_integer_literal",
    "octal_integer_literal",
    "binary_integer_literal",
}

_ESCAPE_RE = re.compile(r"\\(u+[0-9a-fA-F]{4}|[0-3][0-7]{0,2}|[4-7][0-7]?|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    "s": " ",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


def _unescape(match: re.Match[str]) -> str:
    token = match.group(1)
    if token[0] == "u":
        return chr(int(token.lstrip("u"), 16))
    if token[0] in "01234567":
        return chr(int(token, 8))
    return _SIMPLE_ESCAPES.get(token, token)


def decode_string_literal(text: str) -> Optional[str]:
    """Return the value of a Java string literal, or ``None`` for text blocks."""
    if text.startswith('"""') or len(text) < 2:
        return None
    if not (text.startswith('"') and text.endswith('"')):
        return None
    return _ESCAPE_RE.sub(_unescape, text[1:-1])


def parse_int_literal(text: str) -> Optional[int]:
    """Return the value of a Java ``int`` literal; ``long`` literals yield ``None``."""
    literal = text.replace("_", "")
    if not literal or literal[-1] in "lL":
        return None
    lowered = literal.lower()
    try:
        if lowered.startswith("0x"):
            return int(lowered[2:], 16)
        if lowered.startswith("0b"):
            return int(lowered[2:], 2)
        if len(lowered) > 1 and lowered.startswith("0"):
            return int(lowered[1:], 8)
        return int(lowered)
    except ValueError:
        return None


def _brace_interior(node, source: bytes) -> Optional[str]:  # type: ignore[no-untyped-def]
    if node is None:
        return None
    text = node_text(node, source)
    if text.startswith("{") and text.endswith("}"):
        return text[1:-1]
    return text


class JavaSourceParser(SourceParser):
    """Parses ``.java`` files into declarations, members, and annotations."""

    language = "java"
    suffix = ".java"
    vocabulary = MarkerVocabulary(
        example="DocExample",
        step="DocStep",
        output="DocOutput",
        include_imports="includeImports",
        include_declaration="includeDeclaration",
    )

    def __init__(self, config: ParserConfig | None = None) -> None:
        super().__init__(config)
        self._parser = Parser(JAVA_LANGUAGE)

    def parse(self, source: str, *, path: Path | str, namespace: str = "") -> SourceUnit:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if self.config.strict:
            error = first_syntax_error(root, path)
            if error is not None:
                raise error

        package = namespace
        imports: List[str] = []
        for child in root.named_children:
            if child.type == "package_declaration":
                package = self._package_name(child, source_bytes) or package
            elif child.type == "import_declaration":
                imports.append(node_text(child, source_bytes).strip())

        declarations = tuple(
            self._declaration(node, source_bytes) for node in iter_nodes(root, _TYPE_DECLARATIONS)
        )
        return SourceUnit(
            path=Path(path),
            language=self.language,
            namespace=package,
            imports=tuple(imports),
            declarations=declarations,
        )

    @staticmethod
    def _package_name(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
        for child in node.named_children:
            if child.type in {"identifier", "scoped_identifier"}:
                return node_text(child, source)
        return ""

    def _declaration(self, node, source: bytes) -> Declaration:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        body_node = node.child_by_field_name("body")
        members: Tuple[Member, ...] = ()
        if body_node is not None:
            members = tuple(
                self._member(child, source)
                for child in body_node.named_children
                if child.type == "method_declaration"
            )
        return Declaration(
            name=node_text(name_node, source) if name_node is not None else "",
            markers=self._markers(node, source),
            text=declaration_text(node, source),
            body=_brace_interior(body_node, source),
            members=members,
            line=node.start_point[0] + 1,
        )

    def _member(self, node, source: bytes) -> Member:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        return Member(
            name=node_text(name_node, source) if name_node is not None else "",
            markers=self._markers(node, source),
            text=declaration_text(node, source),
            body=_brace_interior(node.child_by_field_name("body"), source),
            line=node.start_point[0] + 1,
        )

    def _markers(self, node, source: bytes) -> Tuple[Marker, ...]:  # type: ignore[no-untyped-def]
        markers: List[Marker] = []
        for child in node.children:
            if child.type != "modifiers":
                continue
            for modifier in child.named_children:
                if modifier.type in _ANNOTATIONS:
                    markers.append(self._marker(modifier, source))
        return tuple(markers)

    def _marker(self, node, source: bytes) -> Marker:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        name = node_text(name_node, source) if name_node is not None else ""
        arguments: Dict[str, MarkerValue] = {}
        value: Optional[MarkerValue] = None

        args_node = node.child_by_field_name("arguments")
        if node.type == "annotation" and args_node is not None:
            for child in args_node.named_children:
                if child.type in _COMMENTS:
                    continue
                if child.type == "element_value_pair":
                    key_node = child.child_by_field_name("key")
                    value_node = child.child_by_field_name("value")
                    if key_node is None or value_node is None:
                        continue
                    arguments.setdefault(node_text(key_node, source), self._value(value_node, source))
                elif value is None:
                    value = self._value(child, source)
        return Marker(name=name, arguments=arguments, value=value)

    def _value(self, node, source: bytes) -> MarkerValue:  # type: ignore[no-untyped-def]
        kind = node.type
        text = node_text(node, source)
        if kind == "string_literal":
            decoded = decode_string_literal(text)
            if decoded is not None:
                return StringLiteral(decoded)
        elif kind in _INTEGER_LITERALS:
            number = parse_int_literal(text)
            if number is not None:
                return IntLiteral(number)
        elif kind == "true":
            return BoolLiteral(True)
        elif kind == "false":
            return BoolLiteral(False)
        elif kind == "element_value_array_initializer":
            return ArrayLiteral(
                tuple(
                    self._value(child, source)
                    for child in node.named_children
                    if child.type not in _COMMENTS
                )
            )
        return OtherExpression(text)


__all__ = ["JAVA_LANGUAGE", "JavaSourceParser", "decode_string_literal", "parse_int_literal"]
