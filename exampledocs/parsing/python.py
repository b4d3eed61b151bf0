"""Tree-sitter backed parser for Python sources decorated with ``@doc_example``."""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tree_sitter_python
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
    SourceFile,
    SourceParser,
    SourceUnit,
    StringLiteral,
    declaration_text,
    first_syntax_error,
    iter_nodes,
    node_text,
)

PYTHON_LANGUAGE = Language(tree_sitter_python.language())

_CLASS_DEFINITIONS = frozenset({"class_definition"})
_IMPORTS = {"import_statement", "import_from_statement", "future_import_statement"}
_STRINGS = {"string", "concatenated_string"}
_SEQUENCES = {"list", "tuple"}
_SPLATS = {"list_splat", "dictionary_splat"}


def evaluate_string(node, text: str) -> Optional[str]:  # type: ignore[no-untyped-def]
    """Evaluate a string node; f-strings with placeholders and bytes yield ``None``."""
    if any(True for _ in iter_nodes(node, frozenset({"interpolation"}))):
        return None
    try:
        value = ast.literal_eval(f"({text})")
    except (ValueError, SyntaxError):
        return None
    return value if isinstance(value, str) else None


def _dotted_name(node, source: bytes) -> Optional[str]:  # type: ignore[no-untyped-def]
    if node is None:
        return None
    if node.type == "identifier":
        return node_text(node, source)
    if node.type == "attribute":
        return "".join(node_text(node, source).split())
    return None


def _body_interior(node, source: bytes) -> Optional[str]:  # type: ignore[no-untyped-def]
    """Return everything between the header colon and the end of the indented block."""
    body = node.child_by_field_name("body")
    if body is None:
        return None
    colon = None
    for child in node.children:
        if child.start_byte >= body.start_byte:
            break
        if child.type == ":":
            colon = child
    start = colon.end_byte if colon is not None else body.start_byte
    return source[start : body.end_byte].decode("utf-8", errors="replace")


def _outer(node):  # type: ignore[no-untyped-def]
    parent = node.parent
    if parent is not None and parent.type == "decorated_definition":
        return parent
    return node


class PythonSourceParser(SourceParser):
    """Parses ``.py`` files into classes, methods, and decorators."""

    language = "python"
    suffix = ".py"
    vocabulary = MarkerVocabulary(
        example="doc_example",
        step="doc_step",
        output="doc_output",
        include_imports="include_imports",
        include_declaration="include_declaration",
    )

    def __init__(self, config: ParserConfig | None = None) -> None:
        super().__init__(config)
        self._parser = Parser(PYTHON_LANGUAGE)

    def namespace_for(self, source_file: SourceFile) -> str:
        parts = list(source_file.relative_path.with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(parts)

    def parse(self, source: str, *, path: Path | str, namespace: str = "") -> SourceUnit:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if self.config.strict:
            error = first_syntax_error(root, path)
            if error is not None:
                raise error

        imports = tuple(
            node_text(child, source_bytes).strip()
            for child in root.named_children
            if child.type in _IMPORTS
        )
        declarations = tuple(
            self._declaration(node, source_bytes) for node in iter_nodes(root, _CLASS_DEFINITIONS)
        )
        return SourceUnit(
            path=Path(path),
            language=self.language,
            namespace=namespace,
            imports=imports,
            declarations=declarations,
        )

    def _declaration(self, node, source: bytes) -> Declaration:  # type: ignore[no-untyped-def]
        outer = _outer(node)
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        members: List[Member] = []
        if body is not None:
            for child in body.named_children:
                function = child
                if child.type == "decorated_definition":
                    function = child.child_by_field_name("definition")
                if function is not None and function.type == "function_definition":
                    members.append(self._member(function, source))
        return Declaration(
            name=node_text(name_node, source) if name_node is not None else "",
            markers=self._markers(outer, source),
            text=declaration_text(outer, source),
            body=_body_interior(node, source),
            members=tuple(members),
            line=outer.start_point[0] + 1,
        )

    def _member(self, node, source: bytes) -> Member:  # type: ignore[no-untyped-def]
        outer = _outer(node)
        name_node = node.child_by_field_name("name")
        return Member(
            name=node_text(name_node, source) if name_node is not None else "",
            markers=self._markers(outer, source),
            text=declaration_text(outer, source),
            body=_body_interior(node, source),
            line=outer.start_point[0] + 1,
        )

    def _markers(self, node, source: bytes) -> Tuple[Marker, ...]:  # type: ignore[no-untyped-def]
        if node.type != "decorated_definition":
            return ()
        markers: List[Marker] = []
        for child in node.named_children:
            if child.type != "decorator":
                continue
            marker = self._marker(child, source)
            if marker is not None:
                markers.append(marker)
        return tuple(markers)

    def _marker(self, decorator, source: bytes) -> Optional[Marker]:  # type: ignore[no-untyped-def]
        expression = next((c for c in decorator.named_children if c.type != "comment"), None)
        if expression is None:
            return None
        if expression.type != "call":
            name = _dotted_name(expression, source)
            return Marker(name=name) if name else None

        name = _dotted_name(expression.child_by_field_name("function"), source)
        if not name:
            return None
        args_node = expression.child_by_field_name("arguments")
        arguments: Dict[str, MarkerValue] = {}
        positional: List[MarkerValue] = []
        if args_node is not None and args_node.type == "argument_list":
            for child in args_node.named_children:
                if child.type == "comment" or child.type in _SPLATS:
                    continue
                if child.type == "keyword_argument":
                    key_node = child.child_by_field_name("name")
                    value_node = child.child_by_field_name("value")
                    if key_node is None or value_node is None:
                        continue
                    arguments.setdefault(node_text(key_node, source), self._value(value_node, source))
                else:
                    positional.append(self._value(child, source))
        elif args_node is not None:
            positional.append(OtherExpression(node_text(args_node, source)))
        value = positional[0] if len(positional) == 1 else None
        return Marker(name=name, arguments=arguments, value=value)

    def _value(self, node, source: bytes) -> MarkerValue:  # type: ignore[no-untyped-def]
        kind = node.type
        text = node_text(node, source)
        if kind in _STRINGS:
            evaluated = evaluate_string(node, text)
            if evaluated is not None:
                return StringLiteral(evaluated)
        elif kind == "integer":
            try:
                return IntLiteral(int(text, 0))
            except ValueError:
                pass
        elif kind == "true":
            return BoolLiteral(True)
        elif kind == "false":
            return BoolLiteral(False)
        elif kind in _SEQUENCES:
            return ArrayLiteral(
                tuple(
                    self._value(child, source)
                    for child in node.named_children
                    if child.type != "comment"
                )
            )
        return OtherExpression(text)


__all__ = ["PYTHON_LANGUAGE", "PythonSourceParser", "evaluate_string"]
