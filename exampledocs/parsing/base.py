"""Language-neutral view of a parsed source file."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union


class SourceParseError(RuntimeError):
    """Raised when a file cannot be parsed as valid source."""

    def __init__(self, path: Path | str, reason: str, line: int | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        self.line = line
        location = f"{self.path}:{line}" if line is not None else str(self.path)
        super().__init__(f"{location}: {reason}")


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class IntLiteral:
    value: int


@dataclass(frozen=True)
class BoolLiteral:
    value: bool


@dataclass(frozen=True)
class ArrayLiteral:
    items: Tuple["MarkerValue", ...] = ()


@dataclass(frozen=True)
class OtherExpression:
    """Any argument that is not a plain literal (constants, calls, arithmetic...)."""

    text: str


MarkerValue = Union[StringLiteral, IntLiteral, BoolLiteral, ArrayLiteral, OtherExpression]


@dataclass(frozen=True)
class Marker:
    """An annotation or decorator attached to a declaration.

    ``arguments`` holds named arguments; ``value`` holds the single implicit
    argument (``@Output("x")``). A marker written without parentheses has neither.
    """

    name: str
    arguments: Dict[str, MarkerValue] = field(default_factory=dict)
    value: Optional[MarkerValue] = None

    def matches(self, name: str) -> bool:
        return self.name == name or self.name.rsplit(".", 1)[-1] == name


@dataclass(frozen=True)
class Member:
    """A method-like declaration directly inside a type declaration."""

    name: str
    markers: Tuple[Marker, ...]
    text: str
    body: Optional[str]
    line: int

    def find_marker(self, name: str) -> Optional[Marker]:
        return _find_marker(self.markers, name)


@dataclass(frozen=True)
class Declaration:
    """A type declaration with its rendered text and direct members."""

    name: str
    markers: Tuple[Marker, ...]
    text: str
    body: Optional[str]
    members: Tuple[Member, ...]
    line: int

    def find_marker(self, name: str) -> Optional[Marker]:
        return _find_marker(self.markers, name)


@dataclass(frozen=True)
class SourceUnit:
    """Immutable parse result for one file."""

    path: Path
    language: str
    namespace: str
    imports: Tuple[str, ...]
    declarations: Tuple[Declaration, ...]


@dataclass(frozen=True)
class SourceFile:
    """A file discovered under one of the scanned roots."""

    root: Path
    path: Path

    @property
    def relative_path(self) -> Path:
        try:
            return self.path.relative_to(self.root)
        except ValueError:
            return Path(self.path.name)


@dataclass(frozen=True)
class MarkerVocabulary:
    """Marker names and flag keys understood by the extractor for one language."""

    example: str
    step: str
    output: str
    include_imports: str
    include_declaration: str


@dataclass(frozen=True)
class ParserConfig:
    """Parse settings passed explicitly to each parser instance."""

    language: str = "java"
    strict: bool = True


def _find_marker(markers: Tuple[Marker, ...], name: str) -> Optional[Marker]:
    for marker in markers:
        if marker.matches(name):
            return marker
    return None


class SourceParser(ABC):
    """Contract for parsers that turn source text into a :class:`SourceUnit`."""

    language: str = ""
    suffix: str = ""
    vocabulary: MarkerVocabulary

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig(language=self.language)

    @abstractmethod
    def parse(self, source: str, *, path: Path | str, namespace: str = "") -> SourceUnit:
        """Parse ``source`` or raise :class:`SourceParseError`."""

    def namespace_for(self, source_file: SourceFile) -> str:
        """Return the namespace derived from the file location, if the language uses one."""
        return ""

    def parse_file(self, source_file: SourceFile) -> SourceUnit:
        """Read and parse one file; ``OSError`` propagates to the caller."""
        raw = source_file.path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceParseError(source_file.path, f"not valid UTF-8 ({exc.reason})") from exc
        return self.parse(
            text,
            path=source_file.path,
            namespace=self.namespace_for(source_file),
        )


def iter_errors(node) -> Iterator:  # type: ignore[no-untyped-def]
    """Yield syntax error nodes of a tree-sitter tree in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            yield current
        elif current.has_error:
            stack.extend(reversed(current.children))


def iter_nodes(root, types: frozenset[str]) -> Iterator:  # type: ignore[no-untyped-def]
    """Yield nodes of the given types in document (pre-)order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in types:
            yield node
        stack.extend(reversed(node.children))


def node_text(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def declaration_text(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
    """Return the node text widened to the start of its first line.

    Widening keeps the first line indented like the rest so ``dedent`` can
    normalize the block; it only happens when the node is the first thing on
    its line.
    """
    start = node.start_byte
    line_start = source.rfind(b"\n", 0, start) + 1
    if source[line_start:start].strip():
        line_start = start
    return source[line_start : node.end_byte].decode("utf-8", errors="replace").rstrip()


def first_syntax_error(root, path: Path | str) -> Optional[SourceParseError]:  # type: ignore[no-untyped-def]
    for error in iter_errors(root):
        row = error.start_point[0] + 1
        kind = "missing token" if error.is_missing else "syntax error"
        return SourceParseError(path, kind, line=row)
    if root.has_error:
        return SourceParseError(path, "syntax error")
    return None


__all__ = [
    "ArrayLiteral",
    "BoolLiteral",
    "Declaration",
    "IntLiteral",
    "Marker",
    "MarkerValue",
    "MarkerVocabulary",
    "Member",
    "OtherExpression",
    "ParserConfig",
    "SourceFile",
    "SourceParseError",
    "SourceParser",
    "SourceUnit",
    "StringLiteral",
    "declaration_text",
    "first_syntax_error",
    "iter_nodes",
    "node_text",
]
