"""Source parsers and the language registry used by the extractor."""

from __future__ import annotations

from typing import Callable, Dict, List

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
    SourceParseError,
    SourceParser,
    SourceUnit,
    StringLiteral,
)
from .java import JavaSourceParser
from .python import PythonSourceParser

_BUILTIN_PARSERS: Dict[str, Callable[[ParserConfig], SourceParser]] = {
    "java": JavaSourceParser,
    "python": PythonSourceParser,
}


def available_languages() -> List[str]:
    """Return the language keys accepted by :func:`create_parser`."""
    return sorted(_BUILTIN_PARSERS)


def create_parser(config: ParserConfig | None = None) -> SourceParser:
    """Instantiate the parser for ``config.language``."""
    config = config or ParserConfig()
    key = config.language.lower()
    factory = _BUILTIN_PARSERS.get(key)
    if factory is None:
        supported = ", ".join(available_languages())
        raise ValueError(f"Unsupported source language '{config.language}' (expected one of: {supported})")
    parser = factory(config)
    if not isinstance(parser, SourceParser):
        raise TypeError(f"Parser factory for '{key}' did not return a SourceParser instance")
    return parser


__all__ = [
    "ArrayLiteral",
    "BoolLiteral",
    "Declaration",
    "IntLiteral",
    "JavaSourceParser",
    "Marker",
    "MarkerValue",
    "MarkerVocabulary",
    "Member",
    "OtherExpression",
    "ParserConfig",
    "PythonSourceParser",
    "SourceFile",
    "SourceParseError",
    "SourceParser",
    "SourceUnit",
    "StringLiteral",
    "available_languages",
    "create_parser",
]
