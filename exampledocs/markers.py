"""Typed, lenient access to marker arguments."""

from __future__ import annotations

from typing import List, Optional

from .parsing.base import ArrayLiteral, BoolLiteral, IntLiteral, Marker, MarkerValue, StringLiteral


class MarkerReader:
    """Projects marker arguments onto Python types.

    Any argument that is missing, computed, or of the wrong literal kind resolves
    to the caller's default; reading never raises. A ``None`` marker behaves like
    a marker without arguments.
    """

    def __init__(self, marker: Optional[Marker]) -> None:
        self.marker = marker

    def _lookup(self, key: str) -> Optional[MarkerValue]:
        if self.marker is None:
            return None
        return self.marker.arguments.get(key)

    def string(self, key: str, default: str) -> str:
        value = self._lookup(key)
        if isinstance(value, StringLiteral):
            return value.value
        return default

    def integer(self, key: str, default: int) -> int:
        value = self._lookup(key)
        if isinstance(value, IntLiteral):
            return value.value
        return default

    def boolean(self, key: str, default: bool) -> bool:
        value = self._lookup(key)
        if isinstance(value, BoolLiteral):
            return value.value
        return default

    def string_list(self, key: str) -> List[str]:
        value = self._lookup(key)
        if isinstance(value, ArrayLiteral):
            return [item.value for item in value.items if isinstance(item, StringLiteral)]
        if isinstance(value, StringLiteral):
            return [value.value]
        return []

    def single_value(self) -> str:
        """Return the implicit argument (or the named ``value``) when it is a string."""
        if self.marker is None:
            return ""
        if self.marker.value is not None:
            implicit = self.marker.value
            return implicit.value if isinstance(implicit, StringLiteral) else ""
        return self.string("value", "")


__all__ = ["MarkerReader"]
