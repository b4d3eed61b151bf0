"""Text normalization for extracted code blocks."""

from __future__ import annotations

from typing import Optional


def dedent(code: Optional[str]) -> Optional[str]:
    """Remove the indentation shared by every non-blank line of ``code``.

    Unlike :func:`textwrap.dedent`, the common prefix is measured as a character
    count (tabs and spaces count the same), blank lines never participate and are
    emitted empty, and a trailing newline keeps its empty final segment.
    ``None`` and ``""`` are returned unchanged.
    """
    if not code:
        return code

    lines = code.split("\n")

    min_indent: Optional[int] = None
    for line in lines:
        if not line.strip():
            continue
        indent = len(line) - len(line.lstrip())
        if min_indent is None or indent < min_indent:
            min_indent = indent

    if not min_indent:
        return code

    return "\n".join(line[min_indent:] if line.strip() else "" for line in lines)


def strip_blank(code: Optional[str]) -> str:
    """Dedent ``code`` and drop leading/trailing blank content.

    A non-blank first line shares its line with the opening delimiter of a body
    (`{ // note` or `:  # note`), so its indentation is not measured.
    """
    if not code:
        return ""
    first, newline, rest = code.partition("\n")
    if newline and first.strip():
        return f"{first.strip()}\n{dedent(rest) or ''}".strip()
    return (dedent(code) or "").strip()


__all__ = ["dedent", "strip_blank"]
