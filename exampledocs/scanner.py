"""Source tree walking for example extraction."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger
from .parsing.base import SourceFile

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    ".tox",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".gradle",
    "build",
    "dist",
    "target",
}


@dataclass
class ExcludeRule:
    """A gitignore-style pattern from ``exclude_paths``."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _raise(error: OSError) -> None:
    raise error


class SourceScanner:
    """Lazily yields source files with a given suffix below a list of roots.

    Each call to :meth:`iter_files` walks the filesystem afresh; the scanner holds
    no state between walks. Directories and files are visited in sorted order so
    extraction runs are reproducible.
    """

    def __init__(self, suffix: str, exclude_paths: Sequence[str] | None = None) -> None:
        self.suffix = suffix
        self._rules: List[ExcludeRule] = [
            rule for rule in (build_exclude_rule(p) for p in exclude_paths or ()) if rule is not None
        ]
        self.logger = get_logger("scanner")

    def iter_files(self, roots: Iterable[Path | str]) -> Iterator[SourceFile]:
        for raw_root in roots:
            root = Path(raw_root).expanduser()
            if not root.is_dir():
                self.logger.debug("Skipping missing source root %s", root)
                continue
            yield from self._walk(root)

    def _walk(self, root: Path) -> Iterator[SourceFile]:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if self._is_excluded(rel_path, True):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                if not filename.endswith(self.suffix):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if self._is_excluded(rel_path, False):
                    continue
                yield SourceFile(root=root, path=current_dir / filename)

    def _is_excluded(self, rel_path: str, is_dir: bool) -> bool:
        return any(rule.matches(rel_path, is_dir) for rule in self._rules)


__all__ = ["ExcludeRule", "SourceScanner", "build_exclude_rule"]
