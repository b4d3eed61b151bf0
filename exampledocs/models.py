"""Document model shared by the extractor, site builder, and renderer."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Dict, List

MAX_ORDER = sys.maxsize
"""Order assigned to examples that do not declare one; sorts them last."""


@dataclass
class StepRecord:
    """One documented step inside an example."""

    order: int
    title: str
    description: str
    code: str
    expected_output: str = ""


@dataclass
class ExampleRecord:
    """One documented example, extracted from one marked declaration."""

    id: str
    title: str
    description: str
    tags: List[str]
    order: int
    group: str
    source_declaration_name: str
    source_namespace: str
    imports: str
    class_code: str
    steps: List[StepRecord] = field(default_factory=list)
    language: str = ""
    source_path: str = ""

    @property
    def qualified_name(self) -> str:
        if self.source_namespace:
            return f"{self.source_namespace}.{self.source_declaration_name}"
        return self.source_declaration_name


@dataclass
class ExampleGroup:
    name: str
    examples: List[ExampleRecord] = field(default_factory=list)


@dataclass
class SiteModel:
    """Render input: sorted examples plus group and tag views over them."""

    project_name: str
    project_description: str
    examples: List[ExampleRecord]
    groups: List[ExampleGroup]
    by_tag: Dict[str, List[ExampleRecord]]


@dataclass
class SkippedFile:
    """A source file that was left out of extraction, with the reason."""

    path: str
    reason: str


@dataclass
class ExtractionResult:
    examples: List[ExampleRecord] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)
    files_scanned: int = 0


__all__ = [
    "MAX_ORDER",
    "ExampleGroup",
    "ExampleRecord",
    "ExtractionResult",
    "SiteModel",
    "SkippedFile",
    "StepRecord",
]
