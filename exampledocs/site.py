"""Builds the render-ready site model from extracted examples."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .extractor import sort_examples
from .models import ExampleGroup, ExampleRecord, SiteModel


class SiteModelBuilder:
    """Sorts examples and derives the group and tag indexes over them."""

    def build(
        self,
        project_name: str,
        project_description: str,
        examples: Iterable[ExampleRecord],
    ) -> SiteModel:
        ordered = sort_examples(examples)

        groups: Dict[str, ExampleGroup] = {}
        for example in ordered:
            if not example.group:
                continue
            groups.setdefault(example.group, ExampleGroup(name=example.group)).examples.append(example)

        by_tag: Dict[str, List[ExampleRecord]] = {}
        for example in ordered:
            for tag in example.tags:
                by_tag.setdefault(tag, []).append(example)

        return SiteModel(
            project_name=project_name,
            project_description=project_description,
            examples=ordered,
            groups=list(groups.values()),
            by_tag=by_tag,
        )


__all__ = ["SiteModelBuilder"]
