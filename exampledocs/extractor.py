"""Turns marked declarations into :class:`ExampleRecord` values."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .formatting import dedent, strip_blank
from .logging import get_logger
from .markers import MarkerReader
from .models import MAX_ORDER, ExampleRecord, ExtractionResult, SkippedFile, StepRecord
from .parsing import MarkerVocabulary, ParserConfig, SourceParseError, SourceParser, create_parser
from .parsing.base import Declaration, Member, SourceUnit
from .scanner import SourceScanner


def sort_examples(examples: Iterable[ExampleRecord]) -> List[ExampleRecord]:
    """Return examples ordered by ``(order, title)``; equal keys keep their input order."""
    return sorted(examples, key=lambda example: (example.order, example.title))


class ExampleExtractor:
    """Finds ``example`` markers in source files and builds example records.

    Per-file extraction is a pure function of the parsed unit. Only the first
    marked type declaration of a file is extracted.
    """

    def __init__(
        self,
        parser: SourceParser | None = None,
        *,
        config: ParserConfig | None = None,
        vocabulary: MarkerVocabulary | None = None,
        exclude_paths: Sequence[str] | None = None,
    ) -> None:
        self.parser = parser or create_parser(config)
        self.vocabulary = vocabulary or self.parser.vocabulary
        self.scanner = SourceScanner(self.parser.suffix, exclude_paths=exclude_paths)
        self.logger = get_logger("extractor")

    def extract(self, roots: Iterable[Path | str]) -> ExtractionResult:
        """Extract examples from every source file below ``roots``.

        Files that fail to parse are recorded in ``skipped`` and the scan continues;
        ``OSError`` while reading propagates.
        """
        result = ExtractionResult()
        for source_file in self.scanner.iter_files(roots):
            result.files_scanned += 1
            try:
                unit = self.parser.parse_file(source_file)
            except SourceParseError as exc:
                self.logger.warning("Skipping %s: %s", source_file.path, exc.reason)
                result.skipped.append(SkippedFile(path=str(source_file.path), reason=str(exc)))
                continue
            example = self.extract_from_unit(unit)
            if example is not None:
                self.logger.debug("Extracted example '%s' from %s", example.id, source_file.path)
                result.examples.append(example)

        result.examples = sort_examples(result.examples)
        return result

    def extract_from_unit(self, unit: SourceUnit) -> Optional[ExampleRecord]:
        """Return the example declared in ``unit``, if any."""
        matches = [
            declaration
            for declaration in unit.declarations
            if declaration.find_marker(self.vocabulary.example) is not None
        ]
        if not matches:
            return None
        if len(matches) > 1:
            # TODO: collect every marked declaration once multi-example files are wanted.
            self.logger.debug(
                "%s declares %d examples; only '%s' is extracted",
                unit.path,
                len(matches),
                matches[0].name,
            )
        return self._build_example(unit, matches[0])

    def _build_example(self, unit: SourceUnit, declaration: Declaration) -> ExampleRecord:
        reader = MarkerReader(declaration.find_marker(self.vocabulary.example))
        name = declaration.name

        example_id = reader.string("id", name)
        title = reader.string("title", name)
        description = reader.string("description", "")
        tags = reader.string_list("tags")
        order = reader.integer("order", MAX_ORDER)
        group = reader.string("group", "")
        include_imports = reader.boolean(self.vocabulary.include_imports, False)

        imports = ""
        if include_imports:
            imports = "\n".join(statement.strip() for statement in unit.imports).rstrip()

        if not example_id:
            example_id = name

        # Dedent before trimming so the first line keeps its indentation relative to the rest.
        if declaration.body is not None:
            class_code = strip_blank(declaration.body)
        else:
            class_code = dedent(declaration.text) or ""

        return ExampleRecord(
            id=example_id,
            title=title,
            description=description,
            tags=tags,
            order=order,
            group=group,
            source_declaration_name=name,
            source_namespace=unit.namespace,
            imports=imports,
            class_code=class_code,
            steps=self._extract_steps(declaration),
            language=unit.language,
            source_path=str(unit.path),
        )

    def _extract_steps(self, declaration: Declaration) -> List[StepRecord]:
        steps = [
            self._build_step(member)
            for member in declaration.members
            if member.find_marker(self.vocabulary.step) is not None
        ]
        steps.sort(key=lambda step: step.order)
        return steps

    def _build_step(self, member: Member) -> StepRecord:
        reader = MarkerReader(member.find_marker(self.vocabulary.step))
        order = reader.integer("order", 0)
        title = reader.string("title", member.name)
        description = reader.string("description", "")
        include_declaration = reader.boolean(self.vocabulary.include_declaration, False)

        if include_declaration:
            code = dedent(member.text) or ""
        elif member.body is None:
            code = ""
        else:
            code = strip_blank(member.body)

        expected_output = ""
        output_marker = member.find_marker(self.vocabulary.output)
        if output_marker is not None:
            expected_output = MarkerReader(output_marker).single_value()

        return StepRecord(
            order=order,
            title=title,
            description=description,
            code=code,
            expected_output=expected_output,
        )


def with_vocabulary_overrides(
    vocabulary: MarkerVocabulary,
    *,
    example: str | None = None,
    step: str | None = None,
    output: str | None = None,
) -> MarkerVocabulary:
    """Return ``vocabulary`` with any provided marker names replaced."""
    changes = {
        key: value
        for key, value in (("example", example), ("step", step), ("output", output))
        if value
    }
    return replace(vocabulary, **changes) if changes else vocabulary


__all__ = ["ExampleExtractor", "sort_examples", "with_vocabulary_overrides"]
