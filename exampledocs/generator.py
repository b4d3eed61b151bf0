"""End-to-end pipeline: extract examples, build the site, render output files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import ExampleDocsConfig
from .extractor import ExampleExtractor, with_vocabulary_overrides
from .logging import get_logger
from .models import ExtractionResult, SkippedFile
from .parsing import ParserConfig, create_parser
from .rendering import Renderer
from .site import SiteModelBuilder


@dataclass
class GenerationOutcome:
    """Summary of one generation run."""

    output_dir: Path
    index_file: Optional[Path] = None
    example_files: List[Path] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)
    example_count: int = 0

    @property
    def rendered(self) -> bool:
        return self.index_file is not None


class DocGenerator:
    """Coordinates extraction, site building, and rendering for one configuration."""

    def __init__(
        self,
        config: ExampleDocsConfig,
        extractor: ExampleExtractor | None = None,
        renderer: Renderer | None = None,
        site_builder: SiteModelBuilder | None = None,
    ) -> None:
        self.config = config
        self.extractor = extractor or self._create_extractor(config)
        self.renderer = renderer or Renderer(config.templates.dir)
        self.site_builder = site_builder or SiteModelBuilder()
        self.logger = get_logger("generator")

    def extract(self) -> ExtractionResult:
        roots = self.config.source_roots()
        self.logger.info("Extracting examples from %d source directories", len(roots))
        result = self.extractor.extract(roots)
        self.logger.debug(
            "Scanned %d files, %d skipped", result.files_scanned, len(result.skipped)
        )
        return result

    def run(self) -> GenerationOutcome:
        output_dir = Path(self.config.output_dir or self.config.root)
        outcome = GenerationOutcome(output_dir=output_dir)

        if not self.config.source_roots():
            self.logger.warning("No source directories found. Skipping documentation generation.")
            return outcome

        result = self.extract()
        outcome.skipped = list(result.skipped)
        outcome.example_count = len(result.examples)
        if result.skipped:
            self.logger.warning("%d source files could not be parsed and were skipped", len(result.skipped))

        if not result.examples:
            self.logger.warning(
                "No %s markers found. Skipping documentation generation.",
                self.extractor.vocabulary.example,
            )
            return outcome

        self.logger.info("Found %d examples", len(result.examples))
        site = self.site_builder.build(
            self.config.project_name,
            self.config.project_description,
            result.examples,
        )

        extension = self.config.file_extension
        index_file = output_dir / f"index{extension}"
        outcome.index_file = self.renderer.render_to_file(self.config.templates.index, site, index_file)
        self.logger.info("Generated index at %s", index_file)

        for example in site.examples:
            example_file = output_dir / f"{example.id}{extension}"
            self.renderer.render_example_to_file(self.config.templates.example, example, example_file)
            outcome.example_files.append(example_file)
            self.logger.info("Generated %s", example_file)

        return outcome

    @staticmethod
    def _create_extractor(config: ExampleDocsConfig) -> ExampleExtractor:
        parser = create_parser(ParserConfig(language=config.language, strict=config.strict_parsing))
        vocabulary = with_vocabulary_overrides(
            parser.vocabulary,
            example=config.markers.example,
            step=config.markers.step,
            output=config.markers.output,
        )
        return ExampleExtractor(parser, vocabulary=vocabulary, exclude_paths=config.exclude_paths)


__all__ = ["DocGenerator", "GenerationOutcome"]
