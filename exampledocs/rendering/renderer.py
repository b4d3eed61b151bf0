"""Jinja2 rendering of the site model and individual examples."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from ..logging import get_logger
from ..models import ExampleRecord, SiteModel

DEFAULT_INDEX_TEMPLATE = "markdown/index.md.j2"
DEFAULT_EXAMPLE_TEMPLATE = "markdown/example.md.j2"

_BUILTIN_TEMPLATES = Path(__file__).with_name("templates")


class RenderError(RuntimeError):
    """Raised when a template is missing or fails to render."""


class Renderer:
    """Renders templates looked up in a custom directory first, then the built-ins."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self.logger = get_logger("renderer")
        self._env = self._create_env(templates_dir)

    def render(self, template_name: str, site: SiteModel) -> str:
        context: Dict[str, Any] = {
            "site": site,
            "examples": site.examples,
            "groups": site.groups,
            "by_tag": site.by_tag,
            "byTag": site.by_tag,
        }
        return self._render(template_name, context)

    def render_example(self, template_name: str, example: ExampleRecord) -> str:
        return self._render(template_name, {"example": example})

    def render_to_file(self, template_name: str, site: SiteModel, output_file: Path) -> Path:
        return self._write(output_file, self.render(template_name, site))

    def render_example_to_file(
        self, template_name: str, example: ExampleRecord, output_file: Path
    ) -> Path:
        return self._write(output_file, self.render_example(template_name, example))

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound as exc:
            raise RenderError(f"Template not found: {template_name}") from exc
        except TemplateError as exc:
            raise RenderError(f"Failed to load template {template_name}: {exc}") from exc
        try:
            return template.render(**context)
        except TemplateError as exc:
            raise RenderError(f"Failed to render template {template_name}: {exc}") from exc

    @staticmethod
    def _write(output_file: Path, text: str) -> Path:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(text, encoding="utf-8")
        return output_file

    def _create_env(self, templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir is not None:
            if templates_dir.is_dir():
                directories.append(str(templates_dir))
            else:
                self.logger.warning("Custom template directory %s not found; using built-in templates", templates_dir)
        directories.append(str(_BUILTIN_TEMPLATES))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = ["DEFAULT_EXAMPLE_TEMPLATE", "DEFAULT_INDEX_TEMPLATE", "RenderError", "Renderer"]
