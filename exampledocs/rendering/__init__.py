"""Template rendering for the documentation site."""

from .renderer import (
    DEFAULT_EXAMPLE_TEMPLATE,
    DEFAULT_INDEX_TEMPLATE,
    RenderError,
    Renderer,
)

__all__ = ["DEFAULT_EXAMPLE_TEMPLATE", "DEFAULT_INDEX_TEMPLATE", "RenderError", "Renderer"]
