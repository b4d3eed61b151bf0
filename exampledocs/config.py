"""Configuration loading for exampledocs (.exampledocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .parsing import available_languages
from .rendering import DEFAULT_EXAMPLE_TEMPLATE, DEFAULT_INDEX_TEMPLATE

CONFIG_FILENAME = ".exampledocs.yml"

_DEFAULT_SOURCES = {
    "java": ["src/main/java"],
    "python": ["src"],
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class TemplateConfig:
    """Template lookup settings."""

    dir: Optional[Path] = None
    index: str = DEFAULT_INDEX_TEMPLATE
    example: str = DEFAULT_EXAMPLE_TEMPLATE


@dataclass
class MarkerConfig:
    """Marker name overrides; ``None`` keeps the language default."""

    example: Optional[str] = None
    step: Optional[str] = None
    output: Optional[str] = None


@dataclass
class ExampleDocsConfig:
    """Represents the settings defined in .exampledocs.yml."""

    root: Path
    project_name: str = ""
    project_description: str = ""
    language: str = "java"
    strict_parsing: bool = True
    sources: List[Path] = field(default_factory=list)
    exclude_paths: List[str] = field(default_factory=list)
    output_dir: Optional[Path] = None
    file_extension: str = ".md"
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    markers: MarkerConfig = field(default_factory=MarkerConfig)

    def __post_init__(self) -> None:
        if not self.project_name:
            self.project_name = self.root.name or "Examples"
        if self.output_dir is None:
            self.output_dir = self.root / "build" / "generated-docs"

    def source_roots(self) -> List[Path]:
        """Return configured sources, or the language's conventional layout."""
        if self.sources:
            return list(self.sources)
        defaults = [self.root / rel for rel in _DEFAULT_SOURCES.get(self.language, [])]
        existing = [path for path in defaults if path.is_dir()]
        return existing or [self.root]


def load_config(config_path: Path) -> ExampleDocsConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ExampleDocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    project_data = _as_dict(data.get("project"))
    templates_data = _as_dict(data.get("templates"))
    markers_data = _as_dict(data.get("markers"))

    language = (_as_str(data.get("language")) or "java").lower()
    if language not in available_languages():
        raise ConfigError(f"Unsupported language '{language}' in {CONFIG_FILENAME}")

    templates = TemplateConfig()
    templates_dir = _as_str(templates_data.get("dir"))
    if templates_dir:
        templates.dir = root / templates_dir
    templates.index = _as_str(templates_data.get("index")) or templates.index
    templates.example = _as_str(templates_data.get("example")) or templates.example

    output_dir = _as_str(data.get("output_dir"))
    strict = _as_bool(data.get("strict_parsing"))
    extension = _as_str(data.get("file_extension")) or ".md"
    if not extension.startswith("."):
        extension = f".{extension}"

    return ExampleDocsConfig(
        root=root,
        project_name=_as_str(project_data.get("name")) or "",
        project_description=_as_str(project_data.get("description")) or "",
        language=language,
        strict_parsing=True if strict is None else strict,
        sources=[root / source for source in _as_str_list(data.get("sources"))],
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        output_dir=root / output_dir if output_dir else None,
        file_extension=extension,
        templates=templates,
        markers=MarkerConfig(
            example=_as_str(markers_data.get("example")),
            step=_as_str(markers_data.get("step")),
            output=_as_str(markers_data.get("output")),
        ),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ExampleDocsConfig",
    "MarkerConfig",
    "TemplateConfig",
    "load_config",
]
