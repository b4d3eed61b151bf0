"""Tests for exampledocs.rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from exampledocs.models import ExampleRecord, StepRecord
from exampledocs.rendering import (
    DEFAULT_EXAMPLE_TEMPLATE,
    DEFAULT_INDEX_TEMPLATE,
    RenderError,
    Renderer,
)
from exampledocs.site import SiteModelBuilder


def _example(
    example_id: str,
    title: str,
    description: str = "",
    *,
    order: int = 1,
    group: str = "",
    tags: list[str] | None = None,
    class_code: str = "",
    steps: list[StepRecord] | None = None,
) -> ExampleRecord:
    return ExampleRecord(
        id=example_id,
        title=title,
        description=description,
        tags=list(tags or []),
        order=order,
        group=group,
        source_declaration_name="Example",
        source_namespace="com.example",
        imports="",
        class_code=class_code,
        steps=list(steps or []),
        language="java",
    )


def test_render_example_page_with_steps() -> None:
    step1 = StepRecord(1, "Initialize", "Set up the factory.", "Factory f = Factory.getInstance();")
    step2 = StepRecord(2, "Create Object", "Create a new object.", "Object obj = f.create();", "Created: obj1")
    example = _example(
        "create-model",
        "Create a Model",
        "Shows how to create a model.",
        group="Quick Start",
        tags=["getting-started"],
        steps=[step1, step2],
    )

    output = Renderer().render_example(DEFAULT_EXAMPLE_TEMPLATE, example)

    assert "# Create a Model" in output
    assert "## Initialize" in output
    assert "```java\nFactory f = Factory.getInstance();\n```" in output
    assert "## Create Object" in output
    assert "Created: obj1" in output
    assert "getting-started" in output
    assert "com.example.Example" in output


def test_render_example_page_with_class_code() -> None:
    example = _example(
        "simple",
        "Simple Example",
        "A simple example.",
        class_code='public void run() {\n    System.out.println("Hello");\n}',
    )

    output = Renderer().render_example(DEFAULT_EXAMPLE_TEMPLATE, example)

    assert "# Simple Example" in output
    assert 'System.out.println("Hello")' in output


def test_render_index_page() -> None:
    ex1 = _example("ex1", "Example One", "First example.", order=1, group="Group A", tags=["tag1"])
    ex2 = _example("ex2", "Example Two", "Second example.", order=2, group="Group A", tags=["tag1"])
    site = SiteModelBuilder().build("My Project", "Project description.", [ex1, ex2])

    output = Renderer().render(DEFAULT_INDEX_TEMPLATE, site)

    assert "# My Project" in output
    assert "Project description." in output
    assert "## Group A" in output
    assert "[Example One](ex1.md)" in output
    assert "First example." in output
    assert "[Example Two](ex2.md)" in output
    assert "Second example." in output
    assert "### tag1" in output


def test_custom_template_directory_takes_precedence(tmp_path: Path) -> None:
    custom = tmp_path / "templates" / "markdown"
    custom.mkdir(parents=True)
    (custom / "example.md.j2").write_text("custom: {{ example.title }}", encoding="utf-8")

    renderer = Renderer(tmp_path / "templates")
    example = _example("x", "Custom Title")
    site = SiteModelBuilder().build("Proj", "", [example])

    assert renderer.render_example(DEFAULT_EXAMPLE_TEMPLATE, example) == "custom: Custom Title"
    assert renderer.render(DEFAULT_INDEX_TEMPLATE, site).startswith("# Proj")


def test_tag_index_is_available_under_camel_case_name(tmp_path: Path) -> None:
    (tmp_path / "tags.j2").write_text(
        "{% for tag, tagged in byTag.items() %}{{ tag }}={{ tagged|length }};{% endfor %}",
        encoding="utf-8",
    )
    site = SiteModelBuilder().build(
        "Proj",
        "",
        [_example("a", "A", tags=["x", "y"]), _example("b", "B", tags=["x"])],
    )

    assert Renderer(tmp_path).render("tags.j2", site) == "x=2;y=1;"

def test_missing_custom_directory_falls_back_to_builtins(tmp_path: Path) -> None:
    renderer = Renderer(tmp_path / "absent")

    assert renderer.render_example(DEFAULT_EXAMPLE_TEMPLATE, _example("x", "Title")).startswith("# Title")


def test_unknown_template_raises_render_error() -> None:
    with pytest.raises(RenderError, match="not found"):
        Renderer().render_example("markdown/missing.j2", _example("x", "Title"))


def test_render_to_file_creates_parent_directories(tmp_path: Path) -> None:
    example = _example("x", "Written")
    target = tmp_path / "out" / "nested" / "x.md"

    written = Renderer().render_example_to_file(DEFAULT_EXAMPLE_TEMPLATE, example, target)

    assert written == target
    assert target.read_text(encoding="utf-8").startswith("# Written")
