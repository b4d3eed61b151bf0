"""Tests for the tree-sitter Java parser."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from exampledocs.formatting import strip_blank
from exampledocs.parsing import (
    ArrayLiteral,
    BoolLiteral,
    IntLiteral,
    JavaSourceParser,
    OtherExpression,
    ParserConfig,
    SourceFile,
    SourceParseError,
    StringLiteral,
)
from exampledocs.parsing.java import decode_string_literal, parse_int_literal

SAMPLE = textwrap.dedent(
    """\
    package examples;

    import java.util.List;
    import static java.lang.Math.max;

    @DocExample(
        title = "Sample Example",
        tags = {"test", "sample"},
        order = 1,
        includeImports = true
    )
    public class SampleDocExample {

        @DocStep(order = 1, title = "First Step")
        public void stepOne() {
            String greeting = "Hello";
            System.out.println(greeting);
        }

        @DocStep(order = -1, title = Titles.SECOND, description = "a" + "b")
        @DocOutput("Result: 42")
        public void stepTwo() {
            int result = 42;
        }

        static class Nested {
            void ignored() {
            }
        }
    }
    """
)


@pytest.fixture
def parser() -> JavaSourceParser:
    return JavaSourceParser()


def test_parse_collects_package_imports_and_declarations(parser: JavaSourceParser) -> None:
    unit = parser.parse(SAMPLE, path="SampleDocExample.java")

    assert unit.language == "java"
    assert unit.namespace == "examples"
    assert unit.imports == ("import java.util.List;", "import static java.lang.Math.max;")
    assert [declaration.name for declaration in unit.declarations] == ["SampleDocExample", "Nested"]


def test_parse_reads_annotation_arguments(parser: JavaSourceParser) -> None:
    declaration = parser.parse(SAMPLE, path="SampleDocExample.java").declarations[0]
    marker = declaration.find_marker("DocExample")

    assert marker is not None
    assert marker.value is None
    assert marker.arguments["title"] == StringLiteral("Sample Example")
    assert marker.arguments["tags"] == ArrayLiteral((StringLiteral("test"), StringLiteral("sample")))
    assert marker.arguments["order"] == IntLiteral(1)
    assert marker.arguments["includeImports"] == BoolLiteral(True)


def test_parse_keeps_non_literal_arguments_as_expressions(parser: JavaSourceParser) -> None:
    step_two = parser.parse(SAMPLE, path="SampleDocExample.java").declarations[0].members[1]
    marker = step_two.find_marker("DocStep")

    assert marker is not None
    assert isinstance(marker.arguments["order"], OtherExpression)
    assert isinstance(marker.arguments["title"], OtherExpression)
    assert isinstance(marker.arguments["description"], OtherExpression)

    output = step_two.find_marker("DocOutput")
    assert output is not None
    assert output.value == StringLiteral("Result: 42")
    assert output.arguments == {}


def test_members_are_direct_methods_with_bodies(parser: JavaSourceParser) -> None:
    declaration = parser.parse(SAMPLE, path="SampleDocExample.java").declarations[0]

    assert [member.name for member in declaration.members] == ["stepOne", "stepTwo"]
    step_one = declaration.members[0]
    assert strip_blank(step_one.body) == 'String greeting = "Hello";\nSystem.out.println(greeting);'
    assert step_one.text.startswith("    @DocStep(order = 1, title = \"First Step\")\n    public void stepOne() {")
    assert step_one.text.endswith("}")
    assert step_one.line == 14


def test_declaration_text_includes_annotations(parser: JavaSourceParser) -> None:
    declaration = parser.parse(SAMPLE, path="SampleDocExample.java").declarations[0]

    assert declaration.text.startswith("@DocExample(")
    assert declaration.body is not None
    assert strip_blank(declaration.body).startswith("@DocStep(order = 1")


def test_interface_methods_without_body(parser: JavaSourceParser) -> None:
    source = textwrap.dedent(
        """\
        @DocExample
        public interface Api {
            @DocStep(order = 1)
            void run();
        }
        """
    )
    unit = parser.parse(source, path="Api.java")

    assert unit.namespace == ""
    declaration = unit.declarations[0]
    marker = declaration.find_marker("DocExample")
    assert marker is not None and marker.arguments == {} and marker.value is None
    assert declaration.members[0].body is None


def test_strict_parsing_rejects_syntax_errors(parser: JavaSourceParser) -> None:
    with pytest.raises(SourceParseError) as excinfo:
        parser.parse("public class Broken {\n    void x( {\n}\n", path="Broken.java")
    assert excinfo.value.path == Path("Broken.java")


def test_lenient_parsing_returns_partial_unit() -> None:
    parser = JavaSourceParser(ParserConfig(language="java", strict=False))
    unit = parser.parse("public class Broken {\n    void x( {\n}\n", path="Broken.java")
    assert unit.path == Path("Broken.java")


def test_parse_file_rejects_invalid_utf8(tmp_path: Path, parser: JavaSourceParser) -> None:
    path = tmp_path / "Latin.java"
    path.write_bytes(b"class Latin { String s = \"\xe9\"; }\n")

    with pytest.raises(SourceParseError, match="UTF-8"):
        parser.parse_file(SourceFile(root=tmp_path, path=path))


def test_decode_string_literal_handles_escapes() -> None:
    assert decode_string_literal(r'"a\tb \"q\" A\101"') == 'a\tb "q" AA'
    assert decode_string_literal('"""\n    block"""') is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [("42", 42), ("1_000", 1000), ("0x1F", 31), ("0b101", 5), ("017", 15), ("0", 0), ("10L", None)],
)
def test_parse_int_literal(text: str, expected: int | None) -> None:
    assert parse_int_literal(text) == expected
