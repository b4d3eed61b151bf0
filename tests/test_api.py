"""Tests for the Python marker decorators."""

from __future__ import annotations

from exampledocs.api import ExampleInfo, StepInfo, doc_example, doc_output, doc_step
from exampledocs.models import MAX_ORDER


@doc_example(title="Runtime", tags=["a", "b"], group="Basics")
class RuntimeExample:
    @doc_step(order=2, title="Compute")
    @doc_output("42")
    def compute(self) -> int:
        return 42


def test_decorators_return_the_decorated_object() -> None:
    assert RuntimeExample().compute() == 42


def test_decorators_record_their_arguments() -> None:
    info = RuntimeExample.__doc_example__  # type: ignore[attr-defined]
    assert info == ExampleInfo(title="Runtime", tags=("a", "b"), group="Basics")
    assert info.order == MAX_ORDER

    step = RuntimeExample.compute.__doc_step__  # type: ignore[attr-defined]
    assert step == StepInfo(order=2, title="Compute")
    assert RuntimeExample.compute.__doc_output__ == "42"  # type: ignore[attr-defined]
