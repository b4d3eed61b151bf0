"""Markers for declaring documentation examples in Python source.

The extractor reads these decorators from the syntax tree; at runtime they only
record their arguments on the decorated object, so example modules stay
importable and runnable::

    from exampledocs.api import doc_example, doc_output, doc_step

    @doc_example(title="Hello", tags=["basics"], order=1, group="Quick Start")
    class HelloExample:
        @doc_step(order=1, title="Greet")
        @doc_output("Hello, world")
        def greet(self):
            print("Hello, world")

Argument values must be literals (strings, integers, booleans, lists of
strings) to be picked up by extraction; anything else falls back to the default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, Tuple, TypeVar

from .models import MAX_ORDER

_T = TypeVar("_T")


@dataclass(frozen=True)
class ExampleInfo:
    id: str = ""
    title: str = ""
    description: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    order: int = MAX_ORDER
    group: str = ""
    include_imports: bool = False


@dataclass(frozen=True)
class StepInfo:
    order: int = 0
    title: str = ""
    description: str = ""
    include_declaration: bool = False


def doc_example(
    id: str = "",
    title: str = "",
    description: str = "",
    tags: Sequence[str] = (),
    order: int = MAX_ORDER,
    group: str = "",
    include_imports: bool = False,
) -> Callable[[_T], _T]:
    """Mark a class as a documentation example."""
    info = ExampleInfo(
        id=id,
        title=title,
        description=description,
        tags=tuple(tags),
        order=order,
        group=group,
        include_imports=include_imports,
    )

    def decorator(target: _T) -> _T:
        setattr(target, "__doc_example__", info)
        return target

    return decorator


def doc_step(
    order: int = 0,
    title: str = "",
    description: str = "",
    include_declaration: bool = False,
) -> Callable[[_T], _T]:
    """Mark a method as one step of the enclosing example."""
    info = StepInfo(
        order=order,
        title=title,
        description=description,
        include_declaration=include_declaration,
    )

    def decorator(target: _T) -> _T:
        setattr(target, "__doc_step__", info)
        return target

    return decorator


def doc_output(value: str) -> Callable[[_T], _T]:
    """Attach the output a step is expected to print."""

    def decorator(target: _T) -> _T:
        setattr(target, "__doc_output__", value)
        return target

    return decorator


__all__ = ["ExampleInfo", "StepInfo", "doc_example", "doc_output", "doc_step"]
