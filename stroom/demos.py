"""
Small demonstration pipelines, runnable with `stroom demo NAME`.

Each demo builds a fresh pipeline, so it can be run any number of times.
Output goes through the `emit` callable (stdout when run from the CLI).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .config import Config
from .core.pipeline import Pipeline, from_source
from .core.source import Source

Emit = Callable[[str], None]


@dataclass
class Demo:
    name: str
    description: str
    func: Callable[[Config, Emit, Optional[int]], None]


def hello_supplier() -> Callable[[], str]:
    """Returns a supplier producing 'Hello 0', 'Hello 1', ... from its own counter."""
    count = 0

    def _next() -> str:
        nonlocal count
        value = f"Hello {count}"
        count += 1
        return value

    return _next


def numbers_pipeline() -> Pipeline:
    """The numbers 1 to 10, unchanged. Usable with `stroom run stroom.demos:numbers_pipeline`."""
    return from_source(Source.of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10), name="numbers")


def filter_pipeline(threshold: int = 5) -> Pipeline:
    return numbers_pipeline().filter(lambda number: number > threshold)


def _generate(config: Config, emit: Emit, limit: Optional[int]) -> None:
    n = limit if limit is not None else config.get_int("demos.generate.limit", 5)
    from_source(Source.generate(hello_supplier()), name="generate").limit(n).for_each(emit)


def _for_each(config: Config, emit: Emit, limit: Optional[int]) -> None:
    pipeline = numbers_pipeline()
    if limit is not None:
        pipeline.limit(limit)
    pipeline.for_each(lambda number: emit(str(number)))


def _filter(config: Config, emit: Emit, limit: Optional[int]) -> None:
    pipeline = filter_pipeline(config.get_int("demos.filter.threshold", 5))
    if limit is not None:
        pipeline.limit(limit)
    pipeline.for_each(lambda number: emit(str(number)))


def _stateless(config: Config, emit: Emit, limit: Optional[int]) -> None:
    pipeline = (
        numbers_pipeline()
        .peek(lambda num: emit(f"peek element from the stream {num}"))
        .filter(lambda num: num % 2 == 0)
        .peek(lambda num: emit(f"Filter done for the element {num}"))
    )
    if limit is not None:
        pipeline.limit(limit)
    pipeline.for_each(lambda num: emit(f"Final output: {num}"))


def _stateful(config: Config, emit: Emit, limit: Optional[int]) -> None:
    pipeline = (
        numbers_pipeline()
        .peek(lambda num: emit(f"peek element from the stream {num}"))
        .filter(lambda num: num % 2 == 0)
        .peek(lambda num: emit(f"Filter done for the element {num}"))
        .sorted()
        .peek(lambda num: emit(f"Sorted done for the element {num}"))
    )
    if limit is not None:
        pipeline.limit(limit)
    pipeline.for_each(lambda num: emit(f"Final output: {num}"))


DEMOS: Dict[str, Demo] = {
    demo.name: demo
    for demo in (
        Demo("generate", "Endless 'Hello <n>' supplier, bounded by limit", _generate),
        Demo("for-each", "Print the numbers 1 to 10", _for_each),
        Demo("filter", "Keep the numbers greater than a threshold", _filter),
        Demo("stateless", "Trace peek/filter/peek: elements flow one at a time", _stateless),
        Demo("stateful", "Trace peek/filter/peek/sorted/peek: sorted buffers everything", _stateful),
    )
}


def run_demo(name: str, emit: Emit, *, config: Optional[Config] = None, limit: Optional[int] = None) -> None:
    """Runs the named demo. Raises KeyError for an unknown name."""
    DEMOS[name].func(config or Config(), emit, limit)
