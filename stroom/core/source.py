"""
This module defines the Source, the producer at the head of every pipeline.

A Source hands out elements one at a time on demand and knows, where it can,
whether it will ever run dry. That knowledge is what lets a pipeline reject a
`sorted()` over an endless counter before it starts pulling.
"""

from __future__ import annotations

import itertools
from collections.abc import Sized
from typing import Any, Callable, Iterable, Iterator, Optional

from .errors import PipelineStateError


class Source:
    """A single-use, lazily opened producer of elements.

    Attributes:
        name: A name for the source, used for logging.
        finite: `True` if the source is known to end, `False` if it is known
            to be endless, `None` if that cannot be determined up front.
        pulled: The number of elements handed downstream so far.
    """

    def __init__(
        self,
        factory: Callable[[], Iterator[Any]],
        *,
        finite: Optional[bool] = None,
        name: Optional[str] = None,
    ):
        self._factory = factory
        self._iterator: Optional[Iterator[Any]] = None
        self._stream: Optional[Iterator[Any]] = None
        self.finite = finite
        self.name = name or "source"
        self.pulled = 0
        self.consumed = False

    @classmethod
    def of(cls, *values: Any) -> "Source":
        """Creates a finite source over the given values, in order."""
        return cls.from_iterable(values, name="of")

    @classmethod
    def from_iterable(cls, iterable: Iterable[Any], *, name: Optional[str] = None) -> "Source":
        """Wraps an iterable.

        Sized collections (lists, tuples, ranges, ...) are known to be finite.
        For plain iterators and generators finiteness is unknown.
        """
        finite = True if isinstance(iterable, Sized) else None
        return cls(lambda: iter(iterable), finite=finite, name=name or "iterable")

    @classmethod
    def generate(cls, supplier: Callable[[], Any]) -> "Source":
        """Creates an infinite source that calls `supplier` once per element."""

        def _generate() -> Iterator[Any]:
            while True:
                yield supplier()

        return cls(_generate, finite=False, name="generate")

    @classmethod
    def iterate(cls, seed: Any, func: Callable[[Any], Any]) -> "Source":
        """Creates the infinite source `seed, func(seed), func(func(seed)), ...`."""

        def _iterate() -> Iterator[Any]:
            value = seed
            while True:
                yield value
                value = func(value)

        return cls(_iterate, finite=False, name="iterate")

    @classmethod
    def count(cls, start: int = 0, step: int = 1) -> "Source":
        """Creates an infinite counting source."""
        return cls(lambda: itertools.count(start, step), finite=False, name="count")

    @classmethod
    def from_callable(cls, func: Callable[[], Any], sentinel: Any) -> "Source":
        """Calls `func` until it returns `sentinel`, which signals exhaustion."""
        return cls(lambda: iter(func, sentinel), finite=None, name="callable")

    def open(self) -> Iterator[Any]:
        """Opens the source for pulling. A source can be opened only once."""
        if self.consumed:
            raise PipelineStateError(f"source '{self.name}' already consumed")
        self.consumed = True
        self._iterator = iter(self._factory())
        self._stream = self._pull()
        return self._stream

    def _pull(self) -> Iterator[Any]:
        for item in self._iterator:
            self.pulled += 1
            yield item

    def close(self) -> None:
        """Releases the underlying iterator, if it was opened."""
        self.consumed = True
        for it in (self._stream, self._iterator):
            close = getattr(it, "close", None)
            if close is not None:
                close()
        self._stream = None
        self._iterator = None

    def __repr__(self) -> str:
        return f"Source(name='{self.name}', finite={self.finite}, pulled={self.pulled})"


def as_source(obj: Any) -> Source:
    """Returns `obj` if it already is a Source, otherwise wraps it as an iterable."""
    if isinstance(obj, Source):
        return obj
    if isinstance(obj, Iterable):
        return Source.from_iterable(obj)
    raise TypeError(f"Unsupported type for a pipeline source: {type(obj)}")
