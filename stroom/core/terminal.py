"""
Terminal actions: the consumers that drive a pipeline.

A terminal receives every surviving element through `accept` and produces
the value `Pipeline.run` returns through `result`. Returning `STOP` from
`accept` ends evaluation early; nothing more is pulled from the source.
"""

from __future__ import annotations

from typing import Any, Callable


class _Signal:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


STOP = _Signal("STOP")
MISSING = _Signal("MISSING")


class Terminal:
    """Base class for terminal actions."""

    name = "terminal"

    def accept(self, item: Any) -> Any:
        raise NotImplementedError

    def result(self) -> Any:
        return None


class ForEach(Terminal):
    """Calls `action` once per element. `action` may return `STOP` to end early."""

    name = "for_each"

    def __init__(self, action: Callable[[Any], Any]):
        if not callable(action):
            raise ValueError("for_each requires a callable action.")
        self.action = action

    def accept(self, item: Any) -> Any:
        return self.action(item)


class Reduce(Terminal):
    """
    Folds the stream into a single value with `func(accumulator, item)`.

    Without an initial value the first element seeds the accumulator and an
    empty stream reduces to `None`.
    """

    name = "reduce"

    def __init__(self, func: Callable[[Any, Any], Any], initial: Any = MISSING):
        if not callable(func):
            raise ValueError("reduce requires a callable.")
        self.func = func
        self._acc = initial

    def accept(self, item: Any) -> None:
        if self._acc is MISSING:
            self._acc = item
        else:
            self._acc = self.func(self._acc, item)

    def result(self) -> Any:
        return None if self._acc is MISSING else self._acc


class Collect(Terminal):
    """Gathers every element into a container built by `factory` (a list by default)."""

    name = "collect"

    def __init__(self, factory: Callable[[list], Any] = list):
        self._items: list = []
        self._factory = factory

    def accept(self, item: Any) -> None:
        self._items.append(item)

    def result(self) -> Any:
        if self._factory is list:
            return self._items
        return self._factory(self._items)


class Count(Terminal):
    name = "count"

    def __init__(self):
        self._count = 0

    def accept(self, item: Any) -> None:
        self._count += 1

    def result(self) -> int:
        return self._count


class FindFirst(Terminal):
    """Returns the first element, or `default` for an empty stream."""

    name = "find_first"

    def __init__(self, default: Any = None):
        self._value = default

    def accept(self, item: Any) -> Any:
        self._value = item
        return STOP

    def result(self) -> Any:
        return self._value


class _Match(Terminal):
    def __init__(self, predicate: Callable[[Any], bool]):
        if not callable(predicate):
            raise ValueError(f"{self.name} requires a callable predicate.")
        self.predicate = predicate
        self._result = self._empty_result

    _empty_result = False
    _stop_on = True

    def accept(self, item: Any) -> Any:
        if bool(self.predicate(item)) is self._stop_on:
            self._result = not self._empty_result
            return STOP
        return None

    def result(self) -> bool:
        return self._result


class AnyMatch(_Match):
    name = "any_match"
    _empty_result = False
    _stop_on = True


class AllMatch(_Match):
    name = "all_match"
    _empty_result = True
    _stop_on = False


class NoneMatch(_Match):
    name = "none_match"
    _empty_result = True
    _stop_on = True


def as_terminal(obj: Any) -> Terminal:
    """Returns `obj` if it already is a Terminal, wrapping plain callables in `ForEach`."""
    if isinstance(obj, Terminal):
        return obj
    if callable(obj):
        return ForEach(obj)
    raise TypeError(f"Unsupported type for a terminal action: {type(obj)}")


__all__ = [
    "STOP",
    "MISSING",
    "Terminal",
    "ForEach",
    "Reduce",
    "Collect",
    "Count",
    "FindFirst",
    "AnyMatch",
    "AllMatch",
    "NoneMatch",
    "as_terminal",
]
