from __future__ import annotations

from typing import Any, Callable, Iterator

from ..core.stage import Stage


def peek(action: Callable[[Any], Any], *, name: str = "peek") -> Stage:
    """
    Creates a stage that calls `action` on each item and passes it on unchanged.

    Useful for tracing how elements flow through the surrounding stages.
    The return value of `action` is ignored.
    """
    if not callable(action):
        raise ValueError("peek requires a callable action.")

    def _peek_func(item: Any) -> Iterator[Any]:
        action(item)
        yield item

    return Stage(_peek_func, name=name)
