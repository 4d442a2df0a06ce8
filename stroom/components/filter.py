"""
This module provides the `filter_` component, which is used to selectively
keep or discard items from a pipeline stream based on a condition.
"""

from __future__ import annotations
from typing import Any, Callable, Iterator

from ..core.stage import Stage


def filter_(condition: Callable[[Any], bool], *, name: str = "filter") -> Stage:
    """
    Creates a stateless stage that filters items based on a condition.

    A rejected item is dropped on the spot; no later stage ever sees it.

    Args:
        condition: A callable that returns True for items to keep.
        name: An optional name for the stage.

    Returns:
        A Stage that yields items for which the condition is true.
    """
    if not callable(condition):
        raise ValueError("filter_ requires a callable condition.")

    def _filter_func(item: Any) -> Iterator[Any]:
        if condition(item):
            yield item

    return Stage(_filter_func, name=name)
