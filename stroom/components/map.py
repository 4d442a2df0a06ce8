"""
This module provides the `map_` and `flat_map` components, the building
blocks for transforming each item in a stream.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Optional

from ..core.stage import Stage


def _stage_name(func: Callable[..., Any], default: str) -> str:
    # Try to get a good name for the stage from the function itself
    name = getattr(func, "__name__", default)
    if name == "<lambda>":
        name = default
    return name


def map_(func: Callable[[Any], Any], *, name: Optional[str] = None) -> Stage:
    """
    Creates a stage that applies a function to each item in the stream.

    This is a stateless stage that performs a 1-to-1 transformation on items.

    Args:
        func: The function to apply to each item.
        name: An optional name for the stage. Defaults to the function's name.

    Returns:
        A Stage configured to perform the mapping operation.
    """
    if not callable(func):
        raise ValueError("map_ requires a callable.")

    def _map_func(item: Any) -> Iterator[Any]:
        yield func(item)

    return Stage(_map_func, name=name or _stage_name(func, "map"))


def flat_map(func: Callable[[Any], Iterable[Any]], *, name: Optional[str] = None) -> Stage:
    """
    Creates a stage that replaces each item with the items of `func(item)`.

    The outputs of one item are all yielded, in order, before the next
    upstream item is pulled.
    """
    if not callable(func):
        raise ValueError("flat_map requires a callable.")

    def _flat_map_func(item: Any) -> Iterator[Any]:
        yield from func(item)

    return Stage(_flat_map_func, name=name or _stage_name(func, "flat_map"))
