from __future__ import annotations

from typing import Any, Callable, List, Optional

from ..core.stage import Stage, aggregator_stage


def sorted_(key: Optional[Callable[[Any], Any]] = None, *, reverse: bool = False) -> Stage:
    """
    Creates a stage that sorts the whole stream.

    This is an aggregator stage: it consumes the entire upstream before it
    emits anything, so it cannot run over an endless source unless a
    bounding stage such as `limit` comes first. The sort is stable.

    Args:
        key: Optional key function. Natural ordering is used when omitted.
        reverse: Sort in descending order.

    Returns:
        A Stage configured to perform the sort.
    """
    if key is not None and not callable(key):
        raise ValueError("sorted_ key must be callable.")

    @aggregator_stage(name="sorted")
    def _sorted_func(items: List[Any]) -> List[Any]:
        return sorted(items, key=key, reverse=reverse)

    return _sorted_func
