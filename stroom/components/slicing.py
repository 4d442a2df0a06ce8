"""
Positional truncation: `limit` and `skip`.

Both stages are stateful (they count), but neither needs to see its whole
upstream. `limit` is also bounding: it never pulls more than `n` elements,
which is what lets a pipeline over an endless source terminate.
"""
from __future__ import annotations

from typing import Any, Iterator

from ..core.stage import Stage


def _check_count(n: Any, what: str) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ValueError(f"{what} count must be a non-negative integer.")


def limit(n: int) -> Stage:
    """Creates a stage that passes on at most the first `n` elements."""
    _check_count(n, "limit")

    def _limit_func(iterator: Iterator[Any]) -> Iterator[Any]:
        if n == 0:
            return
        for taken, item in enumerate(iterator, start=1):
            yield item
            if taken >= n:
                # Stop before asking upstream for element n + 1.
                return

    return Stage(_limit_func, name=f"limit(n={n})", stage_type="streaming", bounding=True)


def skip(n: int) -> Stage:
    """Creates a stage that drops the first `n` elements and passes on the rest."""
    _check_count(n, "skip")

    def _skip_func(iterator: Iterator[Any]) -> Iterator[Any]:
        for index, item in enumerate(iterator):
            if index >= n:
                yield item

    return Stage(_skip_func, name=f"skip(n={n})", stage_type="streaming")
