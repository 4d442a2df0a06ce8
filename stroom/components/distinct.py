from __future__ import annotations

from typing import Any, Callable, Hashable, Iterator, List, Optional, Set

from ..core.stage import Stage


def distinct(key: Optional[Callable[[Any], Any]] = None) -> Stage:
    """
    Creates a stage that drops elements equal to one seen earlier.

    The first occurrence is kept, so first-encounter order is preserved.
    Elements are emitted as soon as they are found to be new, which keeps
    the stage usable over endless sources.

    Unhashable elements are compared by equality against a list, which is
    slower but keeps lists and dicts usable.
    """

    def _distinct_func(iterator: Iterator[Any]) -> Iterator[Any]:
        seen: Set[Hashable] = set()
        seen_unhashable: List[Any] = []
        for item in iterator:
            marker = key(item) if key is not None else item
            try:
                if marker in seen:
                    continue
                seen.add(marker)
            except TypeError:
                if marker in seen_unhashable:
                    continue
                seen_unhashable.append(marker)
            yield item

    return Stage(_distinct_func, name="distinct", stage_type="streaming")
