from __future__ import annotations

from typing import (
    Any,
    Callable,
    Iterable,
    Optional,
    Union,
)

from .log import get_logger

STAGE_TYPES = ("itemwise", "streaming", "aggregator")


class Stage:
    """
    One step of a pipeline.

    The `stage_type` decides how the runner drives `func`:

    - **itemwise**: stateless. `func(item)` returns an iterable of zero or
      more outputs and is called once per upstream element.
    - **streaming**: stateful but lazy. `func(iterator)` returns an iterator
      and may keep memory across elements without draining its upstream.
    - **aggregator**: stateful barrier. `func(items)` receives the whole
      upstream as a list and returns an iterable.

    A `bounding` stage yields a finite number of elements whatever its
    upstream is, which makes a later aggregator legal over an endless source.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        *,
        name: Optional[str] = None,
        stage_type: str = "itemwise",
        bounding: bool = False,
    ):
        if not callable(func):
            raise TypeError(f"Stage function must be callable, got {type(func)}")
        if stage_type not in STAGE_TYPES:
            raise ValueError(f"Stage type must be one of {list(STAGE_TYPES)}")

        self.func = func
        self.name = name or getattr(func, "__name__", "Stage")
        self.logger = get_logger(f"stroom.stage.{self.name}")
        self.stage_type = stage_type
        self.bounding = bounding

        self.metrics: dict[str, Any] = {
            "items_in": 0, "items_out": 0, "errors": 0, "time_total": 0.0,
        }

    @property
    def is_stateful(self) -> bool:
        return self.stage_type != "itemwise"

    @property
    def requires_finite_upstream(self) -> bool:
        return self.stage_type == "aggregator"

    def __repr__(self) -> str:
        return f"Stage(name='{self.name}', type='{self.stage_type}')"

    def __getattr__(self, name: str) -> Any:
        """
        Provides a more helpful error message if a user tries to call a
        Pipeline-specific method on a Stage.
        """
        from .pipeline import Pipeline

        if not name.startswith("_") and hasattr(Pipeline, name):
            message = (
                f"'Stage' object has no attribute '{name}'. "
                f"Did you mean to bind it to a source first? "
                f"e.g., from_source(data).add({self.name}).{name}(...)"
            )
            raise AttributeError(message)

        raise AttributeError(f"'Stage' object has no attribute '{name}'")


def stage(
    _func: Optional[Callable[[Any], Any]] = None,
    *,
    name: Optional[str] = None,
) -> Union[Stage, Callable[[Callable[[Any], Any]], Stage]]:
    """
    A decorator to create a stateless, one-to-one Stage from a function.

    The decorated function receives one element and returns its replacement,
    just like `map_`. Can be used bare (`@stage`) or with arguments
    (`@stage(name="double")`).

    Returns:
        A Stage object or a decorator that returns a Stage object.
    """
    def wrapper(func: Callable[[Any], Any]) -> Stage:
        def _one_to_one(item: Any) -> Iterable[Any]:
            return (func(item),)

        return Stage(_one_to_one, name=name or getattr(func, "__name__", "stage"))

    if _func is not None:
        return wrapper(_func)
    return wrapper


def aggregator_stage(
    _func: Optional[Callable[[list], Iterable[Any]]] = None,
    *,
    name: Optional[str] = None,
) -> Union[Stage, Callable[[Callable[[list], Iterable[Any]]], Stage]]:
    """
    A decorator to create an aggregator (barrier) stage.

    The decorated function receives the entire upstream as a list once it is
    exhausted, and returns the iterable to pass downstream. Aggregators are
    rejected over endless sources unless a bounding stage comes first.
    """
    def wrapper(func: Callable[[list], Iterable[Any]]) -> Stage:
        return Stage(func, name=name, stage_type="aggregator")

    if _func is not None:
        return wrapper(_func)
    return wrapper
