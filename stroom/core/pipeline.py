"""
This module defines the core Pipeline class, which binds a Source to a chain
of Stages and evaluates it lazily when a terminal action asks for results.

A Pipeline is single-use. It moves through three states:

    BUILDING -> RUNNING -> CONSUMED

Stages may only be added while BUILDING, `run` may only be called while
BUILDING, and nothing ever returns to BUILDING. Build a fresh pipeline from a
fresh source to repeat a computation.
"""

from __future__ import annotations

import enum
import time
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Union,
)

from ..components.distinct import distinct as _distinct
from ..components.filter import filter_
from ..components.map import flat_map as _flat_map
from ..components.map import map_
from ..components.peek import peek as _peek
from ..components.slicing import limit as _limit
from ..components.slicing import skip as _skip
from ..components.sort import sorted_
from .errors import MisconfigurationError, PipelineStateError
from .log import get_logger
from .runner import SerialRunner
from .source import Source, as_source
from .stage import Stage
from .terminal import (
    MISSING,
    STOP,
    AllMatch,
    AnyMatch,
    Collect,
    Count,
    FindFirst,
    NoneMatch,
    Reduce,
    Terminal,
    as_terminal,
)


class PipelineState(enum.Enum):
    BUILDING = "building"
    RUNNING = "running"
    CONSUMED = "consumed"


class Pipeline:
    """A source bound to an ordered chain of stages.

    Pipelines are built either fluently (`.filter(...).map(...)`), with
    `add`, or by composing stages with the `|` operator, and are driven by
    a terminal method such as `for_each`, `collect` or `reduce`.

    Example:
        >>> Pipeline.from_source(range(1, 11)).filter(lambda x: x > 5).collect()
        [6, 7, 8, 9, 10]

    Attributes:
        source: The Source this pipeline pulls from.
        stages: The Stage objects that make up the pipeline, in order.
        name: The name of the pipeline, used for logging.
        logger: A logger instance for the pipeline.
    """

    def __init__(
        self,
        source: Union[Source, Iterable[Any]],
        stages: Optional[List[Stage]] = None,
        *,
        name: Optional[str] = None,
    ):
        """Initializes a new Pipeline. Nothing is pulled from `source` yet.

        Args:
            source: A Source, or any iterable to wrap in one.
            stages: Initial stages for the pipeline.
            name: An optional name for the pipeline, used for logging.
        """
        self.source = as_source(source)
        self.stages: List[Stage] = []
        self.name = name or "Pipeline"
        self.logger = get_logger(f"stroom.pipeline.{self.name}")
        self._state = PipelineState.BUILDING
        # Stage counters as they stood when this pipeline started running.
        self._metrics_baseline: Optional[List[dict]] = None
        for stage_obj in stages or []:
            self.add(stage_obj)

    @classmethod
    def from_source(cls, source: Union[Source, Iterable[Any]], *, name: Optional[str] = None) -> "Pipeline":
        """Wraps a source in a new, empty pipeline."""
        return cls(source, name=name)

    @property
    def state(self) -> PipelineState:
        return self._state

    def _ensure_building(self) -> None:
        if self._state is PipelineState.RUNNING:
            raise PipelineStateError("pipeline is running; stages cannot be added")
        if self._state is PipelineState.CONSUMED:
            raise PipelineStateError()

    def add(self, other: Stage) -> "Pipeline":
        """Appends a stage to this pipeline.

        This method allows for a fluent, chainable interface for building
        pipelines. It modifies the pipeline in-place and returns it.

        Raises:
            TypeError: If the object being added is not a `Stage`.
            PipelineStateError: If the pipeline is running or consumed.
        """
        if not isinstance(other, Stage):
            raise TypeError(f"Unsupported type for pipeline composition: {type(other)}")
        self._ensure_building()
        self.stages.append(other)
        return self

    def __or__(self, other: Stage) -> "Pipeline":
        """Composes this pipeline with a stage using the `|` operator.

        The returned pipeline takes over this pipeline's source and stages;
        this pipeline becomes consumed, so the source keeps a single owner.
        """
        if not isinstance(other, Stage):
            raise TypeError(f"Unsupported type for pipeline composition: {type(other)}")
        self._ensure_building()
        self._state = PipelineState.CONSUMED
        return Pipeline(self.source, self.stages + [other], name=self.name)

    def __rshift__(self, other: Stage) -> "Pipeline":
        """Provides an alternative `>>` operator for pipeline composition."""
        return self.__or__(other)

    # --- Fluent stage methods ---

    def filter(self, predicate: Callable[[Any], bool]) -> "Pipeline":
        return self.add(filter_(predicate))

    def map(self, func: Callable[[Any], Any]) -> "Pipeline":
        return self.add(map_(func))

    def flat_map(self, func: Callable[[Any], Iterable[Any]]) -> "Pipeline":
        return self.add(_flat_map(func))

    def peek(self, action: Callable[[Any], Any]) -> "Pipeline":
        return self.add(_peek(action))

    def sorted(self, key: Optional[Callable[[Any], Any]] = None, *, reverse: bool = False) -> "Pipeline":
        return self.add(sorted_(key, reverse=reverse))

    def distinct(self, key: Optional[Callable[[Any], Any]] = None) -> "Pipeline":
        return self.add(_distinct(key))

    def limit(self, n: int) -> "Pipeline":
        return self.add(_limit(n))

    def skip(self, n: int) -> "Pipeline":
        return self.add(_skip(n))

    # --- Evaluation ---

    def _validate(self) -> None:
        """Rejects barrier stages that would wait forever on an endless upstream.

        Sources of unknown finiteness are let through; a barrier over an
        iterator that never ends will then block, as `list()` on it would.
        """
        bounded = self.source.finite
        for stage_obj in self.stages:
            if stage_obj.requires_finite_upstream and bounded is False:
                raise MisconfigurationError(
                    stage_obj,
                    f"it must consume its whole upstream, but source '{self.source.name}' is infinite",
                )
            if stage_obj.bounding:
                bounded = True

    def _build_stream(self) -> Iterator[Any]:
        runner = SerialRunner()
        stream: Iterator[Any] = self.source.open()
        for stage_obj in self.stages:
            stream = runner.run(stage_obj, stream)
        return stream

    def run(self, terminal: Union[Terminal, Callable[[Any], Any]]) -> Any:
        """Drives the pipeline to completion with a terminal action.

        Elements are pulled one at a time and handed to `terminal.accept`
        until the stream is exhausted or `accept` returns `STOP`. Errors from
        stages or from the terminal propagate unchanged and stop evaluation.

        Args:
            terminal: A `Terminal`, or a plain callable invoked once per element.

        Returns:
            The terminal's result (None for a plain for-each callable).

        Raises:
            PipelineStateError: If the pipeline was already run.
            MisconfigurationError: If a barrier stage sits over an infinite source.
        """
        if self._state is not PipelineState.BUILDING:
            raise PipelineStateError()
        terminal = as_terminal(terminal)
        self._state = PipelineState.RUNNING
        self._metrics_baseline = [dict(s.metrics) for s in self.stages]

        self.logger.info(
            "pipeline_run_started",
            terminal=terminal.name,
            stages=[s.name for s in self.stages],
        )
        start_time = time.perf_counter()
        emitted = 0
        stopped_early = False
        stream: Optional[Iterator[Any]] = None

        try:
            self._validate()
            stream = self._build_stream()
            for item in stream:
                emitted += 1
                if terminal.accept(item) is STOP:
                    stopped_early = True
                    break
            return terminal.result()
        finally:
            if stream is not None:
                stream.close()
            self.source.close()
            self._state = PipelineState.CONSUMED
            self.logger.info(
                "pipeline_run_finished",
                pulled=self.source.pulled,
                emitted=emitted,
                stopped_early=stopped_early,
                duration=round(time.perf_counter() - start_time, 4),
            )

    # --- Terminal methods ---

    def for_each(self, action: Callable[[Any], Any]) -> None:
        """Calls `action` on every element. `action` may return `STOP` to end early."""
        self.run(action)

    def collect(self, factory: Callable[[list], Any] = list) -> Any:
        """Collects every element, into a list unless another `factory` is given."""
        return self.run(Collect(factory))

    def to_list(self) -> List[Any]:
        return self.run(Collect())

    def reduce(self, func: Callable[[Any, Any], Any], initial: Any = MISSING) -> Any:
        return self.run(Reduce(func, initial))

    def count(self) -> int:
        return self.run(Count())

    def find_first(self, default: Any = None) -> Any:
        return self.run(FindFirst(default))

    def any_match(self, predicate: Callable[[Any], bool]) -> bool:
        return self.run(AnyMatch(predicate))

    def all_match(self, predicate: Callable[[Any], bool]) -> bool:
        return self.run(AllMatch(predicate))

    def none_match(self, predicate: Callable[[Any], bool]) -> bool:
        return self.run(NoneMatch(predicate))

    @property
    def metrics(self) -> dict[str, Any]:
        """Per-stage counters for this pipeline's run only.

        Stages keep running totals across every pipeline they take part in,
        so the totals are reported relative to their values when `run` began.
        Before the pipeline runs, every counter reads zero.
        """
        stage_metrics = []
        for i, s in enumerate(self.stages):
            baseline = self._metrics_baseline[i] if self._metrics_baseline is not None else s.metrics
            counters = {key: value - baseline.get(key, 0) for key, value in s.metrics.items()}
            stage_metrics.append({"name": s.name, **counters})
        return {"pulled": self.source.pulled, "stages": stage_metrics}

    def __repr__(self) -> str:
        stage_names = " | ".join(s.name for s in self.stages)
        return (
            f"Pipeline(name='{self.name}', source='{self.source.name}', "
            f"stages=[{stage_names}], state='{self._state.value}')"
        )


def from_source(source: Union[Source, Iterable[Any]], *, name: Optional[str] = None) -> Pipeline:
    """Wraps a source in a new pipeline. Nothing is pulled until it runs."""
    return Pipeline.from_source(source, name=name)


def add_stage(pipeline: Pipeline, stage_obj: Stage) -> Pipeline:
    """Appends a stage to `pipeline` and returns it."""
    return pipeline.add(stage_obj)


def run(pipeline: Pipeline, terminal: Union[Terminal, Callable[[Any], Any]]) -> Any:
    """Drives `pipeline` to completion with `terminal` and returns its result."""
    return pipeline.run(terminal)
