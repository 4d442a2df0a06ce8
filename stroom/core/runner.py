from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Iterable, Iterator

if TYPE_CHECKING:
    from .stage import Stage


class SerialRunner:
    """
    Applies stages to an upstream iterator, sequentially, in the caller's thread.

    Every method returns a lazy generator: nothing is pulled from upstream
    until the terminal action asks for the next element.
    """

    def run(self, stage: "Stage", iterable: Iterable[Any]) -> Iterator[Any]:
        """
        Chains the stage onto `iterable`. Delegates on the stage type.
        """
        if stage.stage_type == "aggregator":
            return self._run_aggregator(stage, iterable)
        if stage.stage_type == "streaming":
            return self._run_streaming(stage, iterable)
        return self._run_itemwise(stage, iterable)

    def _run_itemwise(self, stage: "Stage", iterable: Iterable[Any]) -> Iterator[Any]:
        """
        Processes items one by one: each upstream element is fully handled
        (and its outputs yielded) before the next one is pulled.
        """
        stage.logger.info("stream_started")
        total_items_in = 0
        total_items_out = 0
        stream_start_time = time.perf_counter()

        try:
            for item in iterable:
                total_items_in += 1
                stage.metrics["items_in"] += 1
                item_start_time = time.perf_counter()

                count_out = 0
                try:
                    for res in stage.func(item):
                        stage.metrics["items_out"] += 1
                        total_items_out += 1
                        count_out += 1
                        yield res
                except Exception as e:
                    stage.metrics["errors"] += 1
                    stage.logger.warning("item_error", item_in=total_items_in, error=str(e))
                    raise
                finally:
                    stage.metrics["time_total"] += time.perf_counter() - item_start_time

                stage.logger.debug("item_processed", item_in=total_items_in, items_out=count_out)
        finally:
            total_duration = time.perf_counter() - stream_start_time
            stage.logger.info(
                "stream_finished",
                items_in=total_items_in,
                items_out=total_items_out,
                errors=stage.metrics["errors"],
                duration=round(total_duration, 4),
            )

    def _run_streaming(self, stage: "Stage", iterable: Iterable[Any]) -> Iterator[Any]:
        """
        Hands the upstream iterator to a stateful stage that decides itself
        how far to read. A bounding stage may stop pulling early.
        """
        stage.logger.info("stream_started")
        start_time = time.perf_counter()
        counted = _Counted(iterable, stage)
        items_out = 0

        try:
            for res in stage.func(iter(counted)):
                stage.metrics["items_out"] += 1
                items_out += 1
                yield res
        except Exception as e:
            if not counted.upstream_failed:
                stage.metrics["errors"] += 1
                stage.logger.warning("item_error", item_in=counted.count, error=str(e))
            raise
        finally:
            duration = time.perf_counter() - start_time
            stage.metrics["time_total"] += duration
            stage.logger.info(
                "stream_finished",
                items_in=counted.count,
                items_out=items_out,
                errors=stage.metrics["errors"],
                duration=round(duration, 4),
            )

    def _run_aggregator(self, stage: "Stage", iterable: Iterable[Any]) -> Iterator[Any]:
        """
        Processes an entire iterable at once with structured logging.
        This implementation fully consumes the input stream before calling the
        aggregator function, then resumes per-element flow over its result.
        """
        stage.logger.info("aggregator_started")
        start_time = time.perf_counter()
        items_in = 0
        items_out = 0

        try:
            materialized_items = list(iterable)
            items_in = len(materialized_items)
            stage.metrics["items_in"] += items_in

            stage.logger.debug("aggregation_input_materialized", items_in=items_in)

            try:
                results = stage.func(materialized_items)
            except Exception as e:
                stage.metrics["errors"] += 1
                stage.logger.warning("aggregator_error", error=str(e))
                raise

            for res in results:
                stage.metrics["items_out"] += 1
                items_out += 1
                yield res
        finally:
            duration = time.perf_counter() - start_time
            stage.metrics["time_total"] += duration
            stage.logger.info(
                "aggregator_finished",
                items_in=items_in,
                items_out=items_out,
                errors=stage.metrics["errors"],
                duration=round(duration, 4),
            )


class _Counted:
    """Counts the elements a streaming stage pulls from its upstream."""

    def __init__(self, iterable: Iterable[Any], stage: "Stage"):
        self._iterable = iterable
        self._stage = stage
        self.count = 0
        self.upstream_failed = False

    def __iter__(self) -> Iterator[Any]:
        try:
            for item in self._iterable:
                self.count += 1
                self._stage.metrics["items_in"] += 1
                yield item
        except Exception:
            self.upstream_failed = True
            raise
