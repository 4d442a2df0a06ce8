# stroom: lazy, composable sequence pipelines.
# __init__.py for the main package

# Import key components to the top-level namespace for easier access
from .core.pipeline import Pipeline, PipelineState, add_stage, from_source, run
from .core.source import Source
from .core.stage import Stage, stage, aggregator_stage
from .core.terminal import (
    STOP,
    Terminal,
    ForEach,
    Reduce,
    Collect,
    Count,
    FindFirst,
    AnyMatch,
    AllMatch,
    NoneMatch,
)
from .core.errors import StroomError, PipelineStateError, MisconfigurationError
from .components import (
    distinct,
    filter_,
    flat_map,
    map_,
    peek,
    limit,
    skip,
    sorted_,
)


def of(*values):
    """Shortcut for `from_source(Source.of(*values))`."""
    return from_source(Source.of(*values))


__all__ = [
    # Core API
    "Pipeline",
    "PipelineState",
    "from_source",
    "add_stage",
    "run",
    "of",
    "Source",
    "Stage",
    "stage",
    "aggregator_stage",

    # Terminal actions
    "STOP",
    "Terminal",
    "ForEach",
    "Reduce",
    "Collect",
    "Count",
    "FindFirst",
    "AnyMatch",
    "AllMatch",
    "NoneMatch",

    # Errors
    "StroomError",
    "PipelineStateError",
    "MisconfigurationError",

    # Components
    "distinct",
    "filter_",
    "flat_map",
    "map_",
    "peek",
    "limit",
    "skip",
    "sorted_",
]

__version__ = "0.1.0"
