# stroom.core
# This package contains the core classes of the stroom pipeline engine,
# such as Pipeline, Source, Stage and the terminal actions.

from .errors import MisconfigurationError, PipelineStateError, StroomError
from .pipeline import Pipeline, PipelineState, add_stage, from_source, run
from .source import Source
from .stage import Stage, aggregator_stage, stage
from .terminal import (
    STOP,
    AllMatch,
    AnyMatch,
    Collect,
    Count,
    FindFirst,
    ForEach,
    NoneMatch,
    Reduce,
    Terminal,
)

__all__ = [
    "Pipeline",
    "PipelineState",
    "from_source",
    "add_stage",
    "run",
    "Source",
    "Stage",
    "stage",
    "aggregator_stage",
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
    "StroomError",
    "PipelineStateError",
    "MisconfigurationError",
]
