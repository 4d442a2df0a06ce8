# stroom.components
# This package provides the built-in pipeline stages: the stateless
# filter/map/peek family and the stateful sort, distinct and slicing stages.

from .distinct import distinct
from .filter import filter_
from .map import flat_map, map_
from .peek import peek
from .slicing import limit, skip
from .sort import sorted_

__all__ = [
    "distinct",
    "filter_",
    "flat_map",
    "map_",
    "peek",
    "limit",
    "skip",
    "sorted_",
]
