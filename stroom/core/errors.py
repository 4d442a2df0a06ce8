from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .stage import Stage


class StroomError(Exception):
    """Base class for all exceptions raised by the stroom package."""
    pass


class PipelineStateError(StroomError):
    """Raised when a consumed (or running) pipeline is extended or run again."""

    def __init__(self, message: str = "pipeline already consumed"):
        super().__init__(message)


class MisconfigurationError(StroomError):
    """Raised when a barrier stage sits over an infinite upstream with no bounding stage."""

    def __init__(self, stage: "Stage", message: str):
        self.stage = stage
        self.message = message
        super().__init__(
            f"Stage '{stage.name}' cannot run: {message}\n"
            f"  - Stage type of '{stage.name}': {stage.stage_type}\n"
            f"  - Add a bounding stage such as limit(n) before it."
        )
