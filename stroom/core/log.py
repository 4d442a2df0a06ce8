import logging
import sys
from typing import Optional

import structlog

_FALLBACK_HANDLER = "stroom_fallback_handler"
_configured = False


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever `sys.stderr` is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def _renderer(name: str):
    if name == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(level: Optional[str] = None, renderer: str = "json", *, force: bool = False) -> None:
    """
    Configures structlog to produce JSON (or console) logs via stdlib.

    Called lazily by `get_logger`. Applications that configured structlog
    themselves are left alone unless `force` is set, which the CLI uses to
    apply the level and renderer from its config file.
    """
    global _configured
    if structlog.is_configured() and not force:
        _configured = True
        return

    log_level = getattr(logging, (level or "WARNING").upper(), logging.WARNING)

    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.set_name(_FALLBACK_HANDLER)

    root_logger = logging.getLogger()
    # Avoid adding duplicate handlers
    if _FALLBACK_HANDLER not in [h.get_name() for h in root_logger.handlers]:
        root_logger.addHandler(handler)
    logging.getLogger("stroom").setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(renderer),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Returns a structlog logger for the given name.

    The logger is integrated with the standard library's logging system, so
    levels and handlers set on `logging.getLogger("stroom")` apply to it.
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
