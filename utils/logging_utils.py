import logging
import structlog
from structlog.stdlib import add_log_level, add_logger_name

LOG_FORMATS = ("console", "json")


def setup_logging(level: int = logging.INFO, fmt: str = "console") -> None:
    """Configure structlog and standard logging with the given level.

    ``fmt`` selects the coloured console renderer or one JSON object per line.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {fmt}")
    logging.basicConfig(level=level, format="%(message)s")
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
