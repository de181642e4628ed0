"""Structured logging setup for gp-publisher (structlog, stderr output)."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Final

import structlog

from gp_publisher.config.schema import LOG_FORMATS

_DEFAULT_LOGGER_NAME: Final[str] = "gp_publisher"


def resolve_level(level: int | str) -> int:
    """Translate a level name or number into a stdlib logging level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: int | str = "WARNING",
    fmt: str = "console",
    *,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog process-wide.

    Events go to ``stream`` (stderr by default) so command output on stdout
    stays machine-readable.
    """

    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format: {fmt!r}")

    output = stream if stream is not None else sys.stderr
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = _DEFAULT_LOGGER_NAME) -> Any:
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
