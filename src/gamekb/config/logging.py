"""structlog configuration for gamekb.

Two output modes:
- Human (default): colored console output to stderr
- JSON: structured JSON lines to stderr

Every gamekb record carries a `component` field ("world", "events",
"core.verb", ...) taken from its logger name. Levels can be raised or
lowered per component, e.g. to trace ingestion without verb chatter:

    configure_logging(module_levels={"events": "DEBUG", "core.verb": "WARNING"})

Records logged while an event is being ingested also carry `event_kind`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

import structlog
from structlog.typing import EventDict, WrappedLogger

from gamekb.config.settings import LoggingSettings

ROOT_LOGGER = "gamekb"


def _add_component(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    name = event_dict.get("logger") or ""
    prefix = ROOT_LOGGER + "."
    if name.startswith(prefix):
        event_dict.setdefault("component", name[len(prefix) :])
    return event_dict


def _resolve_level(name: str, level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r} for {name!r}")
    return resolved


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    module_levels: Mapping[str, str | int] | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        module_levels: Per-component overrides, keyed by the logger name
            below `gamekb` ("events", "world.knowledge_base").

    Raises:
        ValueError: If a module level is not a known level name.
    """
    overrides = {
        f"{ROOT_LOGGER}.{name}": _resolve_level(name, level)
        for name, level in (module_levels or {}).items()
    }

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_component,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in overrides.items():
        logging.getLogger(name).setLevel(level)


def configure_from_settings(settings: LoggingSettings | None = None) -> None:
    """Configure logging from GAMEKB_LOG_* environment settings."""
    settings = settings or LoggingSettings()
    configure_logging(
        verbose=settings.verbose,
        log_json=settings.json_output,
        module_levels=settings.module_levels,
    )
