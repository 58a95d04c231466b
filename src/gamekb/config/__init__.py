"""Configuration module using Pydantic Settings and structlog.

Usage:
    from gamekb.config import KnowledgeBaseSettings, configure_logging

    settings = KnowledgeBaseSettings(verb_history_limit=200)
    configure_logging(verbose=True, log_json=True)
"""

from gamekb.config.logging import configure_from_settings, configure_logging
from gamekb.config.settings import KnowledgeBaseSettings, LoggingSettings

__all__ = [
    "KnowledgeBaseSettings",
    "LoggingSettings",
    "configure_from_settings",
    "configure_logging",
]
