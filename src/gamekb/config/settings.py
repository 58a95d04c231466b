"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from gamekb.config import KnowledgeBaseSettings, LoggingSettings

    # Load from environment variables (GAMEKB_*, GAMEKB_LOG_*)
    kb_settings = KnowledgeBaseSettings()
    log_settings = LoggingSettings()

    # Or override with explicit values
    kb_settings = KnowledgeBaseSettings(event_log_limit=500, archive_removed=False)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class KnowledgeBaseSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a KnowledgeBase.

    Attributes:
        event_log_limit: Maximum events kept by the default in-memory log.
        verb_history_limit: Maximum verb instances kept in history.
        auto_register_cards: Register a generic card schema for unknown
            card classes during ingestion instead of failing the event.
        archive_removed: Keep removed instances in an archive.

    Environment Variables:
        GAMEKB_EVENT_LOG_LIMIT
        GAMEKB_VERB_HISTORY_LIMIT
        GAMEKB_AUTO_REGISTER_CARDS
        GAMEKB_ARCHIVE_REMOVED
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMEKB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    event_log_limit: int = Field(default=10_000, ge=1)
    verb_history_limit: int = Field(default=10_000, ge=1)
    auto_register_cards: bool = True
    archive_removed: bool = True


class LoggingSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for structlog output.

    Attributes:
        verbose: Emit DEBUG records from gamekb loggers (otherwise WARNING+).
        json_output: Render JSON lines instead of console output.
        module_levels: Per-component level overrides, e.g. {"events": "DEBUG"}.
            Read from the environment as a JSON object.

    Environment Variables:
        GAMEKB_LOG_VERBOSE
        GAMEKB_LOG_JSON_OUTPUT
        GAMEKB_LOG_MODULE_LEVELS
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMEKB_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    verbose: bool = False
    json_output: bool = False
    module_levels: dict[str, str] = Field(default_factory=dict)
