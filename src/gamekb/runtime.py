"""Process-wide knowledge base handle for hosts that want one shared instance.

Library code takes a KnowledgeBase explicitly; this module only exists for
applications that wire one up at startup.

Usage:
    kb = init_knowledge_base(with_catalog=True)
    ...
    kb = get_knowledge_base()
"""

from __future__ import annotations

import threading

import structlog

from gamekb.catalog import register_common_verbs, register_core_schemas
from gamekb.config.settings import KnowledgeBaseSettings
from gamekb.world.knowledge_base import KnowledgeBase

logger = structlog.get_logger(__name__)

_lock = threading.Lock()
_knowledge_base: KnowledgeBase | None = None


def init_knowledge_base(
    settings: KnowledgeBaseSettings | None = None,
    *,
    with_catalog: bool = True,
    replace: bool = False,
) -> KnowledgeBase:
    """Create the shared knowledge base.

    Args:
        settings: Settings for the new knowledge base.
        with_catalog: Register the core schemas and common verbs.
        replace: Discard an existing shared knowledge base.

    Raises:
        RuntimeError: If one already exists and replace is False.
    """
    global _knowledge_base
    with _lock:
        if _knowledge_base is not None and not replace:
            raise RuntimeError("Knowledge base already initialized; pass replace=True to reset it")
        kb = KnowledgeBase(settings)
        if with_catalog:
            register_core_schemas(kb)
            register_common_verbs(kb)
        _knowledge_base = kb
    logger.info("knowledge_base_initialized", with_catalog=with_catalog)
    return kb


def get_knowledge_base() -> KnowledgeBase:
    """Return the shared knowledge base, creating a bare one on first use."""
    global _knowledge_base
    if _knowledge_base is None:
        with _lock:
            if _knowledge_base is None:
                _knowledge_base = KnowledgeBase()
    return _knowledge_base


def reset_knowledge_base() -> None:
    """Drop the shared knowledge base (tests and host restarts)."""
    global _knowledge_base
    with _lock:
        _knowledge_base = None
