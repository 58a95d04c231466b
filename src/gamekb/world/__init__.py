"""World: the stateful knowledge base and its snapshots."""

from gamekb.world.knowledge_base import KnowledgeBase
from gamekb.world.snapshot import StateSnapshot

__all__ = [
    "KnowledgeBase",
    "StateSnapshot",
]
