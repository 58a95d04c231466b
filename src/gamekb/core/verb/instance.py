"""Verb instances: one bound, applicable, undoable occurrence of a verb."""

from __future__ import annotations

import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import structlog

from gamekb.core.verb.context import ExecutionContext
from gamekb.core.verb.models import PreviewChange, PropertyChange

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance
    from gamekb.core.verb.definition import VerbDefinition
    from gamekb.world.knowledge_base import KnowledgeBase

logger = structlog.get_logger(__name__)


@dataclass(slots=True, eq=False)
class VerbInstance:
    """A verb bound to a source, targets, and resolved variables.

    Lifecycle: bound -> applied (executed) or fizzled -> undone (back to
    bound). Applying twice is a no-op. Every write made while applying is
    recorded so `undo` restores the exact prior state.
    """

    definition: VerbDefinition
    source: EntityInstance
    targets: tuple[EntityInstance, ...]
    variables: Mapping[str, Any]
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)
    executed: bool = False
    countered: bool = False
    replaced: bool = False
    fizzled: bool = False
    _undo_log: list[PropertyChange] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.variables = MappingProxyType(dict(self.variables))

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def changes(self) -> tuple[PropertyChange, ...]:
        return tuple(self._undo_log)

    def _context(self, kb: KnowledgeBase | None, preview: bool = False) -> ExecutionContext:
        return ExecutionContext(
            kb,
            self.source,
            self.targets,
            variables=self.variables,
            undo_log=self._undo_log,
            preview=preview,
        )

    def apply(self, kb: KnowledgeBase | None = None) -> bool:
        """Pay costs, then run effects.

        Returns:
            True if this call executed the verb. False if it was already
            executed or fizzled because a cost could not be paid.

        Raises:
            Exception: Whatever an effect or cost raised, after every write
                made during this call has been rolled back.
        """
        if self.executed:
            return False

        ctx = self._context(kb)
        if not all(cost.can_pay(ctx) for cost in self.definition.costs):
            self.fizzled = True
            logger.debug("verb_fizzled", verb=self.name, verb_id=self.id)
            return False

        try:
            for cost in self.definition.costs:
                cost.apply(ctx)
            for effect in self.definition.effects:
                effect.apply(ctx)
        except Exception:
            logger.warning(
                "verb_rolled_back", verb=self.name, verb_id=self.id, writes=len(self._undo_log)
            )
            self._rollback()
            raise

        self.executed = True
        self.fizzled = False
        return True

    def _rollback(self) -> None:
        for change in reversed(self._undo_log):
            change.revert()
        self._undo_log.clear()

    def undo(self) -> None:
        """Restore every written path in reverse order and reset the flags."""
        self._rollback()
        self.executed = False
        self.fizzled = False

    def preview(self, kb: KnowledgeBase | None = None) -> list[PreviewChange]:
        """Changes the effects would make, without writing or paying costs."""
        ctx = self._context(kb, preview=True)
        for effect in self.definition.effects:
            effect.preview(ctx)
        return list(ctx.previewed)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "verb": self.name,
            "source": self.source.object_id,
            "targets": [target.object_id for target in self.targets],
            "variables": {key: _describe(value) for key, value in self.variables.items()},
            "executed": self.executed,
            "countered": self.countered,
            "replaced": self.replaced,
            "fizzled": self.fizzled,
            "timestamp": self.timestamp,
        }


def _describe(value: Any) -> Any:
    object_id = getattr(value, "object_id", None)
    return object_id if isinstance(object_id, str) else value
