"""Built-in verb effects.

Every effect writes through ExecutionContext.change, so each write is undoable
and visible to preview. Preview runs the same code against a preview context.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gamekb.core.verb.expressions import evaluate, target_ref
from gamekb.core.verb.models import ValueExpr

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance
    from gamekb.core.verb.context import ExecutionContext


def _subject(target: ValueExpr | None, ctx: ExecutionContext) -> EntityInstance:
    return evaluate(target, ctx) if target is not None else ctx.require_single_target()


def _as_number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


@dataclass(frozen=True, slots=True)
class SetProperty:
    """Set a property path on the target (first bound target by default)."""

    path: str | ValueExpr
    value: ValueExpr | Any
    target: ValueExpr | None = None

    def apply(self, ctx: ExecutionContext) -> None:
        ctx.change(_subject(self.target, ctx), evaluate(self.path, ctx), evaluate(self.value, ctx))

    def preview(self, ctx: ExecutionContext) -> None:
        self.apply(ctx)


@dataclass(frozen=True, slots=True)
class IncrementProperty:
    """Add delta to a numeric property path.

    A non-numeric or absent current value counts as zero. Integer plus
    integer stays an integer.
    """

    path: str | ValueExpr
    delta: ValueExpr | Any = 1
    target: ValueExpr | None = None

    def apply(self, ctx: ExecutionContext) -> None:
        subject = _subject(self.target, ctx)
        path = evaluate(self.path, ctx)
        current = _as_number(ctx.read(subject, path))
        ctx.change(subject, path, current + _as_number(evaluate(self.delta, ctx)))

    def preview(self, ctx: ExecutionContext) -> None:
        self.apply(ctx)


@dataclass(frozen=True, slots=True)
class MoveZone:
    """Move an instance to another zone by writing its zone property."""

    to_zone: ValueExpr | Any
    subject: ValueExpr = field(default_factory=target_ref)
    path: str = "zone"

    def apply(self, ctx: ExecutionContext) -> None:
        ctx.change(evaluate(self.subject, ctx), self.path, evaluate(self.to_zone, ctx))

    def preview(self, ctx: ExecutionContext) -> None:
        self.apply(ctx)


@dataclass(frozen=True, slots=True)
class EmitEvent:
    """Record a structured event in the knowledge base's event log."""

    event_type: str
    payload: Mapping[str, ValueExpr | Any] = field(default_factory=dict)

    def apply(self, ctx: ExecutionContext) -> None:
        ctx.emit(self.event_type, {key: evaluate(expr, ctx) for key, expr in self.payload.items()})

    def preview(self, ctx: ExecutionContext) -> None:
        # Events are never emitted from a preview.
        return None
