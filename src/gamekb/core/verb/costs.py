"""Built-in verb costs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gamekb.core.errors import UnknownPropertyError
from gamekb.core.verb.expressions import evaluate, source_ref
from gamekb.core.verb.models import ValueExpr

if TYPE_CHECKING:
    from gamekb.core.verb.context import ExecutionContext


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class TapSource:
    """Tap the acting instance. Payable only while it is untapped."""

    path: str = "tapped"

    def can_pay(self, ctx: ExecutionContext) -> bool:
        try:
            return ctx.read(ctx.source, self.path) is False
        except UnknownPropertyError:
            return False

    def apply(self, ctx: ExecutionContext) -> None:
        ctx.change(ctx.source, self.path, True)

    def preview(self, ctx: ExecutionContext) -> None:
        return None


@dataclass(frozen=True, slots=True)
class PayProperty:
    """Spend amount from a numeric property (life, mana, loyalty)."""

    path: str
    amount: ValueExpr | Any
    payer: ValueExpr = field(default_factory=source_ref)

    def _balance(self, ctx: ExecutionContext) -> Any:
        return ctx.read(evaluate(self.payer, ctx), self.path)

    def can_pay(self, ctx: ExecutionContext) -> bool:
        try:
            balance = self._balance(ctx)
        except UnknownPropertyError:
            return False
        amount = evaluate(self.amount, ctx)
        if not _is_number(balance) or not _is_number(amount):
            return False
        return balance >= amount

    def apply(self, ctx: ExecutionContext) -> None:
        payer = evaluate(self.payer, ctx)
        ctx.change(payer, self.path, self._balance(ctx) - evaluate(self.amount, ctx))

    def preview(self, ctx: ExecutionContext) -> None:
        return None
