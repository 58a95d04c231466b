"""Value expressions: small computed values for verb variables, costs, and effects.

A value expression is any callable taking an ExecutionContext. Non-callable
values passed where an expression is expected are treated as constants.

Usage:
    SetProperty("tapped", const(True))
    IncrementProperty("damage_marked", var("amount"))
    SetProperty("life", prop("life", of=source_ref()), target=target_ref(1))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gamekb.core.verb.models import ValueExpr

if TYPE_CHECKING:
    from gamekb.core.verb.context import ExecutionContext


def evaluate(expr: ValueExpr | Any, ctx: ExecutionContext) -> Any:
    """Evaluate an expression, or return a non-callable constant unchanged."""
    return expr(ctx) if callable(expr) else expr


def const(value: Any) -> ValueExpr:
    """Expression that always yields value."""

    def _const(ctx: ExecutionContext) -> Any:
        return value

    return _const


def var(name: str, default: Any = None) -> ValueExpr:
    """Expression reading a bound variable."""

    def _var(ctx: ExecutionContext) -> Any:
        return ctx.var(name, default)

    return _var


def source_ref() -> ValueExpr:
    """Expression yielding the verb's source instance."""

    def _source(ctx: ExecutionContext) -> Any:
        return ctx.source

    return _source


def target_ref(index: int = 0) -> ValueExpr:
    """Expression yielding the bound target at index.

    Raises:
        LookupError: At evaluation time if fewer targets are bound.
    """

    def _target(ctx: ExecutionContext) -> Any:
        return ctx.target(index)

    return _target


def prop(path: str, of: ValueExpr | None = None) -> ValueExpr:
    """Expression reading a property path of an instance (default: first target)."""

    def _prop(ctx: ExecutionContext) -> Any:
        instance = evaluate(of, ctx) if of is not None else ctx.require_single_target()
        return ctx.read(instance, path)

    return _prop
