"""Verb definitions: immutable templates for actions.

Usage:
    tap = (
        VerbBuilder("Tap")
        .description("Tap a permanent")
        .add_target(TargetSpec(filter=lambda c: c.get_property("zone") == "Battlefield"))
        .add_effect(SetProperty("tapped", True))
        .build()
    )
    if tap.is_available(player, [card], kb):
        tap.bind(player, [card], kb).apply(kb)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

import structlog

from gamekb.core.errors import SchemaError
from gamekb.core.verb.context import ExecutionContext
from gamekb.core.verb.expressions import evaluate
from gamekb.core.verb.models import Cost, Effect, Requirement, TargetSpec, ValueExpr

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance
    from gamekb.core.verb.instance import VerbInstance
    from gamekb.world.knowledge_base import KnowledgeBase

logger = structlog.get_logger(__name__)


def match_targets(specs: Sequence[TargetSpec], candidates: Sequence[EntityInstance]) -> bool:
    """Positional greedy matching with a single forward cursor.

    Each spec consumes candidates while they match, up to its max. A rejected
    candidate ends the current spec and is offered to the next one; it is
    never reconsidered by an earlier spec. Candidates left over after the
    last spec are ignored.
    """
    cursor = 0
    for spec in specs:
        accepted = 0
        while accepted < spec.max and cursor < len(candidates):
            if not spec.accepts(candidates[cursor]):
                break
            accepted += 1
            cursor += 1
        if accepted < spec.min:
            return False
    return True


@dataclass(frozen=True, slots=True)
class VerbDefinition:
    """Immutable verb template.

    Attributes:
        name: Unique verb name within a knowledge base.
        description: Human-readable summary.
        category: Free-form grouping ("state", "zone", "combat").
        prerequisites: Requirements on the source.
        targets: Target specs matched positionally.
        costs: Paid in order before effects.
        effects: Applied in order.
        variables: Named expressions resolved at bind time, in order.
        metadata: Extra descriptive data.
    """

    name: str
    description: str = ""
    category: str = ""
    prerequisites: tuple[Requirement, ...] = ()
    targets: tuple[TargetSpec, ...] = ()
    costs: tuple[Cost, ...] = ()
    effects: tuple[Effect, ...] = ()
    variables: tuple[tuple[str, ValueExpr], ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def resolve_variables(
        self,
        kb: KnowledgeBase | None,
        source: EntityInstance,
        targets: Sequence[EntityInstance],
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Evaluate variables in declaration order, each seeing earlier ones.

        Caller params are bound first, so declared variables can read them.
        """
        resolved: dict[str, Any] = dict(params or {})
        ctx = ExecutionContext(kb, source, targets, variables=resolved, preview=True)
        for name, expr in self.variables:
            resolved[name] = evaluate(expr, ctx)
        return resolved

    def is_available(
        self,
        source: EntityInstance,
        candidates: Sequence[EntityInstance],
        kb: KnowledgeBase | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> bool:
        """True if prerequisites hold, targets match, and every cost is payable.

        Never raises for an unavailable verb; availability is a plain bool.
        """
        if not all(req.is_satisfied(source) for req in self.prerequisites):
            return False
        if not match_targets(self.targets, candidates):
            return False
        if not self.costs:
            return True
        try:
            variables = self.resolve_variables(kb, source, candidates, params)
            ctx = ExecutionContext(kb, source, candidates, variables=variables, preview=True)
            return all(cost.can_pay(ctx) for cost in self.costs)
        except (LookupError, TypeError, ValueError, SchemaError) as exc:
            logger.debug("verb_unavailable", verb=self.name, reason=str(exc))
            return False

    def bind(
        self,
        source: EntityInstance,
        targets: Sequence[EntityInstance],
        kb: KnowledgeBase | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> VerbInstance:
        """Create a VerbInstance with variables resolved against source and targets."""
        from gamekb.core.verb.instance import VerbInstance

        return VerbInstance(
            definition=self,
            source=source,
            targets=tuple(targets),
            variables=self.resolve_variables(kb, source, targets, params),
        )

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "prerequisites": [req.description or req.path for req in self.prerequisites],
            "targets": [
                {"class_name": spec.class_name, "min": spec.min, "max": spec.max}
                for spec in self.targets
            ],
            "costs": [type(cost).__name__ for cost in self.costs],
            "effects": [type(effect).__name__ for effect in self.effects],
            "variables": [name for name, _ in self.variables],
            "metadata": dict(self.metadata),
        }


class VerbBuilder:
    """Fluent builder for VerbDefinition."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._description = ""
        self._category = ""
        self._prerequisites: list[Requirement] = []
        self._targets: list[TargetSpec] = []
        self._costs: list[Cost] = []
        self._effects: list[Effect] = []
        self._variables: dict[str, ValueExpr] = {}
        self._metadata: dict[str, Any] = {}

    def description(self, text: str) -> Self:
        self._description = text
        return self

    def category(self, category: str) -> Self:
        self._category = category
        return self

    def require(self, requirement: Requirement) -> Self:
        self._prerequisites.append(requirement)
        return self

    def add_target(self, spec: TargetSpec) -> Self:
        self._targets.append(spec)
        return self

    def add_cost(self, cost: Cost) -> Self:
        self._costs.append(cost)
        return self

    def add_effect(self, effect: Effect) -> Self:
        self._effects.append(effect)
        return self

    def add_variable(self, name: str, expr: ValueExpr) -> Self:
        """Declare a variable. Redeclaring a name keeps its original position."""
        self._variables[name] = expr
        return self

    def put_meta(self, key: str, value: Any) -> Self:
        self._metadata[key] = value
        return self

    def build(self) -> VerbDefinition:
        if not self._name:
            raise ValueError("Verb name must not be empty")
        return VerbDefinition(
            name=self._name,
            description=self._description,
            category=self._category,
            prerequisites=tuple(self._prerequisites),
            targets=tuple(self._targets),
            costs=tuple(self._costs),
            effects=tuple(self._effects),
            variables=tuple(self._variables.items()),
            metadata=MappingProxyType(dict(self._metadata)),
        )
