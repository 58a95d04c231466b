"""Verb models: requirements, target specifications, and cost/effect protocols."""

from __future__ import annotations

import copy as cp
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from gamekb.core.errors import UnknownPropertyError
from gamekb.core.types import MISSING

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance
    from gamekb.core.verb.context import ExecutionContext

ValueExpr = Callable[["ExecutionContext"], Any]
"""Computed value evaluated against an execution context."""


@dataclass(frozen=True, slots=True)
class Requirement:
    """Predicate that must hold on the source's property before a verb is available.

    Attributes:
        path: Property name or "<map property>.<key>" path on the source.
        predicate: Called with the current value (None when unresolvable).
        description: Why the requirement exists, for UI and agents.
    """

    path: str
    predicate: Callable[[Any], bool]
    description: str = ""

    def is_satisfied(self, instance: EntityInstance) -> bool:
        try:
            value = instance.get_path(self.path)
        except UnknownPropertyError:
            value = None
        return bool(self.predicate(value))


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """Target selection contract: class, predicate, and cardinality.

    Attributes:
        class_name: Required class of the target. None accepts any class.
        filter: Optional predicate on the candidate instance.
        min: Minimum number of targets consumed by this spec.
        max: Maximum number of targets consumed by this spec.
    """

    class_name: str | None = None
    filter: Callable[[EntityInstance], bool] | None = None
    min: int = 1
    max: int = 1

    def __post_init__(self) -> None:
        if self.min < 0 or self.max < self.min:
            raise ValueError(f"Invalid target cardinality [{self.min}, {self.max}]")

    def accepts(self, candidate: EntityInstance) -> bool:
        if self.class_name is not None and candidate.class_name != self.class_name:
            return False
        return self.filter is None or bool(self.filter(candidate))


@runtime_checkable
class Cost(Protocol):
    """Something that must be paid before a verb's effects run."""

    def can_pay(self, ctx: ExecutionContext) -> bool: ...

    def apply(self, ctx: ExecutionContext) -> None: ...

    def preview(self, ctx: ExecutionContext) -> None: ...


@runtime_checkable
class Effect(Protocol):
    """A state change performed when a verb executes."""

    def apply(self, ctx: ExecutionContext) -> None: ...

    def preview(self, ctx: ExecutionContext) -> None: ...


@dataclass(frozen=True, slots=True)
class PropertyChange:
    """Undo-log entry: the value a path held before a verb wrote to it."""

    instance: EntityInstance
    path: str
    previous: Any

    def revert(self) -> None:
        if self.previous is MISSING:
            self.instance.remove_path(self.path)
        else:
            self.instance.set_path(self.path, cp.deepcopy(self.previous))


@dataclass(frozen=True, slots=True)
class PreviewChange:
    """A write that would happen if the verb were applied."""

    object_id: str
    path: str
    previous: Any
    proposed: Any


