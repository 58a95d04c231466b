"""Verb engine: definitions, bound instances, costs, effects, and expressions."""

from gamekb.core.verb.context import ExecutionContext
from gamekb.core.verb.costs import PayProperty, TapSource
from gamekb.core.verb.definition import VerbBuilder, VerbDefinition, match_targets
from gamekb.core.verb.effects import EmitEvent, IncrementProperty, MoveZone, SetProperty
from gamekb.core.verb.expressions import const, evaluate, prop, source_ref, target_ref, var
from gamekb.core.verb.instance import VerbInstance
from gamekb.core.verb.models import (
    Cost,
    Effect,
    PreviewChange,
    PropertyChange,
    Requirement,
    TargetSpec,
    ValueExpr,
)

__all__ = [
    # Models
    "Cost",
    "Effect",
    "PreviewChange",
    "PropertyChange",
    "Requirement",
    "TargetSpec",
    "ValueExpr",
    # Expressions
    "const",
    "evaluate",
    "prop",
    "source_ref",
    "target_ref",
    "var",
    # Execution
    "ExecutionContext",
    "VerbBuilder",
    "VerbDefinition",
    "VerbInstance",
    "match_targets",
    # Built-ins
    "EmitEvent",
    "IncrementProperty",
    "MoveZone",
    "PayProperty",
    "SetProperty",
    "TapSource",
]
