"""Query condition models.

Usage:
    Condition("zone", ConditionOperator.EQ, "Battlefield")
    Condition("power", ConditionOperator.GTE, 3)
    Condition("name", ConditionOperator.CONTAINS, "Dragon")
    Condition("controller", ConditionOperator.IN, {"player_1", "player_2"})
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConditionOperator(Enum):
    """Operators for single-property predicates."""

    EQ = "eq"  # equals
    NE = "ne"  # not equals
    GT = "gt"  # greater than
    GTE = "gte"  # greater than or equal
    LT = "lt"  # less than
    LTE = "lte"  # less than or equal
    CONTAINS = "contains"  # substring, or element of a list value
    IN = "in"  # in collection
    NIN = "nin"  # not in collection


def _compare(left: Any, right: Any, op: ConditionOperator) -> bool:
    try:
        if op is ConditionOperator.GT:
            return bool(left > right)
        if op is ConditionOperator.GTE:
            return bool(left >= right)
        if op is ConditionOperator.LT:
            return bool(left < right)
        return bool(left <= right)
    except TypeError:
        return False


def _member(item: Any, values: Any) -> bool:
    if not isinstance(values, Collection) or isinstance(values, str):
        return False
    try:
        return item in values
    except TypeError:
        return False


@dataclass(frozen=True, slots=True)
class Condition:
    """Predicate over one property's current value.

    Attributes:
        property_name: Property (or property path) to read.
        operator: Comparison operator.
        value: Operand compared against the property value.
    """

    property_name: str
    operator: ConditionOperator
    value: Any = None

    def evaluate(self, current: Any) -> bool:
        """Evaluate against a property's current value.

        A missing (None) property only matches EQ None. Ordering operators
        return False when the operands cannot be ordered against each other.
        """
        op = self.operator
        if current is None:
            return op is ConditionOperator.EQ and self.value is None

        match op:
            case ConditionOperator.EQ:
                return bool(current == self.value)
            case ConditionOperator.NE:
                return bool(current != self.value)
            case ConditionOperator.GT | ConditionOperator.GTE | ConditionOperator.LT | (
                ConditionOperator.LTE
            ):
                return _compare(current, self.value, op)
            case ConditionOperator.CONTAINS:
                if isinstance(current, str):
                    return isinstance(self.value, str) and self.value in current
                if isinstance(current, (list, tuple, set, frozenset)):
                    return _member(self.value, current)
                return False
            case ConditionOperator.IN:
                return _member(current, self.value)
            case ConditionOperator.NIN:
                return isinstance(self.value, Collection) and not _member(current, self.value)
        return False
