"""Domain models: value constraints for property cells.

Domains form a closed set of kinds. Each kind is an immutable dataclass that
validates candidate values without side effects, except ReferenceDomain which
consults the knowledge base to resolve identifiers.

Usage:
    life = IntDomain(min=-1000, max=1000)
    life.is_valid(20)  # True

    zone = EnumDomain({"Hand", "Library", "Battlefield"})
    counters = MapDomain(key_domain=TextDomain(min_length=1), value_domain=IntDomain(min=0))
"""

from __future__ import annotations

import math
import re
from collections.abc import Collection, Hashable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

ID_PATTERN = r"[A-Za-z][A-Za-z0-9_:.\-]*"
"""Shape of an instance identifier accepted by ReferenceDomain."""


class DomainKind(Enum):
    """Tag identifying each domain variant."""

    BOOLEAN = auto()
    INT = auto()
    REAL = auto()
    ENUM = auto()
    TEXT = auto()
    LIST = auto()
    MAP = auto()
    REFERENCE = auto()


@runtime_checkable
class InstanceLookup(Protocol):
    """Anything that can tell whether an instance id is currently registered."""

    def has_instance(self, object_id: str) -> bool: ...


def _contains(values: Collection[Any], item: Any) -> bool:
    """Membership test that treats unhashable candidates as non-members."""
    if not isinstance(item, Hashable):
        return False
    try:
        return item in values
    except TypeError:
        return False


def _check_bounds(low: Any, high: Any, what: str) -> None:
    if low is not None and high is not None and low > high:
        raise ValueError(f"{what}: lower bound {low} exceeds upper bound {high}")


@dataclass(frozen=True, slots=True)
class BooleanDomain:
    """Accepts True or False."""

    kind: DomainKind = field(default=DomainKind.BOOLEAN, init=False)

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, bool)

    def describe(self) -> str:
        return "Boolean"


@dataclass(frozen=True, slots=True)
class IntDomain:
    """Integer with optional inclusive bounds. Booleans are rejected."""

    min: int | None = None
    max: int | None = None
    kind: DomainKind = field(default=DomainKind.INT, init=False)

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max, "IntDomain")

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

    def describe(self) -> str:
        if self.min is None and self.max is None:
            return "Integer (unbounded)"
        if self.min is None:
            return f"Integer (max: {self.max})"
        if self.max is None:
            return f"Integer (min: {self.min})"
        return f"Integer [{self.min}, {self.max}]"


@dataclass(frozen=True, slots=True)
class RealDomain:
    """Real number with optional inclusive or exclusive bounds.

    When precision is set, the candidate is rounded to that many decimal
    places before the bounds are checked, so 0.30000000000000004 satisfies
    an upper bound of 0.3 at precision 6.
    """

    min: float | None = None
    max: float | None = None
    min_inclusive: bool = True
    max_inclusive: bool = True
    precision: int | None = None
    kind: DomainKind = field(default=DomainKind.REAL, init=False)

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max, "RealDomain")
        if self.precision is not None and self.precision < 0:
            raise ValueError(f"RealDomain: precision must be >= 0, got {self.precision}")

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return False
        try:
            candidate = float(value)
        except OverflowError:
            return False
        if math.isnan(candidate):
            return False
        if self.precision is not None:
            candidate = round(candidate, self.precision)
        if self.min is not None:
            if candidate < self.min if self.min_inclusive else candidate <= self.min:
                return False
        if self.max is not None:
            if candidate > self.max if self.max_inclusive else candidate >= self.max:
                return False
        return True

    def describe(self) -> str:
        if self.min is None and self.max is None:
            text = "Real (unbounded)"
        else:
            left = "[" if self.min_inclusive else "("
            right = "]" if self.max_inclusive else ")"
            low = self.min if self.min is not None else "-inf"
            high = self.max if self.max is not None else "inf"
            text = f"Real {left}{low}, {high}{right}"
        if self.precision is not None:
            text += f" (precision: {self.precision})"
        return text


@dataclass(frozen=True, slots=True)
class EnumDomain:
    """Membership in a fixed set of allowed values. An empty set rejects everything."""

    values: frozenset[Any] = frozenset()
    kind: DomainKind = field(default=DomainKind.ENUM, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", frozenset(self.values))

    def is_valid(self, value: Any) -> bool:
        return _contains(self.values, value)

    def describe(self) -> str:
        return f"Enum: {sorted(map(str, self.values))}"


@dataclass(frozen=True, slots=True)
class TextDomain:
    """String with optional length bounds and a fully anchored pattern."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    kind: DomainKind = field(default=DomainKind.TEXT, init=False)

    def __post_init__(self) -> None:
        _check_bounds(self.min_length, self.max_length, "TextDomain")
        if self.pattern is not None:
            re.compile(self.pattern)

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if self.min_length is not None and len(value) < self.min_length:
            return False
        if self.max_length is not None and len(value) > self.max_length:
            return False
        if self.pattern is not None and re.fullmatch(self.pattern, value) is None:
            return False
        return True

    def describe(self) -> str:
        constraints = []
        if self.min_length is not None:
            constraints.append(f"minLen: {self.min_length}")
        if self.max_length is not None:
            constraints.append(f"maxLen: {self.max_length}")
        if self.pattern is not None:
            constraints.append(f"pattern: {self.pattern}")
        return "Text" + (f" ({', '.join(constraints)})" if constraints else "")


@dataclass(frozen=True, slots=True)
class ListDomain:
    """Sequence whose elements all belong to a fixed allowed set."""

    allowed: frozenset[Any] = frozenset()
    min_size: int | None = None
    max_size: int | None = None
    allow_duplicates: bool = True
    kind: DomainKind = field(default=DomainKind.LIST, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed", frozenset(self.allowed))
        _check_bounds(self.min_size, self.max_size, "ListDomain")

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        if self.min_size is not None and len(value) < self.min_size:
            return False
        if self.max_size is not None and len(value) > self.max_size:
            return False
        if not all(_contains(self.allowed, element) for element in value):
            return False
        if not self.allow_duplicates and len(set(value)) != len(value):
            return False
        return True

    def describe(self) -> str:
        constraints = [f"allowed: {sorted(map(str, self.allowed))}"]
        if self.min_size is not None:
            constraints.append(f"minSize: {self.min_size}")
        if self.max_size is not None:
            constraints.append(f"maxSize: {self.max_size}")
        if not self.allow_duplicates:
            constraints.append("no duplicates")
        return f"List ({', '.join(constraints)})"


@dataclass(frozen=True, slots=True)
class MapDomain:
    """Mapping with optional size bounds and independent key/value sub-domains."""

    key_domain: Domain | None = None
    value_domain: Domain | None = None
    min_size: int | None = None
    max_size: int | None = None
    kind: DomainKind = field(default=DomainKind.MAP, init=False)

    def __post_init__(self) -> None:
        _check_bounds(self.min_size, self.max_size, "MapDomain")

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        if self.min_size is not None and len(value) < self.min_size:
            return False
        if self.max_size is not None and len(value) > self.max_size:
            return False
        for key, item in value.items():
            if self.key_domain is not None and not self.key_domain.is_valid(key):
                return False
            if self.value_domain is not None and not self.value_domain.is_valid(item):
                return False
        return True

    def describe(self) -> str:
        constraints = []
        if self.key_domain is not None:
            constraints.append(f"keys: {self.key_domain.describe()}")
        if self.value_domain is not None:
            constraints.append(f"values: {self.value_domain.describe()}")
        if self.min_size is not None:
            constraints.append(f"minSize: {self.min_size}")
        if self.max_size is not None:
            constraints.append(f"maxSize: {self.max_size}")
        return "Map" + (f" ({', '.join(constraints)})" if constraints else "")


@dataclass(frozen=True, slots=True)
class ReferenceDomain:
    """Identifier of an instance currently registered in a knowledge base.

    The only domain with a side channel: validity depends on the lookup's
    state at the time of the check.
    """

    lookup: InstanceLookup = field(compare=False, hash=False, repr=False)
    pattern: str = ID_PATTERN
    kind: DomainKind = field(default=DomainKind.REFERENCE, init=False)

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str) or re.fullmatch(self.pattern, value) is None:
            return False
        return self.lookup.has_instance(value)

    def describe(self) -> str:
        return f"Reference (pattern: {self.pattern}, registered instance)"


Domain = (
    BooleanDomain
    | IntDomain
    | RealDomain
    | EnumDomain
    | TextDomain
    | ListDomain
    | MapDomain
    | ReferenceDomain
)
