"""Property cells: named, domain-validated value holders.

Usage:
    cell = PropertyCell("life", 20, IntDomain(min=-1000, max=1000))
    cell.set_value(17)

    counters = PropertyCell("counters", {}, MapDomain(value_domain=IntDomain(min=0), max_size=2))
    counters.put("+1/+1", 2)  # validates the resulting map before mutating
"""

from __future__ import annotations

import copy as cp
from collections.abc import Mapping, MutableMapping
from typing import Any

from gamekb.core.domain import Domain, check_value


class PropertyCell:
    """A named value that always satisfies its domain.

    Every write is validated. Map-backed cells support incremental mutation
    (put, put_all, remove_key, clear_map) where the prospective map is
    validated as a whole before the live map is touched.

    Args:
        name: Property name.
        value: Initial value, validated against domain.
        domain: Optional constraint. Treated as immutable and shared by copies.

    Raises:
        DomainViolationError: If the initial value does not satisfy domain.
    """

    __slots__ = ("_name", "_value", "_domain")

    def __init__(self, name: str, value: Any, domain: Domain | None = None) -> None:
        self._name = name
        self._domain = domain
        check_value(domain, value, name)
        self._value = value

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> Any:
        return self._value

    @property
    def domain(self) -> Domain | None:
        return self._domain

    def validate(self, value: Any) -> None:
        """Check a candidate value without storing it.

        Raises:
            DomainViolationError: If the candidate does not satisfy the domain.
        """
        check_value(self._domain, value, self._name)

    def is_valid(self, value: Any) -> bool:
        """Return True if value would be accepted by set_value."""
        return self._domain is None or self._domain.is_valid(value)

    def set_value(self, value: Any) -> None:
        """Replace the value after validating it.

        Raises:
            DomainViolationError: If the value does not satisfy the domain.
        """
        self.validate(value)
        self._value = value

    # Map-backed operations

    def _live_map(self) -> MutableMapping[Any, Any]:
        if not isinstance(self._value, MutableMapping):
            raise TypeError(
                f"Property '{self._name}' holds {type(self._value).__name__}, not a mutable map"
            )
        return self._value

    def _commit(self, live: MutableMapping[Any, Any], prospective: dict[Any, Any]) -> None:
        self.validate(prospective)
        live.clear()
        live.update(prospective)

    def put(self, key: Any, value: Any) -> None:
        """Set one entry of a map-backed cell.

        Raises:
            TypeError: If the cell does not hold a mutable map.
            DomainViolationError: If the resulting map would be invalid.
        """
        live = self._live_map()
        prospective = dict(live)
        prospective[key] = value
        self._commit(live, prospective)

    def put_all(self, entries: Mapping[Any, Any]) -> None:
        """Merge entries into a map-backed cell as one validated step."""
        live = self._live_map()
        prospective = dict(live)
        prospective.update(entries)
        self._commit(live, prospective)

    def remove_key(self, key: Any) -> bool:
        """Remove one entry. Returns False if the key was absent.

        Raises:
            DomainViolationError: If the map without the key would be invalid
                (for example, below its minimum size).
        """
        live = self._live_map()
        if key not in live:
            return False
        prospective = dict(live)
        del prospective[key]
        self._commit(live, prospective)
        return True

    def clear_map(self) -> None:
        """Remove every entry, if an empty map satisfies the domain."""
        live = self._live_map()
        self._commit(live, {})

    def copy(self) -> PropertyCell:
        """Independent copy: deep for map values, shallow otherwise. Domain is shared."""
        clone = PropertyCell.__new__(PropertyCell)
        clone._name = self._name
        clone._domain = self._domain
        if isinstance(self._value, Mapping):
            clone._value = cp.deepcopy(self._value)
        else:
            clone._value = cp.copy(self._value)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyCell):
            return NotImplemented
        return self._name == other._name and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertyCell({self._name!r}, {self._value!r})"
