"""Entity instances: mutable, schema-conformant records.

Instances are created through EntitySchema.create_instance (normally via
KnowledgeBase.create_instance), never directly.

Usage:
    card = kb.create_instance("Card_Grizzly_Bears", "card_17", {"zone": "Hand"})
    card.set_property("tapped", True)
    card.update_properties({"zone": "Battlefield", "summoning_sick": True})
    card.set_path("counters.+1/+1", 2)  # keyed write into a map property
"""

from __future__ import annotations

import copy as cp
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from gamekb.core.errors import UnknownPropertyError
from gamekb.core.property import PropertyCell
from gamekb.core.schema.models import Condition
from gamekb.core.types import MISSING, Snapshot

if TYPE_CHECKING:
    from gamekb.core.schema.definition import EntitySchema

CanonicalForm = tuple[str, str, tuple[tuple[str, Any], ...]]


def freeze_value(value: Any) -> Any:
    """Convert container values into hashable equivalents."""
    if isinstance(value, Mapping):
        items = ((freeze_value(k), freeze_value(v)) for k, v in value.items())
        return tuple(sorted(items, key=repr))
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze_value(v) for v in value)
    return value


class EntityInstance:
    """Live record created from an EntitySchema.

    Every property present exists on the schema. Batch updates are
    all-or-nothing. Equality and hashing use the canonical form
    (class name, object id, sorted property values), so two instances with
    identical observable state compare equal.

    Args:
        schema: Owning schema.
        object_id: Identifier, unique within a knowledge base.
    """

    def __init__(self, schema: EntitySchema, object_id: str) -> None:
        self._schema = schema
        self._object_id = object_id
        self._cells: dict[str, PropertyCell] = {
            name: prototype.copy() for name, prototype in schema.prototypes.items()
        }
        self.created_at: float = time.time()
        self.last_modified: float = self.created_at
        self.metadata: dict[str, Any] = {}

    @property
    def schema(self) -> EntitySchema:
        return self._schema

    @property
    def class_name(self) -> str:
        return self._schema.class_name

    @property
    def object_id(self) -> str:
        return self._object_id

    def _touch(self) -> None:
        self.last_modified = time.time()

    def _cell(self, name: str) -> PropertyCell:
        cell = self._cells.get(name)
        if cell is None:
            raise UnknownPropertyError(self.class_name, name)
        return cell

    def has_property(self, name: str) -> bool:
        return name in self._cells

    def get_property(self, name: str, default: Any = None) -> Any:
        """Current value of a property, or default if the schema lacks it."""
        cell = self._cells.get(name)
        return cell.value if cell is not None else default

    def set_property(self, name: str, value: Any) -> None:
        """Set one property.

        Raises:
            UnknownPropertyError: If the schema does not declare the property.
            DomainViolationError: If the value does not satisfy the domain.
        """
        self._cell(name).set_value(value)
        self._touch()

    def update_properties(self, updates: Mapping[str, Any]) -> None:
        """Set several properties atomically.

        Every entry is validated before any is applied. If one fails, the
        instance is left unchanged.

        Raises:
            UnknownPropertyError: If any property is undeclared.
            DomainViolationError: Naming the first offending property and value.
        """
        cells = [(self._cell(name), value) for name, value in updates.items()]
        for cell, value in cells:
            cell.validate(value)
        for cell, value in cells:
            cell.set_value(value)
        if cells:
            self._touch()

    # Property paths: "name" or "<map property>.<key>"

    def _resolve_path(self, path: str) -> tuple[PropertyCell, str | None]:
        if path in self._cells:
            return self._cells[path], None
        head, sep, key = path.partition(".")
        cell = self._cells.get(head)
        if sep and cell is not None and isinstance(cell.value, Mapping):
            return cell, key
        raise UnknownPropertyError(self.class_name, path)

    def get_path(self, path: str, default: Any = None) -> Any:
        """Read a property or a key of a map property.

        Raises:
            UnknownPropertyError: If the path does not resolve to a property.
        """
        cell, key = self._resolve_path(path)
        if key is None:
            return cell.value
        return cell.value.get(key, default)

    def set_path(self, path: str, value: Any) -> None:
        """Write a property or a key of a map property (validated as a whole map).

        Raises:
            UnknownPropertyError: If the path does not resolve to a property.
            DomainViolationError: If the write would violate the domain.
        """
        cell, key = self._resolve_path(path)
        if key is None:
            cell.set_value(value)
        else:
            cell.put(key, value)
        self._touch()

    def remove_path(self, path: str) -> bool:
        """Remove a key from a map property. Returns False if it was absent.

        Raises:
            UnknownPropertyError: If the path is not a keyed map path.
        """
        cell, key = self._resolve_path(path)
        if key is None:
            raise UnknownPropertyError(self.class_name, path)
        removed = cell.remove_key(key)
        if removed:
            self._touch()
        return removed

    def path_exists(self, path: str) -> bool:
        """True if the path resolves and, for keyed paths, the key is present."""
        try:
            return self.get_path(path, MISSING) is not MISSING
        except UnknownPropertyError:
            return False

    def matches(self, condition: Condition) -> bool:
        """Evaluate a single-property condition. Unresolvable paths read as None."""
        try:
            current = self.get_path(condition.property_name)
        except UnknownPropertyError:
            current = None
        return condition.evaluate(current)

    def property_values(self) -> Snapshot[dict[str, Any]]:
        """Deep-copied mapping of property name to value."""
        return {name: cp.deepcopy(cell.value) for name, cell in self._cells.items()}

    def to_canonical(self) -> CanonicalForm:
        """(class name, object id, property name/value pairs sorted by name)."""
        pairs = tuple(
            sorted(((name, cell.value) for name, cell in self._cells.items()), key=lambda p: p[0])
        )
        return (self.class_name, self._object_id, pairs)

    def copy(self, new_object_id: str | None = None) -> EntityInstance:
        """Detached copy with the same values and metadata."""
        clone = EntityInstance(self._schema, new_object_id or f"{self._object_id}_copy")
        clone._cells = {name: cell.copy() for name, cell in self._cells.items()}
        clone.metadata = dict(self.metadata)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityInstance):
            return NotImplemented
        return self.to_canonical() == other.to_canonical()

    def __hash__(self) -> int:
        return hash(freeze_value(self.to_canonical()))

    def __repr__(self) -> str:
        return f"EntityInstance({self.class_name!r}, {self._object_id!r})"
