"""Entity schemas: immutable named prototypes for instances.

Usage:
    schema = (
        SchemaBuilder("Player")
        .description("A participant in the match")
        .add_text_property("name", "Player", min_length=1)
        .add_int_property("life", 20, min=-1000, max=1000)
        .add_map_property("counters", value_domain=IntDomain(min=0))
        .require("name", "life")
        .build()
    )
    instance = schema.create_instance("player_1")
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

from gamekb.core.domain import (
    ID_PATTERN,
    BooleanDomain,
    Domain,
    EnumDomain,
    InstanceLookup,
    IntDomain,
    ListDomain,
    MapDomain,
    RealDomain,
    ReferenceDomain,
    TextDomain,
    domain_metadata,
)
from gamekb.core.errors import SchemaError
from gamekb.core.property import PropertyCell

if TYPE_CHECKING:
    from gamekb.core.schema.instance import EntityInstance


class EntitySchema:
    """Prototype for one class of modeled entity.

    Holds default-valued property cells, the subset of required property
    names, and a description. Immutable once built; use SchemaBuilder.

    Args:
        class_name: Unique class name within a knowledge base.
        description: Human-readable description.
        prototypes: Property name to prototype cell.
        required: Names of required properties (must be declared).

    Raises:
        SchemaError: If a required property is not declared.
    """

    __slots__ = ("_class_name", "_description", "_prototypes", "_required")

    def __init__(
        self,
        class_name: str,
        description: str,
        prototypes: Mapping[str, PropertyCell],
        required: Iterable[str] = (),
    ) -> None:
        required_set = frozenset(required)
        missing = sorted(required_set - prototypes.keys())
        if missing:
            raise SchemaError(f"Required properties not defined on '{class_name}': {missing}")
        self._class_name = class_name
        self._description = description
        self._prototypes = MappingProxyType(dict(prototypes))
        self._required = required_set

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def description(self) -> str:
        return self._description

    @property
    def prototypes(self) -> Mapping[str, PropertyCell]:
        """Read-only view of the prototype cells."""
        return self._prototypes

    @property
    def required(self) -> frozenset[str]:
        return self._required

    def property_names(self) -> list[str]:
        return sorted(self._prototypes)

    def prototype(self, name: str) -> PropertyCell | None:
        return self._prototypes.get(name)

    def has_property(self, name: str) -> bool:
        return name in self._prototypes

    def is_valid_value(self, name: str, value: Any) -> bool:
        """Check a value against a property's domain. Unknown properties are invalid."""
        prototype = self._prototypes.get(name)
        return prototype is not None and prototype.is_valid(value)

    def create_instance(self, object_id: str) -> EntityInstance:
        """Create an instance whose cells are independent copies of the prototypes."""
        from gamekb.core.schema.instance import EntityInstance

        return EntityInstance(self, object_id)

    def metadata(self) -> dict[str, Any]:
        """Describe the schema for export and query collaborators."""
        return {
            "class_name": self._class_name,
            "description": self._description,
            "required": sorted(self._required),
            "properties": {
                name: {
                    "default": cell.value,
                    "required": name in self._required,
                    "domain": domain_metadata(cell.domain),
                }
                for name, cell in sorted(self._prototypes.items())
            },
        }

    def __repr__(self) -> str:
        return f"EntitySchema({self._class_name!r}, properties={len(self._prototypes)})"


class SchemaBuilder:
    """Fluent builder for EntitySchema.

    Defaults are validated against their domain when each property is added.
    """

    def __init__(self, class_name: str) -> None:
        self._class_name = class_name
        self._description = ""
        self._prototypes: dict[str, PropertyCell] = {}
        self._required: set[str] = set()

    def description(self, text: str) -> Self:
        self._description = text
        return self

    def add_property(self, name: str, default: Any, domain: Domain | None = None) -> Self:
        self._prototypes[name] = PropertyCell(name, default, domain)
        return self

    def add_bool_property(self, name: str, default: bool) -> Self:
        return self.add_property(name, default, BooleanDomain())

    def add_int_property(
        self, name: str, default: int, min: int | None = None, max: int | None = None
    ) -> Self:
        return self.add_property(name, default, IntDomain(min=min, max=max))

    def add_real_property(
        self,
        name: str,
        default: float,
        min: float | None = None,
        max: float | None = None,
        *,
        min_inclusive: bool = True,
        max_inclusive: bool = True,
        precision: int | None = None,
    ) -> Self:
        domain = RealDomain(
            min=min,
            max=max,
            min_inclusive=min_inclusive,
            max_inclusive=max_inclusive,
            precision=precision,
        )
        return self.add_property(name, default, domain)

    def add_text_property(
        self,
        name: str,
        default: str,
        min_length: int | None = None,
        max_length: int | None = None,
        pattern: str | None = None,
    ) -> Self:
        domain = TextDomain(min_length=min_length, max_length=max_length, pattern=pattern)
        return self.add_property(name, default, domain)

    def add_enum_property(self, name: str, default: Any, values: Collection[Any]) -> Self:
        return self.add_property(name, default, EnumDomain(frozenset(values)))

    def add_list_property(
        self,
        name: str,
        default: Iterable[Any],
        allowed: Collection[Any],
        min_size: int | None = None,
        max_size: int | None = None,
        allow_duplicates: bool = True,
    ) -> Self:
        domain = ListDomain(
            allowed=frozenset(allowed),
            min_size=min_size,
            max_size=max_size,
            allow_duplicates=allow_duplicates,
        )
        return self.add_property(name, list(default), domain)

    def add_map_property(
        self,
        name: str,
        default: Mapping[Any, Any] | None = None,
        key_domain: Domain | None = None,
        value_domain: Domain | None = None,
        min_size: int | None = None,
        max_size: int | None = None,
    ) -> Self:
        domain = MapDomain(
            key_domain=key_domain,
            value_domain=value_domain,
            min_size=min_size,
            max_size=max_size,
        )
        return self.add_property(name, dict(default or {}), domain)

    def add_reference_property(
        self, name: str, default: str, lookup: InstanceLookup, pattern: str = ID_PATTERN
    ) -> Self:
        return self.add_property(name, default, ReferenceDomain(lookup=lookup, pattern=pattern))

    def require(self, *names: str) -> Self:
        self._required.update(names)
        return self

    def build(self) -> EntitySchema:
        """Build the immutable schema.

        Raises:
            SchemaError: If a required property was never added.
        """
        return EntitySchema(
            self._class_name,
            self._description,
            self._prototypes,
            self._required,
        )
