"""Error taxonomy for the knowledge base.

Schema errors indicate a modeling bug and always propagate to the caller.
Domain violations carry the rejected value and the domain description.
Action availability (prerequisites, targets, costs) is never an exception.
"""

from __future__ import annotations

from typing import Any


class SchemaError(Exception):
    """Raised when an operation references a class or property that does not exist."""

    pass


class UnknownDefinitionError(SchemaError):
    """Raised when a class name has no registered definition."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"No definition registered for class '{class_name}'")
        self.class_name = class_name


class UnknownPropertyError(SchemaError):
    """Raised when a property is not declared on the owning schema."""

    def __init__(self, class_name: str, property_name: str) -> None:
        super().__init__(f"Property '{property_name}' does not exist in class '{class_name}'")
        self.class_name = class_name
        self.property_name = property_name


class DuplicateInstanceError(SchemaError):
    """Raised when an object id is already registered."""

    def __init__(self, object_id: str) -> None:
        super().__init__(f"Instance '{object_id}' is already registered")
        self.object_id = object_id


class DomainViolationError(ValueError):
    """Raised when a value does not satisfy a property's domain.

    Attributes:
        property_name: Name of the property being written.
        value: The rejected value.
        description: Human-readable description of the domain.
    """

    def __init__(self, property_name: str, value: Any, description: str) -> None:
        super().__init__(
            f"Value {value!r} is not valid for property '{property_name}': {description}"
        )
        self.property_name = property_name
        self.value = value
        self.description = description
