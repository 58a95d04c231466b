"""Core functionalities: domains, property cells, schemas, instances, and verbs.

Architecture Note:
    core/ holds the data model and the verb engine. Nothing here owns global
    state; instances are mutated only through their own validated methods.
    For the stateful registry, see world/.
"""

from gamekb.core.domain import (
    BooleanDomain,
    Domain,
    EnumDomain,
    IntDomain,
    ListDomain,
    MapDomain,
    RealDomain,
    ReferenceDomain,
    TextDomain,
    check_value,
    domain_metadata,
)
from gamekb.core.errors import (
    DomainViolationError,
    DuplicateInstanceError,
    SchemaError,
    UnknownDefinitionError,
    UnknownPropertyError,
)
from gamekb.core.property import PropertyCell
from gamekb.core.schema import (
    Condition,
    ConditionOperator,
    EntityInstance,
    EntitySchema,
    SchemaBuilder,
)
from gamekb.core.types import MISSING, Snapshot
from gamekb.core.verb import (
    Requirement,
    TargetSpec,
    VerbBuilder,
    VerbDefinition,
    VerbInstance,
)

__all__ = [
    # Domain
    "BooleanDomain",
    "Domain",
    "EnumDomain",
    "IntDomain",
    "ListDomain",
    "MapDomain",
    "RealDomain",
    "ReferenceDomain",
    "TextDomain",
    "check_value",
    "domain_metadata",
    # Errors
    "DomainViolationError",
    "DuplicateInstanceError",
    "SchemaError",
    "UnknownDefinitionError",
    "UnknownPropertyError",
    # Property / Schema
    "PropertyCell",
    "Condition",
    "ConditionOperator",
    "EntityInstance",
    "EntitySchema",
    "SchemaBuilder",
    # Types
    "MISSING",
    "Snapshot",
    # Verb
    "Requirement",
    "TargetSpec",
    "VerbBuilder",
    "VerbDefinition",
    "VerbInstance",
]
