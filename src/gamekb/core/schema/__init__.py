"""Schema functionality: definitions, instances, and query conditions."""

from gamekb.core.schema.definition import EntitySchema, SchemaBuilder
from gamekb.core.schema.instance import CanonicalForm, EntityInstance, freeze_value
from gamekb.core.schema.models import Condition, ConditionOperator

__all__ = [
    # Models
    "Condition",
    "ConditionOperator",
    # Definition
    "EntitySchema",
    "SchemaBuilder",
    # Instance
    "EntityInstance",
    "CanonicalForm",
    "freeze_value",
]
