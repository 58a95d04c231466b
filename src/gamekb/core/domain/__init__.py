"""Domain functionality: value-constraint models and validation helpers."""

from gamekb.core.domain.models import (
    ID_PATTERN,
    BooleanDomain,
    Domain,
    DomainKind,
    EnumDomain,
    InstanceLookup,
    IntDomain,
    ListDomain,
    MapDomain,
    RealDomain,
    ReferenceDomain,
    TextDomain,
)
from gamekb.core.domain.operations import check_value, domain_metadata

__all__ = [
    # Models
    "Domain",
    "DomainKind",
    "BooleanDomain",
    "IntDomain",
    "RealDomain",
    "EnumDomain",
    "TextDomain",
    "ListDomain",
    "MapDomain",
    "ReferenceDomain",
    "InstanceLookup",
    "ID_PATTERN",
    # Operations
    "check_value",
    "domain_metadata",
]
