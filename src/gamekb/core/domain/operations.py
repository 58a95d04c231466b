"""Domain operations: validation helpers and export metadata."""

from __future__ import annotations

from typing import Any

from gamekb.core.domain.models import (
    BooleanDomain,
    Domain,
    EnumDomain,
    IntDomain,
    ListDomain,
    MapDomain,
    RealDomain,
    ReferenceDomain,
    TextDomain,
)
from gamekb.core.errors import DomainViolationError


def check_value(domain: Domain | None, value: Any, property_name: str) -> None:
    """Raise if value does not satisfy domain.

    Args:
        domain: Domain to validate against. None accepts any value.
        value: Candidate value.
        property_name: Property name reported in the error.

    Raises:
        DomainViolationError: If the domain rejects the value.
    """
    if domain is not None and not domain.is_valid(value):
        raise DomainViolationError(property_name, value, domain.describe())


def _sorted_strings(values: frozenset[Any]) -> list[str]:
    return sorted(str(v) for v in values)


def domain_metadata(domain: Domain | None) -> dict[str, Any]:
    """Describe a domain as a JSON-friendly dict for export and query collaborators.

    Matching is exhaustive over every domain kind.

    Args:
        domain: Domain to describe, or None for an unconstrained property.

    Returns:
        Dict with at least "kind" and "description" keys.
    """
    if domain is None:
        return {"kind": "ANY", "description": "Unconstrained"}

    meta: dict[str, Any] = {"kind": domain.kind.name, "description": domain.describe()}
    match domain:
        case BooleanDomain():
            pass
        case IntDomain(min=low, max=high):
            meta.update(min=low, max=high)
        case RealDomain():
            meta.update(
                min=domain.min,
                max=domain.max,
                min_inclusive=domain.min_inclusive,
                max_inclusive=domain.max_inclusive,
                precision=domain.precision,
            )
        case EnumDomain(values=values):
            meta["values"] = _sorted_strings(values)
        case TextDomain():
            meta.update(
                min_length=domain.min_length,
                max_length=domain.max_length,
                pattern=domain.pattern,
            )
        case ListDomain():
            meta.update(
                allowed=_sorted_strings(domain.allowed),
                min_size=domain.min_size,
                max_size=domain.max_size,
                allow_duplicates=domain.allow_duplicates,
            )
        case MapDomain():
            meta.update(
                key_domain=domain_metadata(domain.key_domain),
                value_domain=domain_metadata(domain.value_domain),
                min_size=domain.min_size,
                max_size=domain.max_size,
            )
        case ReferenceDomain(pattern=pattern):
            meta["pattern"] = pattern
        case _:
            raise TypeError(f"Unknown domain type: {type(domain).__name__}")
    return meta
