"""Immutable snapshots of knowledge base state.

A snapshot holds the canonical forms of a set of instances, sorted by class
name then object id, so two knowledge bases with the same observable state
produce equal snapshots with equal hashes.
"""

from __future__ import annotations

import copy as cp
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from gamekb.core.schema import CanonicalForm, EntityInstance, freeze_value


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    instances: tuple[CanonicalForm, ...] = ()

    @classmethod
    def from_instances(cls, instances: Iterable[EntityInstance]) -> StateSnapshot:
        forms = (cp.deepcopy(instance.to_canonical()) for instance in instances)
        return cls(tuple(sorted(forms, key=lambda form: (form[0], form[1]))))

    def instances_of(self, class_name: str) -> list[CanonicalForm]:
        return [form for form in self.instances if form[0] == class_name]

    def get(self, object_id: str) -> CanonicalForm | None:
        return next((form for form in self.instances if form[1] == object_id), None)

    def object_ids(self) -> list[str]:
        return [form[1] for form in self.instances]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "instances": [
                {"class_name": class_name, "object_id": object_id, "properties": dict(pairs)}
                for class_name, object_id, pairs in self.instances
            ]
        }

    def __len__(self) -> int:
        return len(self.instances)

    def __hash__(self) -> int:
        return hash(freeze_value(self.instances))
