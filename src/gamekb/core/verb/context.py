"""Execution context shared by a verb's variables, costs, and effects."""

from __future__ import annotations

import copy as cp
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gamekb.core.types import MISSING
from gamekb.core.verb.models import PreviewChange, PropertyChange

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance
    from gamekb.world.knowledge_base import KnowledgeBase


class ExecutionContext:
    """Bound view of one verb run.

    In apply mode, `change` writes through to the instance and appends a
    PropertyChange to the undo log. In preview mode, writes are collected as
    PreviewChange entries and held in an overlay so later reads in the same
    run observe them; nothing is written and nothing is emitted.

    Args:
        kb: Knowledge base the verb runs against.
        source: Acting instance.
        targets: Bound targets, in order.
        variables: Resolved variables. Kept by reference so variable
            resolution can extend it while later variables are evaluated.
        undo_log: Destination for PropertyChange entries (apply mode).
        preview: Collect changes instead of writing them.
    """

    def __init__(
        self,
        kb: KnowledgeBase | None,
        source: EntityInstance,
        targets: Sequence[EntityInstance] = (),
        variables: Mapping[str, Any] | None = None,
        undo_log: list[PropertyChange] | None = None,
        preview: bool = False,
    ) -> None:
        self.kb = kb
        self.source = source
        self.targets = tuple(targets)
        self._variables = variables if variables is not None else {}
        self._undo_log = undo_log if undo_log is not None else []
        self.preview = preview
        self.previewed: list[PreviewChange] = []
        self._overlay: dict[tuple[str, str], Any] = {}

    @property
    def variables(self) -> Mapping[str, Any]:
        return self._variables

    def var(self, name: str, default: Any = None) -> Any:
        return self._variables.get(name, default)

    def target(self, index: int) -> EntityInstance:
        try:
            return self.targets[index]
        except IndexError:
            raise LookupError(
                f"Target {index} requested but only {len(self.targets)} bound"
            ) from None

    def require_single_target(self) -> EntityInstance:
        """First bound target.

        Raises:
            LookupError: If no target is bound.
        """
        if not self.targets:
            raise LookupError("Effect requires a target but none is bound")
        return self.targets[0]

    def read(self, instance: EntityInstance, path: str) -> Any:
        """Current value at path, including unwritten preview changes.

        Raises:
            UnknownPropertyError: If the path does not resolve.
        """
        key = (instance.object_id, path)
        if key in self._overlay:
            value = self._overlay[key]
            return None if value is MISSING else value
        return instance.get_path(path)

    def change(self, instance: EntityInstance, path: str, value: Any) -> None:
        """Write value at path, recording the previous value.

        Raises:
            UnknownPropertyError: If the path does not resolve.
            DomainViolationError: If the value does not satisfy the domain.
        """
        key = (instance.object_id, path)
        if key in self._overlay:
            previous = self._overlay[key]
        else:
            previous = cp.deepcopy(instance.get_path(path, MISSING))

        if self.preview:
            self._overlay[key] = value
            self.previewed.append(
                PreviewChange(
                    object_id=instance.object_id,
                    path=path,
                    previous=None if previous is MISSING else previous,
                    proposed=value,
                )
            )
            return

        instance.set_path(path, value)
        self._undo_log.append(PropertyChange(instance, path, previous))

    def emit(self, event_type: str, payload: Mapping[str, Any]) -> None:
        """Append an event to the knowledge base's log. Skipped in preview."""
        if self.preview or self.kb is None:
            return
        self.kb.record_event(event_type, dict(payload))
