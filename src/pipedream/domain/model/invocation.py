"""The per-operation invocation record and resolution results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from .enums import INITIAL_DEPTH, Mode, Stage

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .primitives import Entity


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, eq=False)
class InvocationRecord:
    """Input, snapshots and pipeline metadata for a single operation.

    ``input_parameters["Target"]`` carries the in-flight change set, either an
    ``Entity`` (full or partial payload) or an ``EntityReference`` (identifier
    only). Images are keyed by their registered name. Everything except
    ``shared_variables`` is treated as read-only once handed to rule code.
    """

    message_name: str
    stage: int
    mode: int = Mode.SYNCHRONOUS
    depth: int = INITIAL_DEPTH
    primary_entity_name: str | None = None
    primary_entity_id: UUID | None = None
    input_parameters: Mapping[str, object] = field(default_factory=dict[str, object])
    pre_entity_images: Mapping[str, Entity] | None = None
    post_entity_images: Mapping[str, Entity] | None = None
    shared_variables: dict[str, object] = field(default_factory=dict[str, object])
    parent_context: InvocationRecord | None = None
    operation_created_on: datetime = field(default_factory=_utcnow)
    correlation_id: UUID = field(default_factory=uuid4)
    user_id: UUID | None = None
    initiating_user_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.depth < INITIAL_DEPTH:
            raise ValueError(f"Invocation depth must be >= {INITIAL_DEPTH}, got {self.depth}")
        if self.stage not in set(Stage):
            raise ValueError(f"Unknown pipeline stage: {self.stage}")
        if self.mode not in set(Mode):
            raise ValueError(f"Unknown execution mode: {self.mode}")
        if self.parent_context is not None and self.parent_context.depth > self.depth:
            raise ValueError(
                "Parent invocation depth "
                f"{self.parent_context.depth} exceeds child depth {self.depth}"
            )
        if self.operation_created_on.tzinfo is None:
            self.operation_created_on = self.operation_created_on.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class ResolvedValue:
    """Outcome of attribute resolution.

    ``is_being_set`` is true when the value comes from the current operation
    rather than from a stored snapshot. ``in_snapshot`` marks a snapshot hit, so
    an attribute stored as an explicit null still counts as found.
    """

    value: object | None = None
    is_being_set: bool = False
    in_snapshot: bool = field(default=False, compare=False)

    @property
    def found(self) -> bool:
        return self.is_being_set or self.in_snapshot or self.value is not None


NOT_FOUND = ResolvedValue()
