"""Value shapes that appear inside attribute maps.

Scalar attributes (text, numbers, booleans, datetimes) are stored as plain Python
values; only the shapes that need their own equality rules get a type here.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

type AttributeMap = Mapping[str, object]


@dataclass(frozen=True, slots=True)
class OptionSetValue:
    """A coded choice; only the numeric code carries meaning."""

    value: int


@dataclass(frozen=True, slots=True)
class EntityReference:
    """Pointer to another record. Two references are the same when their ids match."""

    logical_name: str
    id: UUID
    name: str | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Money:
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(str(self.value)))


@dataclass(frozen=True, slots=True)
class Entity:
    """A full or partial record: logical name, optional id and a read-only attribute map."""

    logical_name: str
    id: UUID | None = None
    attributes: AttributeMap = field(default_factory=dict[str, object])

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __getitem__(self, name: str) -> object:
        return self.attributes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def get(self, name: str, default: object = None) -> object:
        return self.attributes.get(name, default)

    def to_reference(self) -> EntityReference:
        if self.id is None:
            raise ValueError(f"Entity {self.logical_name!r} has no id to reference")
        return EntityReference(logical_name=self.logical_name, id=self.id)


_ZERO_VALUE_TYPES: tuple[type, ...] = (bool, int, float, str, Decimal)


def typed_or_default[T](
    value: object, expected_type: type[T], default: T | None = None
) -> T | None:
    """Return ``value`` when it is an ``expected_type``, otherwise a default.

    Without an explicit ``default`` the scalar types fall back to their zero
    value (``0``, ``0.0``, ``False``, ``""``, ``Decimal(0)``); everything else
    falls back to ``None``.
    """

    if isinstance(value, expected_type):
        return value
    if default is not None:
        return default
    if expected_type in _ZERO_VALUE_TYPES:
        return expected_type()
    return None
