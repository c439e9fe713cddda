"""Domain model for invocation records and attribute values."""

from __future__ import annotations

from .enums import (
    DEFAULT_MAX_DEPTH,
    INITIAL_DEPTH,
    AttributeName,
    ImageName,
    InputParameter,
    Message,
    Mode,
    Stage,
)
from .invocation import NOT_FOUND, InvocationRecord, ResolvedValue
from .primitives import (
    AttributeMap,
    Entity,
    EntityReference,
    Money,
    OptionSetValue,
    typed_or_default,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "INITIAL_DEPTH",
    "NOT_FOUND",
    "AttributeMap",
    "AttributeName",
    "Entity",
    "EntityReference",
    "ImageName",
    "InputParameter",
    "InvocationRecord",
    "Message",
    "Mode",
    "Money",
    "OptionSetValue",
    "ResolvedValue",
    "Stage",
    "typed_or_default",
]
