"""JSON payload adapter for invocation records."""

from __future__ import annotations

from .schema import EntityPayload, InvocationPayload, ReferencePayload
from .translator import load_invocation, translate_invocation, translate_value

__all__ = [
    "EntityPayload",
    "InvocationPayload",
    "ReferencePayload",
    "load_invocation",
    "translate_invocation",
    "translate_value",
]
