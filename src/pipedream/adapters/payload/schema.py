"""Pydantic models describing JSON invocation payloads.

Typed attribute values are objects with a ``type`` discriminator; bare JSON
scalars are passed through as-is::

    {"type": "optionset", "value": 1}
    {"type": "reference", "logical_name": "account", "id": "<uuid>", "name": "Contoso"}
    {"type": "money", "value": "10.50"}
    {"type": "datetime", "value": "2024-01-01T00:00:00Z"}
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from decimal import Decimal  # noqa: TC003
from typing import Annotated, Literal
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PayloadBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class OptionSetPayload(PayloadBaseModel):
    type: Literal["optionset"]
    value: int


class ReferencePayload(PayloadBaseModel):
    type: Literal["reference"]
    logical_name: str
    id: UUID
    name: str | None = None


class MoneyPayload(PayloadBaseModel):
    type: Literal["money"]
    value: Decimal


class DateTimePayload(PayloadBaseModel):
    type: Literal["datetime"]
    value: datetime


TypedValuePayload = Annotated[
    OptionSetPayload | ReferencePayload | MoneyPayload | DateTimePayload,
    Field(discriminator="type"),
]

AttributeValuePayload = TypedValuePayload | bool | int | float | str | None


class EntityPayload(PayloadBaseModel):
    type: Literal["entity"] = "entity"
    logical_name: str
    id: UUID | None = None
    attributes: dict[str, AttributeValuePayload] = Field(default_factory=dict)


# "type" is optional on entity payloads
TargetPayload = EntityPayload | ReferencePayload


class InvocationPayload(PayloadBaseModel):
    message_name: str
    stage: Literal[10, 20, 30, 40]
    mode: Literal[0, 1] = 0
    depth: int = Field(default=1, ge=1)
    primary_entity_name: str | None = None
    primary_entity_id: UUID | None = None
    target: TargetPayload | None = None
    input_parameters: dict[str, AttributeValuePayload] = Field(default_factory=dict)
    pre_entity_images: dict[str, EntityPayload] | None = None
    post_entity_images: dict[str, EntityPayload] | None = None
    shared_variables: dict[str, AttributeValuePayload] = Field(default_factory=dict)
    parent_context: InvocationPayload | None = None
    operation_created_on: datetime | None = None
    correlation_id: UUID | None = None
    user_id: UUID | None = None
    initiating_user_id: UUID | None = None

    @field_validator("message_name", mode="before")
    @classmethod
    def _strip_message_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


InvocationPayload.model_rebuild()
