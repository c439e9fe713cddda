"""Translate JSON invocation payloads into domain invocation records."""

from __future__ import annotations

from datetime import UTC
from logging import getLogger
from typing import TYPE_CHECKING

from pipedream.domain.model import (
    Entity,
    EntityReference,
    InputParameter,
    InvocationRecord,
    Money,
    OptionSetValue,
)

from .schema import (
    DateTimePayload,
    EntityPayload,
    InvocationPayload,
    MoneyPayload,
    OptionSetPayload,
    ReferencePayload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import AttributeValuePayload


log = getLogger(__name__)


def load_invocation(raw: str | bytes) -> InvocationRecord:
    """Parse a JSON document into an ``InvocationRecord`` (raises ``ValidationError``)."""

    return translate_invocation(InvocationPayload.model_validate_json(raw))


def translate_invocation(payload: InvocationPayload) -> InvocationRecord:
    parent = translate_invocation(payload.parent_context) if payload.parent_context else None

    input_parameters = _translate_values(payload.input_parameters)
    if payload.target is not None:
        if InputParameter.TARGET in input_parameters:
            raise ValueError("Target supplied both as 'target' and inside 'input_parameters'")
        input_parameters[InputParameter.TARGET] = _translate_target(payload.target)

    optional: dict[str, object] = {}
    if payload.operation_created_on is not None:
        created_on = payload.operation_created_on
        if created_on.tzinfo is None:
            created_on = created_on.replace(tzinfo=UTC)
        optional["operation_created_on"] = created_on
    if payload.correlation_id is not None:
        optional["correlation_id"] = payload.correlation_id

    record = InvocationRecord(
        message_name=payload.message_name,
        stage=payload.stage,
        mode=payload.mode,
        depth=payload.depth,
        primary_entity_name=payload.primary_entity_name,
        primary_entity_id=payload.primary_entity_id,
        input_parameters=input_parameters,
        pre_entity_images=_translate_images(payload.pre_entity_images),
        post_entity_images=_translate_images(payload.post_entity_images),
        shared_variables=_translate_values(payload.shared_variables),
        parent_context=parent,
        user_id=payload.user_id,
        initiating_user_id=payload.initiating_user_id,
        **optional,  # pyright: ignore[reportArgumentType]
    )
    log.debug(
        "Translated %s invocation (stage=%s, depth=%s, correlation=%s)",
        record.message_name,
        record.stage,
        record.depth,
        record.correlation_id,
    )
    return record


def translate_value(value: AttributeValuePayload) -> object:
    if isinstance(value, OptionSetPayload):
        return OptionSetValue(value.value)
    if isinstance(value, ReferencePayload):
        return _translate_reference(value)
    if isinstance(value, MoneyPayload):
        return Money(value.value)
    if isinstance(value, DateTimePayload):
        if value.value.tzinfo is None:
            return value.value.replace(tzinfo=UTC)
        return value.value
    return value


def _translate_values(values: Mapping[str, AttributeValuePayload]) -> dict[str, object]:
    return {name: translate_value(value) for name, value in values.items()}


def _translate_target(target: EntityPayload | ReferencePayload) -> Entity | EntityReference:
    if isinstance(target, ReferencePayload):
        return _translate_reference(target)
    return _translate_entity(target)


def _translate_entity(entity: EntityPayload) -> Entity:
    return Entity(
        logical_name=entity.logical_name,
        id=entity.id,
        attributes=_translate_values(entity.attributes),
    )


def _translate_reference(reference: ReferencePayload) -> EntityReference:
    return EntityReference(
        logical_name=reference.logical_name,
        id=reference.id,
        name=reference.name,
    )


def _translate_images(images: Mapping[str, EntityPayload] | None) -> dict[str, Entity] | None:
    if images is None:
        return None
    return {name: _translate_entity(image) for name, image in images.items()}
