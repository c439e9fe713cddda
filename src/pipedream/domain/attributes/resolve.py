"""Resolve the value an attribute will hold once the current operation completes.

Resolution checks three places, first match wins:

1. the in-flight change set (``Target``)
2. the ``State`` / ``Status`` input parameters, for ``statecode`` / ``statuscode``
   (state-change messages pass these outside the change set)
3. the named pre-image

A missing change set, missing image collection or missing named image is a
plain "not found", never an error. The typed ``*_value`` accessors return the
caller's default when the stored value has a different runtime type; without
an explicit default, scalar types read as their zero value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipedream.domain.model import (
    NOT_FOUND,
    AttributeName,
    Entity,
    EntityReference,
    ImageName,
    InputParameter,
    ResolvedValue,
    typed_or_default,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pipedream.domain.model import InvocationRecord


_SPECIAL_PARAMETERS: tuple[tuple[str, str], ...] = (
    (AttributeName.STATE_CODE, InputParameter.STATE),
    (AttributeName.STATUS_CODE, InputParameter.STATUS),
)


def get_target(record: InvocationRecord) -> Entity | None:
    target = record.input_parameters.get(InputParameter.TARGET)
    return target if isinstance(target, Entity) else None


def get_target_reference(record: InvocationRecord) -> EntityReference | None:
    """Return the identifier-only target (for example on delete)."""

    target = record.input_parameters.get(InputParameter.TARGET)
    return target if isinstance(target, EntityReference) else None


def get_pre_image(
    record: InvocationRecord, image_name: str = ImageName.PRE_IMAGE
) -> Entity | None:
    return _image(record.pre_entity_images, image_name)


def get_post_image(
    record: InvocationRecord, image_name: str = ImageName.POST_IMAGE
) -> Entity | None:
    return _image(record.post_entity_images, image_name)


def get_context_attribute(record: InvocationRecord, attribute_name: str) -> ResolvedValue:
    """Return the value supplied by the current operation, without snapshot fallback."""

    target = get_target(record)
    if target is not None and attribute_name in target:
        return ResolvedValue(target[attribute_name], is_being_set=True)

    folded = attribute_name.casefold()
    for special_name, parameter in _SPECIAL_PARAMETERS:
        if folded == special_name and parameter in record.input_parameters:
            return ResolvedValue(record.input_parameters[parameter], is_being_set=True)

    return NOT_FOUND


def get_final_attribute(
    record: InvocationRecord,
    attribute_name: str,
    pre_image_name: str = ImageName.PRE_IMAGE,
) -> ResolvedValue:
    """Return the value ``attribute_name`` will hold after the operation."""

    resolved = get_context_attribute(record, attribute_name)
    if resolved.is_being_set:
        return resolved
    image = get_pre_image(record, pre_image_name)
    if image is None or attribute_name not in image:
        return NOT_FOUND
    return ResolvedValue(image[attribute_name], in_snapshot=True)


def get_final_attribute_value[T](
    record: InvocationRecord,
    attribute_name: str,
    expected_type: type[T],
    default: T | None = None,
    pre_image_name: str = ImageName.PRE_IMAGE,
) -> T | None:
    value = get_final_attribute(record, attribute_name, pre_image_name).value
    return typed_or_default(value, expected_type, default)


def get_original_attribute(
    record: InvocationRecord,
    attribute_name: str,
    pre_image_name: str = ImageName.PRE_IMAGE,
) -> object | None:
    image = get_pre_image(record, pre_image_name)
    if image is None:
        return None
    return image.get(attribute_name)


def get_original_attribute_value[T](
    record: InvocationRecord,
    attribute_name: str,
    expected_type: type[T],
    default: T | None = None,
    pre_image_name: str = ImageName.PRE_IMAGE,
) -> T | None:
    value = get_original_attribute(record, attribute_name, pre_image_name)
    return typed_or_default(value, expected_type, default)


def get_post_image_attribute(
    record: InvocationRecord,
    attribute_name: str,
    post_image_name: str = ImageName.POST_IMAGE,
) -> object | None:
    """Return the value stored after the operation (only populated in later stages)."""

    image = get_post_image(record, post_image_name)
    if image is None:
        return None
    return image.get(attribute_name)


def get_post_image_attribute_value[T](
    record: InvocationRecord,
    attribute_name: str,
    expected_type: type[T],
    default: T | None = None,
    post_image_name: str = ImageName.POST_IMAGE,
) -> T | None:
    value = get_post_image_attribute(record, attribute_name, post_image_name)
    return typed_or_default(value, expected_type, default)


def _image(images: Mapping[str, Entity] | None, image_name: str) -> Entity | None:
    if not images:
        return None
    return images.get(image_name)
