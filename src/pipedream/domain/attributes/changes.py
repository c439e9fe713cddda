"""Detect whether an operation changes an attribute."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipedream.domain.model import ImageName

from .compare import values_differ
from .resolve import get_final_attribute, get_original_attribute

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pipedream.domain.model import InvocationRecord


def has_attribute_changed(
    record: InvocationRecord,
    attribute_name: str,
    pre_image_name: str = ImageName.PRE_IMAGE,
) -> bool:
    """Return ``True`` when the final value differs from the pre-image value.

    Setting a value over an absent or null prior counts as a change even when
    the new value is blank, e.g. writing ``""`` into an empty field.
    """

    original = get_original_attribute(record, attribute_name, pre_image_name)
    resolved = get_final_attribute(record, attribute_name, pre_image_name)

    if resolved.is_being_set and original is None and resolved.value is not None:
        return True
    return values_differ(resolved.value, original)


def changed_attributes(
    record: InvocationRecord,
    attribute_names: Iterable[str],
    pre_image_name: str = ImageName.PRE_IMAGE,
) -> list[str]:
    """Return the names from ``attribute_names`` that change, in input order."""

    return [
        name
        for name in attribute_names
        if has_attribute_changed(record, name, pre_image_name)
    ]
