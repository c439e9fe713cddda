"""Attribute resolution and change detection."""

from __future__ import annotations

from .changes import changed_attributes, has_attribute_changed
from .compare import values_differ, values_equal
from .resolve import (
    get_context_attribute,
    get_final_attribute,
    get_final_attribute_value,
    get_original_attribute,
    get_original_attribute_value,
    get_post_image,
    get_post_image_attribute,
    get_post_image_attribute_value,
    get_pre_image,
    get_target,
    get_target_reference,
)

__all__ = [
    "changed_attributes",
    "get_context_attribute",
    "get_final_attribute",
    "get_final_attribute_value",
    "get_original_attribute",
    "get_original_attribute_value",
    "get_post_image",
    "get_post_image_attribute",
    "get_post_image_attribute_value",
    "get_pre_image",
    "get_target",
    "get_target_reference",
    "has_attribute_changed",
    "values_differ",
    "values_equal",
]
