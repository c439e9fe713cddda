"""Single object handed to rule code: the record, its services and engine helpers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pipedream.config import EngineConfig
from pipedream.domain import pipeline
from pipedream.domain.attributes import (
    changed_attributes,
    get_final_attribute,
    get_final_attribute_value,
    get_original_attribute,
    get_original_attribute_value,
    get_post_image_attribute,
    get_post_image_attribute_value,
    get_target,
    get_target_reference,
    has_attribute_changed,
)
from pipedream.domain.errors import MissingDependencyError
from pipedream.domain.model import InvocationRecord
from pipedream.services import TraceSink
from pipedream.tracing import LocalTracingService

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from uuid import UUID

    from pipedream.domain.model import Entity, EntityReference, ResolvedValue
    from pipedream.services import ServiceProvider


log = logging.getLogger(__name__)


class PluginContext:
    """Aggregate the invocation record, services, tracing and logging for rule code.

    ``InvocationRecord`` is required; a ``TraceSink`` is optional and, when
    missing, traces are dropped while log calls still reach the logger.
    """

    def __init__(
        self,
        services: ServiceProvider | None,
        *,
        logger: logging.Logger | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        if services is None:
            raise MissingDependencyError("PluginContext requires a service provider")
        self.services = services
        self.record = services.require(InvocationRecord)
        self.logger = logger or services.get(logging.Logger) or log
        self.config = config or services.get(EngineConfig) or EngineConfig()
        sink = services.get(TraceSink)
        self.tracing_service = (
            LocalTracingService(self.record, sink) if sink is not None else None
        )

    def get_service[T](self, service_type: type[T]) -> T | None:
        return self.services.get(service_type)

    # Record shortcuts

    @property
    def target(self) -> Entity | None:
        return get_target(self.record)

    @property
    def target_reference(self) -> EntityReference | None:
        return get_target_reference(self.record)

    @property
    def pre_image(self) -> Entity | None:
        """First registered pre-image, whatever its name."""
        return _first_image(self.record.pre_entity_images)

    @property
    def post_image(self) -> Entity | None:
        return _first_image(self.record.post_entity_images)

    @property
    def message_name(self) -> str:
        return self.record.message_name

    @property
    def primary_entity_name(self) -> str | None:
        return self.record.primary_entity_name

    @property
    def primary_entity_id(self) -> UUID | None:
        return self.record.primary_entity_id

    # Attribute resolution

    def get_final_attribute(self, attribute_name: str) -> ResolvedValue:
        return get_final_attribute(self.record, attribute_name, self.config.pre_image_name)

    def get_final_attribute_value[T](
        self, attribute_name: str, expected_type: type[T], default: T | None = None
    ) -> T | None:
        return get_final_attribute_value(
            self.record, attribute_name, expected_type, default, self.config.pre_image_name
        )

    def get_original_attribute(self, attribute_name: str) -> object | None:
        return get_original_attribute(self.record, attribute_name, self.config.pre_image_name)

    def get_original_attribute_value[T](
        self, attribute_name: str, expected_type: type[T], default: T | None = None
    ) -> T | None:
        return get_original_attribute_value(
            self.record, attribute_name, expected_type, default, self.config.pre_image_name
        )

    def get_post_image_attribute(self, attribute_name: str) -> object | None:
        return get_post_image_attribute(self.record, attribute_name, self.config.post_image_name)

    def get_post_image_attribute_value[T](
        self, attribute_name: str, expected_type: type[T], default: T | None = None
    ) -> T | None:
        return get_post_image_attribute_value(
            self.record, attribute_name, expected_type, default, self.config.post_image_name
        )

    def has_attribute_changed(self, attribute_name: str) -> bool:
        return has_attribute_changed(self.record, attribute_name, self.config.pre_image_name)

    def changed_attributes(self, attribute_names: Iterable[str]) -> list[str]:
        return changed_attributes(self.record, attribute_names, self.config.pre_image_name)

    # Pipeline classification

    def is_pre_validation(self) -> bool:
        return pipeline.is_pre_validation(self.record)

    def is_pre_operation(self) -> bool:
        return pipeline.is_pre_operation(self.record)

    def is_main_operation(self) -> bool:
        return pipeline.is_main_operation(self.record)

    def is_post_operation(self) -> bool:
        return pipeline.is_post_operation(self.record)

    def is_synchronous(self) -> bool:
        return pipeline.is_synchronous(self.record)

    def is_asynchronous(self) -> bool:
        return pipeline.is_asynchronous(self.record)

    def is_create(self) -> bool:
        return pipeline.is_create(self.record)

    def is_update(self) -> bool:
        return pipeline.is_update(self.record)

    def is_delete(self) -> bool:
        return pipeline.is_delete(self.record)

    def is_retrieve(self) -> bool:
        return pipeline.is_retrieve(self.record)

    def is_retrieve_multiple(self) -> bool:
        return pipeline.is_retrieve_multiple(self.record)

    def is_associate(self) -> bool:
        return pipeline.is_associate(self.record)

    def is_disassociate(self) -> bool:
        return pipeline.is_disassociate(self.record)

    def is_set_state(self) -> bool:
        return pipeline.is_set_state(self.record)

    def is_set_state_dynamic_entity(self) -> bool:
        return pipeline.is_set_state_dynamic_entity(self.record)

    def is_assign(self) -> bool:
        return pipeline.is_assign(self.record)

    def is_grant_access(self) -> bool:
        return pipeline.is_grant_access(self.record)

    def is_modify_access(self) -> bool:
        return pipeline.is_modify_access(self.record)

    def is_revoke_access(self) -> bool:
        return pipeline.is_revoke_access(self.record)

    def exceeds_depth(self, max_depth: int | None = None) -> bool:
        limit = self.config.max_depth if max_depth is None else max_depth
        return pipeline.exceeds_depth(self.record, limit)

    def is_initial_invocation(self) -> bool:
        return pipeline.is_initial_invocation(self.record)

    def is_message(self, message_name: str) -> bool:
        return pipeline.is_message(self.record, message_name)

    def get_shared_variable[T](
        self, key: str, expected_type: type[T], default: T | None = None
    ) -> T | None:
        return pipeline.get_shared_variable(self.record, key, expected_type, default)

    def set_shared_variable(self, key: str, value: object) -> None:
        pipeline.set_shared_variable(self.record, key, value)

    def has_shared_variable(self, key: str) -> bool:
        return pipeline.has_shared_variable(self.record, key)

    def remove_shared_variable(self, key: str) -> bool:
        return pipeline.remove_shared_variable(self.record, key)

    def get_root_context(self) -> InvocationRecord:
        return pipeline.get_root_context(self.record)

    def has_parent_context(self) -> bool:
        return pipeline.has_parent_context(self.record)

    # Tracing and logging

    def trace(self, message: str, label: str | None = None) -> None:
        if not message or not message.strip() or self.tracing_service is None:
            return
        self.tracing_service.trace(_labelled(message, label))

    def log_info(self, message: str, label: str | None = None) -> None:
        if not message or not message.strip():
            return
        formatted = _labelled(message, label)
        self._trace_raw(formatted)
        self.logger.info("%s", formatted)

    def log_warning(self, message: str, label: str | None = None) -> None:
        if not message or not message.strip():
            return
        formatted = _labelled(message, label)
        self._trace_raw(f"WARNING: {formatted}")
        self.logger.warning("%s", formatted)

    def log_error(
        self,
        message: str,
        label: str | None = None,
        exc: BaseException | None = None,
    ) -> None:
        if exc is None and (not message or not message.strip()):
            return
        formatted = _labelled(message, label)
        if exc is None:
            self._trace_raw(f"ERROR: {formatted}")
            self.logger.error("%s", formatted)
            return
        self._trace_raw(f"ERROR: {formatted}\n{exc!r}")
        self.logger.error("%s", formatted, exc_info=exc)

    def _trace_raw(self, message: str) -> None:
        if self.tracing_service is not None:
            self.tracing_service.trace(message)


def _labelled(message: str, label: str | None) -> str:
    return f"[{label}] - {message}" if label else message


def _first_image(images: Mapping[str, Entity] | None) -> Entity | None:
    if not images:
        return None
    return next(iter(images.values()))
