"""Capability locator and trace sinks supplied by the host."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, cast, runtime_checkable

from pipedream.config import TRACE_LOGGER
from pipedream.domain.errors import MissingDependencyError

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class TraceSink(Protocol):
    """Receives fully formatted trace lines."""

    def trace(self, message: str) -> None: ...


class LoggingTraceSink:
    """Trace sink that writes every line to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger(TRACE_LOGGER)
        self._level = level

    def trace(self, message: str) -> None:
        self._logger.log(self._level, "%s", message)


class ServiceProvider:
    """Resolve-by-type lookup for collaborating services.

    Lookups are exact on the registered type; a service registered under a
    protocol or base class must be requested with that same type.
    """

    def __init__(self, services: Mapping[type, object] | None = None) -> None:
        self._services: dict[type, object] = dict(services or {})

    def register[T](self, service_type: type[T], instance: T) -> None:
        self._services[service_type] = instance

    def get[T](self, service_type: type[T]) -> T | None:
        return cast("T | None", self._services.get(service_type))

    def require[T](self, service_type: type[T]) -> T:
        service = self.get(service_type)
        if service is None:
            raise MissingDependencyError(
                f"Required service {service_type.__name__} is not registered"
            )
        return service

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._services
