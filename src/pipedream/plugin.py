"""Base class for rules executed by the host pipeline."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pipedream.context import PluginContext
from pipedream.domain.errors import ExecutionAbortedError, MissingDependencyError, ServiceFaultError

if TYPE_CHECKING:
    from pipedream.services import ServiceProvider

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PluginResult:
    """Outcome of a single ``Plugin.execute`` call."""

    succeeded: bool
    error: str | None = None
    exception: BaseException | None = None

    @classmethod
    def success(cls) -> PluginResult:
        return cls(succeeded=True)

    @classmethod
    def failure(cls, exc: BaseException) -> PluginResult:
        return cls(succeeded=False, error=str(exc), exception=exc)


class Plugin(ABC):
    """Subclass and implement ``run``; the host calls ``execute`` once per invocation.

    ``execute`` traces entry and exit, and turns aborted executions and
    service faults raised by ``run`` into a failed ``PluginResult``. Any other
    exception propagates to the host unchanged.
    """

    def __init__(
        self,
        unsecure_config: str | None = None,
        secure_config: str | None = None,
        *,
        name: str | None = None,
    ) -> None:
        self.name = name or type(self).__qualname__
        self.unsecure_config = unsecure_config
        self.secure_config = secure_config

    def execute(self, services: ServiceProvider | None) -> PluginResult:
        if services is None:
            raise MissingDependencyError(f"{self.name}.execute() requires a service provider")

        context = self.create_context(services)
        record = context.record
        context.trace(
            f"Entered {self.name}.execute() "
            f"Correlation Id: {record.correlation_id}, "
            f"Initiating User: {record.initiating_user_id}"
        )
        try:
            self.run(context)
        except (ExecutionAbortedError, ServiceFaultError) as exc:
            context.trace(f"Exception: {exc!r}")
            log.warning("%s aborted: %s", self.name, exc)
            return PluginResult.failure(exc)
        finally:
            context.trace(f"Exiting {self.name}.execute()")
        return PluginResult.success()

    def create_context(self, services: ServiceProvider) -> PluginContext:
        return PluginContext(services)

    @abstractmethod
    def run(self, context: PluginContext) -> None:
        """Rule logic for one invocation."""
