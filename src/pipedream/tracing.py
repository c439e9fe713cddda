"""Trace sink decorator that prefixes every line with the time since the previous one."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from pipedream.domain.errors import MissingDependencyError, TraceFormatError

if TYPE_CHECKING:
    from pipedream.domain.model import InvocationRecord
    from pipedream.services import TraceSink


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LocalTracingService:
    """Write ``[+<N>ms] - <message>`` lines to ``sink``.

    The first delta is measured from the operation's creation time, clamped to
    the current time when the host reports a creation time in the future.
    """

    def __init__(
        self,
        record: InvocationRecord | None,
        sink: TraceSink | None,
        *,
        clock: Clock = _utcnow,
    ) -> None:
        if record is None:
            raise MissingDependencyError("LocalTracingService requires an invocation record")
        if sink is None:
            raise MissingDependencyError("LocalTracingService requires a trace sink")
        self._sink = sink
        self._clock = clock
        now = clock()
        self._previous_trace_time = min(record.operation_created_on, now)

    @property
    def previous_trace_time(self) -> datetime:
        return self._previous_trace_time

    def trace(self, message: str, *args: object) -> None:
        now = self._clock()
        delta_ms = (now - self._previous_trace_time).total_seconds() * 1000
        if args:
            try:
                message = message.format(*args)
            except (IndexError, KeyError, ValueError) as exc:
                raise TraceFormatError(f"Failed to write trace message due to error {exc}") from exc
        self._sink.trace(f"[+{delta_ms:,.0f}ms] - {message}")
        self._previous_trace_time = now
