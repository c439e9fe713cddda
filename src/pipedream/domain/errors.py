"""Errors raised while running rule code against an invocation."""

from __future__ import annotations


class ExecutionAbortedError(RuntimeError):
    """Raised when a rule run must be treated as a hard failure by the host."""


class TraceFormatError(ExecutionAbortedError):
    """Raised when a trace template references arguments that were not supplied."""


class MissingDependencyError(ExecutionAbortedError):
    """Raised at construction time when a required collaborator is unavailable."""


class ServiceFaultError(RuntimeError):
    """Raised by collaborating services when a request they serve fails."""
