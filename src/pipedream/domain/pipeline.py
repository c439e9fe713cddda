"""Predicates that tell rule code where in the pipeline it is running."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipedream.domain.model import (
    DEFAULT_MAX_DEPTH,
    INITIAL_DEPTH,
    Message,
    Mode,
    Stage,
    typed_or_default,
)

if TYPE_CHECKING:
    from pipedream.domain.model import InvocationRecord


# Stage


def is_pre_validation(record: InvocationRecord) -> bool:
    return record.stage == Stage.PRE_VALIDATION


def is_pre_operation(record: InvocationRecord) -> bool:
    return record.stage == Stage.PRE_OPERATION


def is_main_operation(record: InvocationRecord) -> bool:
    return record.stage == Stage.MAIN_OPERATION


def is_post_operation(record: InvocationRecord) -> bool:
    return record.stage == Stage.POST_OPERATION


# Message


def is_message(record: InvocationRecord, message_name: str) -> bool:
    """Exact, case-sensitive match against the invocation's message name."""
    return record.message_name == message_name


def is_create(record: InvocationRecord) -> bool:
    return is_message(record, Message.CREATE)


def is_update(record: InvocationRecord) -> bool:
    return is_message(record, Message.UPDATE)


def is_delete(record: InvocationRecord) -> bool:
    return is_message(record, Message.DELETE)


def is_retrieve(record: InvocationRecord) -> bool:
    return is_message(record, Message.RETRIEVE)


def is_retrieve_multiple(record: InvocationRecord) -> bool:
    return is_message(record, Message.RETRIEVE_MULTIPLE)


def is_associate(record: InvocationRecord) -> bool:
    return is_message(record, Message.ASSOCIATE)


def is_disassociate(record: InvocationRecord) -> bool:
    return is_message(record, Message.DISASSOCIATE)


def is_set_state(record: InvocationRecord) -> bool:
    return is_message(record, Message.SET_STATE)


def is_set_state_dynamic_entity(record: InvocationRecord) -> bool:
    return is_message(record, Message.SET_STATE_DYNAMIC_ENTITY)


def is_assign(record: InvocationRecord) -> bool:
    return is_message(record, Message.ASSIGN)


def is_grant_access(record: InvocationRecord) -> bool:
    return is_message(record, Message.GRANT_ACCESS)


def is_modify_access(record: InvocationRecord) -> bool:
    return is_message(record, Message.MODIFY_ACCESS)


def is_revoke_access(record: InvocationRecord) -> bool:
    return is_message(record, Message.REVOKE_ACCESS)


# Mode


def is_synchronous(record: InvocationRecord) -> bool:
    return record.mode == Mode.SYNCHRONOUS


def is_asynchronous(record: InvocationRecord) -> bool:
    return record.mode == Mode.ASYNCHRONOUS


# Depth


def exceeds_depth(record: InvocationRecord, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Return ``True`` when the invocation is nested deeper than ``max_depth``.

    With the default of 1 any re-entrant invocation (depth 2 or more) counts as
    runaway recursion.
    """
    return record.depth > max_depth


def is_initial_invocation(record: InvocationRecord) -> bool:
    return record.depth == INITIAL_DEPTH


# Shared variables


def get_shared_variable[T](
    record: InvocationRecord,
    key: str,
    expected_type: type[T],
    default: T | None = None,
) -> T | None:
    """Return the shared variable ``key``, or a default when absent or of another type.

    Without an explicit ``default``, scalar types read as their zero value.
    """

    return typed_or_default(record.shared_variables.get(key), expected_type, default)


def set_shared_variable(record: InvocationRecord, key: str, value: object) -> None:
    record.shared_variables[key] = value


def has_shared_variable(record: InvocationRecord, key: str) -> bool:
    return key in record.shared_variables


def remove_shared_variable(record: InvocationRecord, key: str) -> bool:
    """Remove ``key`` and report whether anything was removed."""

    if key not in record.shared_variables:
        return False
    del record.shared_variables[key]
    return True


# Parent context


def get_root_context(record: InvocationRecord) -> InvocationRecord:
    current = record
    while current.parent_context is not None:
        current = current.parent_context
    return current


def has_parent_context(record: InvocationRecord) -> bool:
    return record.parent_context is not None
