from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from pipedream.domain.model import (
    Entity,
    EntityReference,
    InvocationRecord,
    Message,
    Mode,
    ResolvedValue,
    Stage,
)


def test_defaults() -> None:
    record = InvocationRecord(message_name=Message.CREATE, stage=Stage.PRE_VALIDATION)

    assert record.mode == Mode.SYNCHRONOUS
    assert record.depth == 1
    assert record.parent_context is None
    assert record.pre_entity_images is None
    assert record.operation_created_on.tzinfo is not None


def test_rejects_depth_below_one() -> None:
    with pytest.raises(ValueError, match="depth must be >= 1"):
        InvocationRecord(message_name=Message.CREATE, stage=Stage.PRE_OPERATION, depth=0)


def test_rejects_unknown_stage_and_mode() -> None:
    with pytest.raises(ValueError, match="Unknown pipeline stage"):
        InvocationRecord(message_name=Message.CREATE, stage=15)
    with pytest.raises(ValueError, match="Unknown execution mode"):
        InvocationRecord(message_name=Message.CREATE, stage=Stage.PRE_OPERATION, mode=2)


def test_rejects_parent_deeper_than_child() -> None:
    parent = InvocationRecord(message_name=Message.UPDATE, stage=Stage.POST_OPERATION, depth=3)

    with pytest.raises(ValueError, match="exceeds child depth"):
        InvocationRecord(
            message_name=Message.CREATE,
            stage=Stage.PRE_OPERATION,
            depth=2,
            parent_context=parent,
        )


def test_naive_creation_time_is_treated_as_utc() -> None:
    record = InvocationRecord(
        message_name=Message.CREATE,
        stage=Stage.PRE_OPERATION,
        operation_created_on=datetime(2025, 1, 1, 12),  # noqa: DTZ001
    )

    assert record.operation_created_on == datetime(2025, 1, 1, 12, tzinfo=UTC)


def test_entity_attributes_are_read_only() -> None:
    source = {"name": "Contoso"}
    entity = Entity("account", attributes=source)
    source["name"] = "Changed"

    assert entity["name"] == "Contoso"
    assert "name" in entity
    assert list(entity) == ["name"]
    assert len(entity) == 1
    with pytest.raises(TypeError):
        entity.attributes["name"] = "Other"  # type: ignore[index]


def test_entity_to_reference() -> None:
    record_id = uuid4()

    assert Entity("account", record_id).to_reference() == EntityReference("account", record_id)
    with pytest.raises(ValueError, match="no id"):
        Entity("account").to_reference()


def test_resolved_value_found() -> None:
    assert not ResolvedValue().found
    assert ResolvedValue(None, is_being_set=True).found
    assert ResolvedValue("x").found


def test_resolved_value_snapshot_hit_with_null_is_found() -> None:
    assert ResolvedValue(None, in_snapshot=True).found
    assert ResolvedValue(None, in_snapshot=True) == ResolvedValue()
