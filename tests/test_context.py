from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from pipedream.config import EngineConfig
from pipedream.context import PluginContext
from pipedream.domain.errors import MissingDependencyError
from pipedream.domain.model import (
    Entity,
    EntityReference,
    InvocationRecord,
    Message,
    OptionSetValue,
    Stage,
)
from pipedream.services import ServiceProvider, TraceSink
from tests.support.records import ACCOUNT_ID, RecordingTraceSink, make_entity, make_record


def _context(
    record: InvocationRecord,
    *,
    config: EngineConfig | None = None,
    logger: logging.Logger | None = None,
) -> tuple[PluginContext, RecordingTraceSink]:
    sink = RecordingTraceSink()
    services = ServiceProvider({InvocationRecord: record, TraceSink: sink})
    return PluginContext(services, config=config, logger=logger), sink


def test_requires_services_and_record() -> None:
    with pytest.raises(MissingDependencyError):
        PluginContext(None)
    with pytest.raises(MissingDependencyError, match="InvocationRecord"):
        PluginContext(ServiceProvider())


def test_without_sink_traces_are_dropped() -> None:
    context = PluginContext(ServiceProvider({InvocationRecord: make_record()}))

    context.trace("nowhere")
    context.log_info("still logged")

    assert context.tracing_service is None


def test_record_shortcuts() -> None:
    record = make_record(
        target={"name": "New"}, pre_image={"name": "Old"}, post_image={"name": "Done"}
    )
    context, _ = _context(record)

    assert context.target is not None and context.target["name"] == "New"
    assert context.target_reference is None
    assert context.pre_image is not None and context.pre_image["name"] == "Old"
    assert context.post_image is not None and context.post_image["name"] == "Done"
    assert context.message_name == Message.UPDATE
    assert context.primary_entity_name == "account"
    assert context.primary_entity_id == ACCOUNT_ID


def test_first_image_is_used_whatever_its_name() -> None:
    record = InvocationRecord(
        message_name=Message.DELETE,
        stage=Stage.PRE_VALIDATION,
        input_parameters={"Target": EntityReference("account", ACCOUNT_ID)},
        pre_entity_images={"Snapshot": make_entity({"name": "x"})},
    )
    context, _ = _context(record)

    assert isinstance(context.pre_image, Entity)
    assert context.post_image is None
    assert context.target is None
    assert context.target_reference == EntityReference("account", ACCOUNT_ID)


def test_resolution_uses_configured_image_names() -> None:
    record = InvocationRecord(
        message_name=Message.UPDATE,
        stage=Stage.POST_OPERATION,
        input_parameters={"Target": make_entity({"name": "New"})},
        pre_entity_images={"Before": make_entity({"name": "Old", "code": OptionSetValue(1)})},
        post_entity_images={"After": make_entity({"name": "New"})},
    )
    config = EngineConfig(pre_image_name="Before", post_image_name="After")
    context, _ = _context(record, config=config)

    assert context.get_final_attribute("code").value == OptionSetValue(1)
    assert context.get_final_attribute_value("code", OptionSetValue) == OptionSetValue(1)
    assert context.get_final_attribute_value("code", str, "none") == "none"
    assert context.get_original_attribute("name") == "Old"
    assert context.get_original_attribute_value("name", str) == "Old"
    assert context.get_post_image_attribute("name") == "New"
    assert context.get_post_image_attribute_value("name", str) == "New"
    assert context.has_attribute_changed("name")
    assert context.changed_attributes(["code", "name"]) == ["name"]


def test_classification_delegates() -> None:
    record = make_record(message_name=Message.CREATE, stage=Stage.PRE_VALIDATION, depth=2)
    context, _ = _context(record)

    assert context.is_create()
    assert not context.is_update()
    assert context.is_message(Message.CREATE)
    assert context.is_pre_validation()
    assert not context.is_post_operation()
    assert context.is_synchronous()
    assert not context.is_asynchronous()
    assert not context.is_initial_invocation()
    assert context.exceeds_depth()
    assert not context.exceeds_depth(2)


def test_exceeds_depth_uses_configured_maximum() -> None:
    context, _ = _context(make_record(depth=2), config=EngineConfig(max_depth=3))

    assert not context.exceeds_depth()


def test_shared_variables_and_parent_chain() -> None:
    root = make_record()
    child = make_record(depth=2, parent_context=root)
    context, _ = _context(child)

    context.set_shared_variable("seen", True)

    assert context.has_shared_variable("seen")
    assert context.get_shared_variable("seen", bool) is True
    assert context.remove_shared_variable("seen")
    assert context.get_shared_variable("seen", bool, False) is False
    assert context.has_parent_context()
    assert context.get_root_context() is root


def test_trace_adds_label_and_delta() -> None:
    context, sink = _context(make_record())

    context.trace("working", label="validate")
    context.trace("plain")
    context.trace("   ")

    assert len(sink.messages) == 2
    assert sink.messages[0].startswith("[+")
    assert sink.messages[0].endswith("] - [validate] - working")
    assert sink.messages[1].endswith("] - plain")


def test_trace_does_not_interpolate_braces() -> None:
    context, sink = _context(make_record())

    context.trace("payload {0} {name}")

    assert sink.messages[0].endswith("payload {0} {name}")


def test_log_levels_reach_trace_and_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.context")
    context, sink = _context(make_record(), logger=logger)

    with caplog.at_level(logging.INFO, logger="tests.context"):
        context.log_info("info message", label="rule")
        context.log_warning("careful")
        context.log_error("broken")
        context.log_info("")

    assert [line.split("] - ", 1)[1] for line in sink.messages] == [
        "[rule] - info message",
        "WARNING: careful",
        "ERROR: broken",
    ]
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "[rule] - info message"),
        (logging.WARNING, "careful"),
        (logging.ERROR, "broken"),
    ]


def test_log_error_with_exception(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.context")
    context, sink = _context(make_record(), logger=logger)
    error = RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="tests.context"):
        context.log_error("failed", exc=error)

    assert "ERROR: failed\nRuntimeError('boom')" in sink.messages[0]
    assert caplog.records[0].exc_info is not None
    assert caplog.records[0].exc_info[1] is error


def test_get_service_and_logger_from_provider() -> None:
    logger = logging.getLogger("tests.provided")
    marker = object()
    services = ServiceProvider({InvocationRecord: make_record(), logging.Logger: logger})
    services.register(object, marker)
    context = PluginContext(services)

    assert context.logger is logger
    assert context.get_service(object) is marker
    assert context.get_service(EntityReference) is None
    assert context.config == EngineConfig()


def test_reference_only_target_resolves_from_pre_image() -> None:
    record = make_record(
        target=EntityReference("account", uuid4()), pre_image={"name": "Stored"}
    )
    context, _ = _context(record)

    resolved = context.get_final_attribute("name")

    assert resolved.value == "Stored"
    assert not resolved.is_being_set
