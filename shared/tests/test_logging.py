"""
Tests for structured logging.
"""

import json
import logging
from decimal import Decimal
from uuid import uuid4

from shared.logging import JSONFormatter, bind_session, get_logger, get_session_id, set_session_id
from shared.models.flow import FlowSession, FlowState


def _format_last(caplog) -> dict:
    assert len(caplog.records) > 0
    return json.loads(JSONFormatter().format(caplog.records[-1]))


def test_get_logger_creates_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_module"


def test_get_logger_does_not_duplicate_handlers():
    first = get_logger("test_module_handlers")
    handler_count = len(first.handlers)

    second = get_logger("test_module_handlers")

    assert second is first
    assert len(second.handlers) == handler_count


def test_logger_outputs_json_with_extra_fields(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)

    logger.info("Test message", extra={"stage": "rendering", "cost": 0.021, "busy": True})

    log_data = _format_last(caplog)
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test_module"
    assert log_data["message"] == "Test message"
    assert log_data["stage"] == "rendering"
    assert log_data["cost"] == 0.021
    assert log_data["busy"] is True
    assert "timestamp" in log_data


def test_non_primitive_extra_values_are_stringified(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)
    value = uuid4()

    logger.info("With uuid", extra={"gallery_id": value})

    assert _format_last(caplog)["gallery_id"] == str(value)


def test_logger_includes_session_id(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)
    session_id = uuid4()
    set_session_id(session_id)

    try:
        logger.info("Test message")
        assert get_session_id() == session_id
        assert _format_last(caplog)["session_id"] == str(session_id)
    finally:
        set_session_id(None)


def test_logger_excludes_session_id_when_not_set(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)
    set_session_id(None)

    logger.info("Test message")

    assert "session_id" not in _format_last(caplog)


def test_exception_is_included(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.error("Something failed", exc_info=True)

    log_data = _format_last(caplog)
    assert "RuntimeError: boom" in log_data["exception"]


def test_bound_session_reports_current_flow_state(caplog):
    """flow_state is read when the record is formatted, not when it is bound."""
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)
    session = FlowSession()
    bind_session(session)

    try:
        logger.info("Before transition")
        before = _format_last(caplog)
        session.state = FlowState.IDENTIFY
        logger.info("After transition")
        after = _format_last(caplog)
    finally:
        bind_session(None)

    assert before["session_id"] == str(session.session_id)
    assert before["flow_state"] == "intake"
    assert after["flow_state"] == "identify"
    assert get_session_id() is None


def test_set_session_id_clears_bound_session(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)
    bind_session(FlowSession())
    session_id = uuid4()

    try:
        set_session_id(session_id)
        logger.info("Id only")
        log_data = _format_last(caplog)
    finally:
        set_session_id(None)

    assert log_data["session_id"] == str(session_id)
    assert "flow_state" not in log_data


def test_enum_and_decimal_extras_are_rendered_exactly(caplog):
    logger = get_logger("test_module")
    logger.setLevel(logging.INFO)

    logger.info("Cost", extra={"state": FlowState.COMPLETE, "total": Decimal("0.022"), "tags": ("a", FlowState.FAILED)})

    log_data = _format_last(caplog)
    assert log_data["state"] == "complete"
    assert log_data["total"] == "0.022"
    assert log_data["tags"] == ["a", "failed"]
