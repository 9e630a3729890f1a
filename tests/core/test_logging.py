from __future__ import annotations

import json
import logging

from skill_registry.core.logging import _ContainerFormatter, _JsonFormatter, setup_logging


def _record(level: int = logging.INFO, msg: str = "hello", lineno: int = 1):
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="svc.py",
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_setup_logging_sets_root_level() -> None:
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_defaults_to_info_for_unknown_level() -> None:
    setup_logging("nonexistent")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_quiets_uvicorn_at_debug() -> None:
    setup_logging("debug")
    assert logging.getLogger("uvicorn").level == logging.WARNING


def test_setup_logging_selects_json_formatter() -> None:
    setup_logging("info", json_format=True)
    [handler] = logging.getLogger().handlers
    assert isinstance(handler.formatter, _JsonFormatter)
    setup_logging("info")


def test_container_formatter_location_only_for_warning_and_above() -> None:
    fmt = _ContainerFormatter()
    assert "[svc.py:" not in fmt.format(_record(logging.INFO))
    assert "[svc.py:42]" in fmt.format(_record(logging.WARNING, lineno=42))


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(msg="issued")))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "test.logger"
    assert parsed["message"] == "issued"
    assert "timestamp" in parsed


def test_json_formatter_lifts_registry_fields() -> None:
    record = _record(logging.WARNING, msg="Rejected NotOwner")
    record.caller = "issuer-a"  # type: ignore[attr-defined]
    record.error = "NotOwner"  # type: ignore[attr-defined]
    record.credential_id = 7  # type: ignore[attr-defined]
    record.request_id = "abc-123"  # type: ignore[attr-defined]

    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["caller"] == "issuer-a"
    assert parsed["error"] == "NotOwner"
    assert parsed["credential_id"] == 7
    assert parsed["request_id"] == "abc-123"


def test_json_formatter_omits_missing_fields() -> None:
    parsed = json.loads(_JsonFormatter().format(_record()))
    assert "caller" not in parsed
    assert "credential_id" not in parsed
