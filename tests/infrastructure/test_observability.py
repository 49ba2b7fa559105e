"""Structured logging: JSONFormatter output shape and ledger extras."""

import json
import logging

import pytest

from ecertify.core.errors import NotRegisteredError
from ecertify.infrastructure.clock import ManualClock
from ecertify.infrastructure.observability import JSONFormatter
from ecertify.services.ledger import Ledger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "ecertify.services.ledger", logging.INFO, __file__, 1,
        "CertificateVerified committed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "ecertify.services.ledger"
    assert out["message"] == "CertificateVerified committed"
    assert "timestamp" in out


def test_json_formatter_surfaces_ledger_extras():
    out = json.loads(JSONFormatter().format(_record(
        actor="0xabc", operation="verify_certificate",
        event_kind="CertificateVerified", sequence=0,
    )))
    assert out["actor"] == "0xabc"
    assert out["operation"] == "verify_certificate"
    assert out["event_kind"] == "CertificateVerified"
    assert out["sequence"] == 0
    assert "error_code" not in out


def test_rejection_logged_with_error_code(caplog):
    ledger = Ledger(clock=ManualClock())
    with caplog.at_level(logging.INFO, logger="ecertify.services.ledger"):
        with pytest.raises(NotRegisteredError):
            ledger.update_profile("0x" + "11" * 20, "Ghost", "")
    rejected = [r for r in caplog.records if getattr(r, "error_code", None)]
    assert rejected[0].error_code == "NOT_REGISTERED"
    assert rejected[0].operation == "update_profile"
