"""Log sanitization tests."""

import logging

from common import logging_utils
from common.logging_utils import _sanitize_extra, log_event


def test_sensitive_keys_dropped():
    cleaned = _sanitize_extra(
        {
            "contents": "What is revenue?",
            "signature": "ab" * 32,
            "Secret": "s3cr3t",
            "status": 403,
        }
    )
    assert cleaned == {"status": "403"}


def test_log_event_never_writes_sensitive_values(caplog, monkeypatch):
    # The gateway logger does not propagate; let caplog see it whichever way
    # the installed pytest attaches its handler.
    monkeypatch.setattr(logging_utils._logger, "propagate", True)

    with caplog.at_level(logging.INFO, logger="ragsig"):
        log_event(
            "gateway_rejected_request",
            request_id="req-1",
            extra={"status": "403", "signature": "deadbeef", "response": "Revenue was $5M"},
            level="warning",
        )

    records = [r for r in caplog.records if r.name == "ragsig"]
    messages = {r.getMessage() for r in records}

    assert len(messages) == 1
    assert {r.levelno for r in records} == {logging.WARNING}

    [message] = messages
    assert message.startswith("gateway_rejected_request ")
    assert "request_id=req-1" in message
    assert "status=403" in message
    assert "deadbeef" not in message
    assert "Revenue" not in message
