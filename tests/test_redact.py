from __future__ import annotations

import logging

import pytest

from pyslots import ContainerConfig, SlotContainer
from pyslots._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "counter": 1,
        "user": {"name": "Ada", "email": "ada@example.com", "Password": "pw"},
        "session": "abc",
    }

    redacted = redact_for_log(payload, sensitive_keys=frozenset({"session"}))
    assert redacted["counter"] == 1
    assert redacted["user"]["name"] == "Ada"
    assert redacted["user"]["email"] == "<redacted>"
    assert redacted["user"]["Password"] == "<redacted>"
    assert redacted["session"] == "<redacted>"


def test_redact_for_log_truncates_long_strings_and_lists() -> None:
    redacted = redact_for_log({"value": "x" * 600, "items": list(range(10))}, max_string=10, max_items=3)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
    assert redacted["items"] == [0, 1, 2, "<+7 more>"]


def test_payload_logging_is_redacted(caplog: pytest.LogCaptureFixture) -> None:
    config = ContainerConfig(name="logged", log_payloads=True, sensitive_keys=frozenset({"secret_slot"}))
    container = SlotContainer({"secret_slot": "", "counter": 0}, config=config)

    with caplog.at_level(logging.DEBUG, logger="pyslots"):
        container.merge({"secret_slot": "hunter2", "counter": 1})

    text = caplog.text
    assert "hunter2" not in text
    assert "<redacted>" in text
    assert "logged" in text
