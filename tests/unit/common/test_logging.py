"""Unit tests for the logging pipeline."""

from core.logging import REDACTED, redact_sensitive_fields


class TestRedactSensitiveFields:
    def test_redacts_nested_credentials(self) -> None:
        event = {
            "event": "registration_started",
            "data": {
                "name": "Jane",
                "password": "p",
                "repeat_password": "p",
            },
        }

        result = redact_sensitive_fields(None, "debug", event)

        assert result["event"] == "registration_started"
        assert result["data"]["password"] == REDACTED
        assert result["data"]["repeat_password"] == REDACTED
        assert result["data"]["name"] == "Jane"

    def test_redacts_inside_lists(self) -> None:
        event = {"event": "x", "items": [{"Password": "p"}, "plain"]}

        result = redact_sensitive_fields(None, "info", event)

        assert result["items"] == [{"Password": REDACTED}, "plain"]

    def test_leaves_other_fields(self) -> None:
        event = {"event": "x", "id": "abc-123", "count": 2}

        assert redact_sensitive_fields(None, "info", event) == event
