"""Tests for log sanitization helpers."""

from uuid import uuid4

from blog_api.managers.token_manager import create_access_token
from blog_api.monitoring import redact_pii, sanitize_headers, sanitize_log_message
from blog_api.monitoring.logging import sanitize_event_dict


class TestSanitizeLogMessage:
    """Test cases for sanitize_log_message."""

    def test_control_characters_escaped(self) -> None:
        """Forged log lines cannot be injected through newlines."""
        assert sanitize_log_message("ok\nFAKE ENTRY\r\t") == "ok\\nFAKE ENTRY\\r\\t"

    def test_null_removed(self) -> None:
        assert sanitize_log_message("a\x00b") == "ab"


class TestSanitizeHeaders:
    """Test cases for sanitize_headers."""

    def test_sensitive_headers_redacted(self) -> None:
        headers = {
            "Authorization": "Bearer secret",
            "Cookie": "authToken=secret",
            "Content-Type": "application/json",
        }

        assert sanitize_headers(headers) == {
            "Authorization": "[REDACTED]",
            "Cookie": "[REDACTED]",
            "Content-Type": "application/json",
        }


class TestRedactPii:
    """Test cases for redact_pii."""

    def test_email(self) -> None:
        assert redact_pii("User ada@example.com logged in") == "User [REDACTED_EMAIL] logged in"

    def test_jwt(self) -> None:
        token = create_access_token(user_id=uuid4())
        assert redact_pii(f"token={token}") == "token=[REDACTED_JWT]"

    def test_plain_text_untouched(self) -> None:
        assert redact_pii("Blog created") == "Blog created"


class TestSanitizeEventDict:
    """Test cases for the structlog processor."""

    def test_values_and_headers(self) -> None:
        event = {
            "event": "Login for ada@example.com\nnext",
            "headers": {"authorization": "Bearer x"},
            "count": 3,
        }

        result = sanitize_event_dict(None, "info", event)

        assert result["event"] == "Login for [REDACTED_EMAIL]\\nnext"
        assert result["headers"] == {"authorization": "[REDACTED]"}
        assert result["count"] == 3

    def test_credential_keys_replaced(self) -> None:
        """Values under credential keys are dropped whatever their type."""
        event = {"event": "signup", "password": "hunter22", "access_token": 12345}

        result = sanitize_event_dict(None, "info", event)

        assert result["password"] == "[REDACTED]"
        assert result["access_token"] == "[REDACTED]"
        assert result["event"] == "signup"
