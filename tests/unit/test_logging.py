"""Tests for the structlog secret redaction processor."""

from bbrecords.logging import redact_secrets


class TestRedactSecrets:
    """Tests for redact_secrets."""

    def test_password_is_dropped(self):
        event = redact_secrets(None, "info", {"event": "login_failed", "password": "hunter2", "client": "10.0.0.1"})
        assert event == {"event": "login_failed", "client": "10.0.0.1"}

    def test_configured_secrets_are_dropped(self):
        event = redact_secrets(
            None,
            "info",
            {"event": "startup", "session_secret": "s", "app_password": "p", "cron_secret": "c", "authorization": "Bearer c"},
        )
        assert event == {"event": "startup"}

    def test_token_is_truncated(self):
        """Test that a full token is cut down to its 20-character preview."""
        token = "eyJwYXRpZW50SWQiOiJwYXRpZW50LTQyIn0" * 3
        event = redact_secrets(None, "info", {"event": "share_token_rejected", "token": token})
        assert event["token"] == token[:20] + "..."

    def test_token_preview_is_left_unchanged(self):
        preview = "eyJwYXRpZW50SWQiOiJw..."
        event = redact_secrets(None, "info", {"event": "share_token_rejected", "token": preview})
        assert event["token"] == preview

    def test_short_token_kept(self):
        event = redact_secrets(None, "info", {"event": "x", "token": "abc"})
        assert event["token"] == "abc"

    def test_event_without_secrets_untouched(self):
        event = {"event": "heartbeat_ok", "patients": 3}
        assert redact_secrets(None, "info", dict(event)) == event
