"""Tests for the fake email adapter and the mailer registry."""

from notifications.channel import get_mailer, reset_mailer, set_mailer
from notifications.channel.email_port import EmailPort
from notifications.channel.fake_email import FakeEmailAdapter


class TestFakeEmailAdapter:
    def test_is_an_email_port(self):
        assert isinstance(FakeEmailAdapter(), EmailPort)

    def test_send_records_message(self):
        adapter = FakeEmailAdapter()
        result = adapter.send("ada@example.com", "Hello", "Body", sender="shop@x.test", sender_name="Shop")

        assert result["status"] == "sent"
        assert result["message_id"].startswith("email-")
        assert adapter.sent_to("ada@example.com")[0]["from_name"] == "Shop"

    def test_configured_failure(self):
        adapter = FakeEmailAdapter()
        adapter.configure(should_succeed=False, failure_reason="SMTP down")

        result = adapter.send("ada@example.com", "Hello", "Body")

        assert result == {"message_id": None, "status": "failed", "error": "SMTP down"}
        assert adapter.sent_emails == []

    def test_reset(self):
        adapter = FakeEmailAdapter()
        adapter.send("ada@example.com", "Hello", "Body")
        adapter.configure(should_succeed=False)

        adapter.reset()

        assert adapter.sent_emails == []
        assert adapter.should_succeed is True


class TestMailerRegistry:
    def test_default_is_fake_singleton(self):
        assert isinstance(get_mailer(), FakeEmailAdapter)
        assert get_mailer() is get_mailer()

    def test_set_and_reset(self):
        custom = FakeEmailAdapter()
        set_mailer(custom)
        assert get_mailer() is custom

        reset_mailer()
        assert get_mailer() is not custom
