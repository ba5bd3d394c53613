"""Tests for the notification dispatcher."""

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.dispatcher import NotificationDispatcher
from ordering.exceptions import NotificationFailure


@pytest.fixture
def dispatcher():
    return NotificationDispatcher(site_email="kitchen@orderdesk.test", site_name="OrderDesk Kitchen")


class TestDispatch:
    def test_sends_rendered_template(self, dispatcher, mailer, mail_data):
        assert dispatcher.dispatch("order", "Ada@Example.com", mail_data) is True

        [mail] = mailer.sent_emails
        assert mail["to"] == "ada@example.com"
        assert mail["from"] == "kitchen@orderdesk.test"
        assert mail["from_name"] == "OrderDesk Kitchen"
        assert mail["subject"] == "Order #100 received"

    def test_status_comment_is_filled_before_rendering(self, dispatcher, mailer, mail_data):
        data = {**mail_data, "status_name": "Ready", "status_comment": "Order {order_number} is ready"}

        dispatcher.dispatch("order_update", mail_data["email"], data)

        assert "Order 100 is ready" in mailer.sent_emails[0]["body"]
        assert data["status_comment"] == "Order {order_number} is ready"

    def test_uses_given_mailer(self, mail_data, mailer):
        own = FakeEmailAdapter()
        dispatcher = NotificationDispatcher("a@b.test", "AB", mailer=own)

        dispatcher.dispatch("order", "ada@example.com", mail_data)

        assert len(own.sent_emails) == 1
        assert mailer.sent_emails == []


class TestFailures:
    def test_delivery_failure_returns_false(self, dispatcher, mailer, mail_data):
        mailer.configure(should_succeed=False)
        assert dispatcher.dispatch("order", "ada@example.com", mail_data) is False

    def test_missing_recipient_returns_false(self, dispatcher, mailer, mail_data):
        assert dispatcher.dispatch("order", "", mail_data) is False
        assert mailer.sent_emails == []

    def test_empty_data_returns_false(self, dispatcher):
        assert dispatcher.dispatch("order", "ada@example.com", {}) is False

    def test_unknown_kind_returns_false(self, dispatcher, mail_data):
        assert dispatcher.dispatch("welcome", "ada@example.com", mail_data) is False

    def test_adapter_exception_returns_false(self, mail_data):
        class BrokenMailer(FakeEmailAdapter):
            def send(self, *args, **kwargs):
                raise ConnectionError("SMTP unreachable")

        dispatcher = NotificationDispatcher("a@b.test", "AB", mailer=BrokenMailer())
        assert dispatcher.dispatch("order", "ada@example.com", mail_data) is False

    def test_deliver_raises_notification_failure(self, dispatcher, mailer, mail_data):
        mailer.configure(should_succeed=False, failure_reason="SMTP down")
        with pytest.raises(NotificationFailure) as exc_info:
            dispatcher.deliver("order", "ada@example.com", mail_data)
        assert exc_info.value.messages == {"recipient": ["SMTP down"]}
