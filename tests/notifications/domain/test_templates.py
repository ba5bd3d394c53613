"""Tests for mail templates: rendering and registry."""

import pytest
from notifications.templates import TEMPLATE_REGISTRY, fill_placeholders, get_template
from notifications.templates.order import OrderTemplate
from notifications.templates.order_alert import OrderAlertTemplate
from notifications.templates.order_update import OrderUpdateTemplate


class TestTemplateRegistry:
    def test_registry_has_the_three_order_kinds(self):
        assert set(TEMPLATE_REGISTRY) == {"order", "order_update", "order_alert"}

    def test_get_template_returns_correct_class(self):
        assert get_template("order_update") is OrderUpdateTemplate

    def test_get_template_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="No template registered"):
            get_template("welcome")


class TestFillPlaceholders:
    def test_known_names_are_replaced(self):
        assert fill_placeholders("Order {order_number} for {first_name}", {"order_number": 7, "first_name": "Ada"}) == (
            "Order 7 for Ada"
        )

    def test_unknown_and_structured_names_are_left(self):
        text = "{missing} {order_menus}"
        assert fill_placeholders(text, {"order_menus": [{"menu_name": "x"}]}) == text

    def test_none_text(self):
        assert fill_placeholders(None, {}) == ""


class TestOrderTemplate:
    def test_subject(self, mail_data):
        assert OrderTemplate.render(mail_data)["subject"] == "Order #100 received"

    def test_body_lists_menus_options_and_totals(self, mail_data):
        body = OrderTemplate.render(mail_data)["body"]
        assert "2 x Margherita  $19.00" in body
        assert "+ Extra cheese = $1.00" in body
        assert "+ Olives = $0.50" in body
        assert "Order Total: $24.50" in body
        assert "http://localhost/account/orders/view/100" in body

    def test_renders_with_missing_fields(self):
        content = OrderTemplate.render({})
        assert content["subject"] == "Order #N/A received"


class TestOrderAlertTemplate:
    def test_subject_names_location(self, mail_data):
        assert OrderAlertTemplate.render(mail_data)["subject"] == "New order #100 at Soho Kitchen"

    def test_body_has_customer_contact(self, mail_data):
        body = OrderAlertTemplate.render(mail_data)["body"]
        assert "Ada Lovelace <Ada@Example.com> 555-0100" in body
        assert "Comment: Ring twice" in body


class TestOrderUpdateTemplate:
    def test_subject_and_body(self, mail_data):
        content = OrderUpdateTemplate.render({**mail_data, "status_name": "Preparation", "status_comment": "Soon!"})
        assert content["subject"] == "Order #100 is now Preparation"
        assert "Soon!" in content["body"]
