import pytest


@pytest.fixture
def mailer():
    from notifications.channel import get_mailer

    return get_mailer()


@pytest.fixture
def mail_data():
    return {
        "order_number": "100",
        "order_view_url": "http://localhost/account/orders/view/100",
        "order_type": "delivery",
        "order_time": "18:30 01 Jan",
        "order_date": "01 Jan 24",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "Ada@Example.com",
        "telephone": "555-0100",
        "order_comment": "Ring twice",
        "order_payment": "Cash On Delivery",
        "order_menus": [
            {
                "menu_name": "Margherita",
                "menu_quantity": 2,
                "menu_price": "$9.50",
                "menu_subtotal": "$19.00",
                "menu_options": "Extra cheese = $1.00\nOlives = $0.50",
                "menu_comment": "Well done",
            }
        ],
        "order_totals": [
            {"order_total_title": "Sub Total", "order_total_value": "$19.00", "priority": 0},
            {"order_total_title": "Order Total", "order_total_value": "$24.50", "priority": 127},
        ],
        "order_address": "12 Analytical Row, London",
        "location_name": "Soho Kitchen",
        "location_email": "soho@orderdesk.test",
    }
