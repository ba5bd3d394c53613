"""Order confirmation template: sent to the customer when an order is placed."""

from notifications.templates.lines import menu_lines, total_lines


class OrderTemplate:
    kind = "order"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "subject": f"Order #{order_number} received",
            "body": (
                f"Hi {context.get('first_name', '')},\n\n"
                f"Thank you for your order #{order_number} ({context.get('order_type', '')}).\n"
                f"Requested for: {context.get('order_time', '')}\n"
                f"Payment: {context.get('order_payment', '')}\n"
                f"Address: {context.get('order_address', '')}\n\n"
                f"{menu_lines(context)}\n\n"
                f"{total_lines(context)}\n\n"
                f"View your order: {context.get('order_view_url', '')}\n"
            ),
        }
