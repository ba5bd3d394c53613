"""Order alert template: tells a location or the site admin a new order came in."""

from notifications.templates.lines import menu_lines, total_lines


class OrderAlertTemplate:
    kind = "order_alert"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        customer = f"{context.get('first_name', '')} {context.get('last_name', '')}".strip()
        return {
            "subject": f"New order #{order_number} at {context.get('location_name', 'your location')}",
            "body": (
                f"Order #{order_number} placed on {context.get('order_date', '')}\n"
                f"Type: {context.get('order_type', '')} for {context.get('order_time', '')}\n"
                f"Customer: {customer} <{context.get('email', '')}> {context.get('telephone', '')}\n"
                f"Address: {context.get('order_address', '')}\n"
                f"Payment: {context.get('order_payment', '')}\n"
                f"Comment: {context.get('order_comment', '')}\n\n"
                f"{menu_lines(context)}\n\n"
                f"{total_lines(context)}\n"
            ),
        }
