"""Order update template: sent when an order's status changes with notify on."""


class OrderUpdateTemplate:
    kind = "order_update"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        status_name = context.get("status_name", "updated")
        return {
            "subject": f"Order #{order_number} is now {status_name}",
            "body": (
                f"Hi {context.get('first_name', '')},\n\n"
                f"Your order #{order_number} has been updated to: {status_name}\n\n"
                f"{context.get('status_comment', '')}\n\n"
                f"View your order: {context.get('order_view_url', '')}\n"
            ),
        }
