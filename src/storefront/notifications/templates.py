"""Email templates."""

from html import escape


def format_amount(amount) -> str:
    """Whole-unit amount with thousands separators, e.g. 1200000 -> "1,200,000"."""
    return f"{int(amount):,}"


class OrderPlacedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = format_amount(context.get("total", 0))
        return {
            "subject": f"Aura order {order_id} received",
            "body": (
                f"Thank you for your order {order_id}.\n\n"
                f"Order total: {total}\n\n"
                "You can track it at any time with your order number.\n\n"
                "Aura Store"
            ),
            "html_body": (
                "<h2>Thank you for your order!</h2>"
                f"<p>Order number: <strong>{escape(str(order_id))}</strong></p>"
                f"<p>Order total: <strong>{total}</strong></p>"
                "<p>You can track it at any time with your order number.</p>"
                "<p>Aura Store</p>"
            ),
        }
