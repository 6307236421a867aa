"""Best-effort order notifications.

``notify_order_placed`` never raises. It is scheduled after the order has been
stored and its outcome is never reported back to the customer who checked out.
"""

import structlog

from storefront.notifications.channel import get_email_channel
from storefront.notifications.templates import OrderPlacedTemplate

logger = structlog.get_logger(__name__)


def notify_order_placed(email: str | None, order_id: str, total: int) -> None:
    if not email:
        return

    try:
        channel = get_email_channel()
        if channel is None:
            logger.debug("Email channel not configured, skipping order notification", order_id=order_id)
            return

        content = OrderPlacedTemplate.render({"order_id": order_id, "total": total})
        result = channel.send(
            to=email,
            subject=content["subject"],
            body=content["body"],
            html_body=content["html_body"],
        )
        if result.get("status") != "sent":
            logger.warning("Order notification not delivered", order_id=order_id, error=result.get("error"))
            return

        logger.info("Order notification sent", order_id=order_id, message_id=result.get("message_id"))
    except Exception as exc:
        logger.warning("Order notification failed", order_id=order_id, error=str(exc))
