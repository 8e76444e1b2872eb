"""Order status update template: sent when fulfillment moves an order on."""

from html import escape

from storefront.notifications.notification import NotificationKind
from storefront.notifications.templates.text import html_to_text

STATUS_MESSAGES = {
    "processing": "Great news! Your order #{ref} has been received and is now being processed.",
    "approved": "Your order #{ref} has been approved and will be shipped soon.",
    "shipped": "Your order #{ref} has been shipped! You should receive your games within 3-5 business days.",
    "delivered": "Your order #{ref} has been delivered. We hope you enjoy your new games!",
    "cancelled": (
        "We're sorry, but your order #{ref} has been cancelled. "
        "Please contact customer support for more information."
    ),
}


class StatusUpdateTemplate:
    kind = NotificationKind.STATUS_CHANGED.value

    @staticmethod
    def render(context: dict) -> dict:
        receipt = context["receipt"]
        status = context["status"]
        message = STATUS_MESSAGES.get(status, "The status of your order #{ref} is now {status}.")
        html = (
            f"<h2>Hello {escape(receipt.customer_name)},</h2>"
            f"<p>{escape(message.format(ref=receipt.reference, status=status))}</p>"
            f"<p>Current status: <strong>{escape(status.upper())}</strong></p>"
        )
        if context.get("with_receipt"):
            html += "<p>An updated PDF receipt is attached.</p>"
        return {
            "subject": f"Order Status Update - {receipt.order_id} ({status.upper()})",
            "html": html,
            "text": html_to_text(html),
        }
