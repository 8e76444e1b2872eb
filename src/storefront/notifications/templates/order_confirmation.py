"""Order confirmation template: sent when an order is placed."""

from html import escape

from storefront.notifications.notification import NotificationKind
from storefront.notifications.receipt.document import format_money, render_items_table_html
from storefront.notifications.templates.text import html_to_text


class OrderConfirmationTemplate:
    kind = NotificationKind.ORDER_CONFIRMED.value

    @staticmethod
    def render(context: dict) -> dict:
        receipt = context["receipt"]
        html = (
            f"<h2>Thank you for your order, {escape(receipt.customer_name)}!</h2>"
            f"<p>Order #{escape(receipt.reference)} was placed on {receipt.date_label}.</p>"
            f"{render_items_table_html(receipt)}"
            f"<p><strong>Total: {format_money(receipt.total)}</strong></p>"
            f"<p>Payment method: {escape(receipt.payment_method)}</p>"
            "<p>We will email you again as your order moves along.</p>"
        )
        if context.get("with_receipt"):
            html += "<p>Your PDF receipt is attached.</p>"
        return {
            "subject": f"Order Confirmation - {receipt.order_id}",
            "html": html,
            "text": html_to_text(html),
        }
