"""Receipt document: the data every receipt renderer presents.

``build_receipt`` resolves each order line against the catalogue. A game that
has since been removed still yields a row, marked unavailable, so renderers
never have to deal with a missing reference.
"""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from html import escape

from storefront.catalogue.lookup import find_game
from storefront.order.order import PAYMENT_METHOD_LABELS

STORE_NAME = "GameBazaar"
UNAVAILABLE_TITLE = "Game no longer available"
UNAVAILABLE_PLATFORM = "N/A"


def store_currency() -> str:
    return os.getenv("STORE_CURRENCY", "BDT")


def format_money(amount: float, currency: str | None = None) -> str:
    return f"{currency or store_currency()} {amount:,.2f}"


@dataclass(frozen=True)
class ReceiptLine:
    title: str
    platform: str
    quantity: int
    unit_price: float
    available: bool = True

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@dataclass(frozen=True)
class Receipt:
    order_id: str
    created_at: datetime | None
    customer_name: str
    customer_email: str
    payment_method: str
    is_paid: bool
    status: str
    lines: list[ReceiptLine] = field(default_factory=list)
    tax: float = 0.0
    shipping: float = 0.0
    approved_by_name: str | None = None
    approved_by_email: str | None = None
    approved_at: datetime | None = None

    @property
    def reference(self) -> str:
        return self.order_id[-8:].upper()

    @property
    def date_label(self) -> str:
        return self.created_at.strftime("%d %b %Y") if self.created_at else ""

    @property
    def subtotal(self) -> float:
        return round(sum(line.line_total for line in self.lines), 2)

    @property
    def total(self) -> float:
        return round(self.subtotal + self.tax + self.shipping, 2)

    @property
    def is_approved(self) -> bool:
        return bool(self.approved_by_name)


def payment_label(method: str | None) -> str:
    return PAYMENT_METHOD_LABELS.get(method, method or "Unknown").upper()


def build_receipt(order, user, lookup: Callable = find_game) -> Receipt:
    lines = []
    for line in order.lines:
        game = lookup(line.game_id)
        if game is None:
            lines.append(
                ReceiptLine(
                    title=UNAVAILABLE_TITLE,
                    platform=UNAVAILABLE_PLATFORM,
                    quantity=line.quantity,
                    unit_price=line.price,
                    available=False,
                )
            )
        else:
            lines.append(
                ReceiptLine(
                    title=game.title,
                    platform=", ".join(game.platform_list) or UNAVAILABLE_PLATFORM,
                    quantity=line.quantity,
                    unit_price=line.price,
                )
            )

    tax = order.tax_price or 0.0

    approver = order.approved_by
    return Receipt(
        order_id=str(order.id),
        created_at=order.created_at,
        customer_name=user.name,
        customer_email=user.email,
        payment_method=payment_label(order.payment_method),
        is_paid=bool(order.is_paid),
        status=order.status,
        lines=lines,
        tax=tax,
        shipping=order.shipping_price or 0.0,
        approved_by_name=approver.name if approver else None,
        approved_by_email=approver.email if approver else None,
        approved_at=order.approved_at,
    )


def render_items_table_html(receipt: Receipt) -> str:
    rows = []
    for line in receipt.lines:
        title = escape(line.title)
        if not line.available:
            title = f"<em>{title}</em>"
        rows.append(
            "<tr>"
            f"<td>{title}</td>"
            f"<td>{escape(line.platform)}</td>"
            f"<td style='text-align:center'>{line.quantity}</td>"
            f"<td style='text-align:right'>{format_money(line.unit_price)}</td>"
            f"<td style='text-align:right'>{format_money(line.line_total)}</td>"
            "</tr>"
        )

    return (
        "<table style='width:100%;border-collapse:collapse'>"
        "<thead><tr><th align='left'>Game</th><th align='left'>Platform</th>"
        "<th>Qty</th><th align='right'>Unit price</th><th align='right'>Total</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
    )


def render_receipt_html(receipt: Receipt) -> str:
    """HTML rendition of the receipt, with the same sections as the PDF."""
    approval = ""
    if receipt.is_approved:
        approval = (
            "<div class='approval'>"
            f"<p>Approved by {escape(receipt.approved_by_name)} ({escape(receipt.approved_by_email or '')})</p>"
            "</div>"
        )

    return (
        "<div class='receipt'>"
        f"<h1>{STORE_NAME} Receipt</h1>"
        f"<p>Order #{escape(receipt.reference)} <small>({escape(receipt.order_id)})</small></p>"
        f"<p>Date: {receipt.date_label}</p>"
        f"<p>Customer: {escape(receipt.customer_name)} &lt;{escape(receipt.customer_email)}&gt;</p>"
        f"<p>Payment method: {escape(receipt.payment_method)} "
        f"({'Paid' if receipt.is_paid else 'Unpaid'})</p>"
        f"{render_items_table_html(receipt)}"
        "<table class='totals'>"
        f"<tr><td>Subtotal</td><td align='right'>{format_money(receipt.subtotal)}</td></tr>"
        f"<tr><td>Tax</td><td align='right'>{format_money(receipt.tax)}</td></tr>"
        f"<tr><td>Shipping</td><td align='right'>{format_money(receipt.shipping)}</td></tr>"
        f"<tr><th align='left'>Total</th><th align='right'>{format_money(receipt.total)}</th></tr>"
        "</table>"
        f"{approval}"
        f"<p class='footer'>Thank you for shopping with {STORE_NAME}!</p>"
        "</div>"
    )
