"""PDF receipt renderer built on reportlab."""

from io import BytesIO
from xml.sax.saxutils import escape

import structlog
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from storefront.errors import ReceiptRenderingError
from storefront.notifications.receipt.document import STORE_NAME, Receipt, format_money
from storefront.notifications.receipt.port import ReceiptRenderer

logger = structlog.get_logger(__name__)

_BRAND = colors.HexColor("#1f2937")
_MUTED = colors.HexColor("#6b7280")


class PdfReceiptRenderer(ReceiptRenderer):
    def render(self, receipt: Receipt) -> bytes:
        buffer = BytesIO()
        try:
            doc = SimpleDocTemplate(
                buffer,
                pagesize=A4,
                leftMargin=18 * mm,
                rightMargin=18 * mm,
                topMargin=18 * mm,
                bottomMargin=18 * mm,
                title=f"{STORE_NAME} Receipt {receipt.reference}",
            )
            doc.build(self._story(receipt))
        except Exception as exc:
            logger.warning("pdf_build_failed", order_id=receipt.order_id, error=str(exc))
            raise ReceiptRenderingError(f"Could not render receipt for order {receipt.order_id}: {exc}") from exc
        return buffer.getvalue()

    def _story(self, receipt: Receipt) -> list:
        styles = getSampleStyleSheet()
        body = styles["BodyText"]

        story = [
            Paragraph(f"{STORE_NAME}", styles["Title"]),
            Paragraph("Order Receipt", styles["Heading2"]),
            Spacer(1, 4 * mm),
            Paragraph(f"<b>Order:</b> #{escape(receipt.reference)} ({escape(receipt.order_id)})", body),
            Paragraph(f"<b>Date:</b> {escape(receipt.date_label)}", body),
            Paragraph(
                f"<b>Customer:</b> {escape(receipt.customer_name)} &lt;{escape(receipt.customer_email)}&gt;",
                body,
            ),
            Paragraph(
                f"<b>Payment method:</b> {escape(receipt.payment_method)} "
                f"({'Paid' if receipt.is_paid else 'Unpaid'})",
                body,
            ),
            Spacer(1, 6 * mm),
            self._items_table(receipt),
            Spacer(1, 4 * mm),
            self._totals_table(receipt),
        ]

        if receipt.is_approved:
            approved_on = receipt.approved_at.strftime("%d %b %Y") if receipt.approved_at else ""
            story += [
                Spacer(1, 6 * mm),
                Paragraph(
                    f"<b>Approved by:</b> {escape(receipt.approved_by_name)} "
                    f"({escape(receipt.approved_by_email or '')}) {approved_on}",
                    body,
                ),
            ]

        story += [
            Spacer(1, 10 * mm),
            Paragraph(f"Thank you for shopping with {STORE_NAME}!", styles["Italic"]),
        ]
        return story

    def _items_table(self, receipt: Receipt) -> Table:
        rows = [["Game", "Platform", "Qty", "Unit price", "Total"]]
        for line in receipt.lines:
            rows.append(
                [
                    line.title,
                    line.platform,
                    str(line.quantity),
                    format_money(line.unit_price),
                    format_money(line.line_total),
                ]
            )

        table = Table(rows, colWidths=[62 * mm, 36 * mm, 14 * mm, 30 * mm, 30 * mm], repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), _BRAND),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
            ("LINEBELOW", (0, 0), (-1, -1), 0.25, _MUTED),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]
        for index, line in enumerate(receipt.lines, start=1):
            if not line.available:
                style.append(("TEXTCOLOR", (0, index), (-1, index), _MUTED))
                style.append(("FONTNAME", (0, index), (-1, index), "Helvetica-Oblique"))
        table.setStyle(TableStyle(style))
        return table

    def _totals_table(self, receipt: Receipt) -> Table:
        rows = [
            ["Subtotal", format_money(receipt.subtotal)],
            ["Tax", format_money(receipt.tax)],
            ["Shipping", format_money(receipt.shipping)],
            ["Total", format_money(receipt.total)],
        ]
        table = Table(rows, colWidths=[40 * mm, 32 * mm], hAlign="RIGHT")
        table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (0, -1), (-1, -1), 0.75, _BRAND),
                ]
            )
        )
        return table
