"""Receipt renderer factory.

Provides get_receipt_renderer() / set_receipt_renderer() to swap implementations:
- PdfReceiptRenderer (reportlab) by default
- FakeReceiptRenderer when RECEIPT_RENDERER=fake, or set explicitly in tests
"""

import os

from storefront.notifications.receipt.port import ReceiptRenderer

_current_renderer: ReceiptRenderer | None = None


def get_receipt_renderer() -> ReceiptRenderer:
    global _current_renderer
    if _current_renderer is None:
        if os.getenv("RECEIPT_RENDERER", "pdf").lower() == "fake":
            from storefront.notifications.receipt.fake import FakeReceiptRenderer

            _current_renderer = FakeReceiptRenderer()
        else:
            from storefront.notifications.receipt.pdf import PdfReceiptRenderer

            _current_renderer = PdfReceiptRenderer()
    return _current_renderer


def set_receipt_renderer(renderer: ReceiptRenderer) -> None:
    """Override the active receipt renderer (useful for tests)."""
    global _current_renderer
    _current_renderer = renderer


def reset_receipt_renderer() -> None:
    global _current_renderer
    _current_renderer = None
