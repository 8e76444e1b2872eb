"""Fake receipt renderer: produces placeholder bytes or fails on demand."""

from storefront.errors import ReceiptRenderingError
from storefront.notifications.receipt.document import Receipt
from storefront.notifications.receipt.port import ReceiptRenderer


class FakeReceiptRenderer(ReceiptRenderer):
    def __init__(self):
        self.rendered: list[Receipt] = []
        self.should_fail = False
        self.failure_reason = "Receipt rendering failed"

    def configure(self, should_fail: bool = False, failure_reason: str = "Receipt rendering failed"):
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def render(self, receipt: Receipt) -> bytes:
        if self.should_fail:
            raise ReceiptRenderingError(self.failure_reason)
        self.rendered.append(receipt)
        return f"%PDF-fake receipt {receipt.order_id}".encode()

    def reset(self):
        self.rendered.clear()
        self.should_fail = False
        self.failure_reason = "Receipt rendering failed"
