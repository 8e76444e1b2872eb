"""Receipt renderer port: turns a receipt document into file bytes."""

from abc import ABC, abstractmethod

from storefront.notifications.receipt.document import Receipt


class ReceiptRenderer(ABC):
    content_type = "application/pdf"

    @abstractmethod
    def render(self, receipt: Receipt) -> bytes:
        """Render the receipt. May raise; callers decide how to degrade."""
        ...
