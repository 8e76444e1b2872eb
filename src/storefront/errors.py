"""Storefront exception taxonomy.

Every exception carries the HTTP status code the API answers with. Field
shape and range violations use protean's ``ValidationError`` instead.
"""


class StorefrontError(Exception):
    """Base class for business-rule failures surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(StorefrontError):
    status_code = 401

    def __init__(self, message: str = "Not authorized to access this route") -> None:
        super().__init__(message)


class ForbiddenError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class EmptyCartError(StorefrontError):
    status_code = 400

    def __init__(self, message: str = "Your cart is empty") -> None:
        super().__init__(message)


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds what the catalogue can supply."""

    status_code = 400

    def __init__(self, game_title: str, requested: int | None = None, available: int | None = None) -> None:
        message = f"Not enough stock for {game_title}"
        if requested is not None and available is not None:
            message = f"{message} (requested {requested}, available {available})"
        super().__init__(message)
        self.game_title = game_title
        self.requested = requested
        self.available = available


class NotificationError(StorefrontError):
    """Notification delivery problem. Logged by the dispatcher, never raised to callers."""


class ReceiptRenderingError(NotificationError):
    pass
