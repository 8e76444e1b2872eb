"""Domain events for the Game aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Game")
class GameAdded:
    __version__ = 1

    game_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    stock_count: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Game")
class GameUpdated:
    __version__ = 1

    game_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    discount_price: Float()
    updated_at: DateTime(required=True)


@storefront.event(part_of="Game")
class StockReserved:
    """Units were taken out of stock for an order."""

    __version__ = 1

    game_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    remaining: Integer(required=True)


@storefront.event(part_of="Game")
class StockReleased:
    """Units were returned to stock after an order was cancelled."""

    __version__ = 1

    game_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    remaining: Integer(required=True)


@storefront.event(part_of="Game")
class StockAdjusted:
    __version__ = 1

    game_id: Identifier(required=True)
    previous_count: Integer(required=True)
    new_count: Integer(required=True)
