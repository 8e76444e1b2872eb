"""Checkout: convert a user's cart into an order.

The handler runs inside a single unit of work: every line is checked before
anything is written, each stock decrement is the conditional
``Game.reserve_stock``, and the order, the stock changes and the cleared cart
are committed together or not at all.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.lookup import find_cart
from storefront.catalogue.game import Game
from storefront.catalogue.lookup import find_game
from storefront.domain import storefront
from storefront.errors import EmptyCartError, InsufficientStockError, NotFoundError
from storefront.order.order import Order, PaymentMethod
from storefront.order.pricing import get_pricing

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    shipping_address = Text(required=True)  # JSON: address dict
    delivery_notes = Text()


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = find_cart(command.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError()

        games = {}
        for line in cart.lines:
            game = find_game(line.game_id)
            if game is None:
                raise NotFoundError(f"Game not found: {line.game_id}")
            if not game.can_supply(line.quantity):
                raise InsufficientStockError(game.title, requested=line.quantity, available=game.stock_count or 0)
            games[str(line.game_id)] = game

        lines = [
            {
                "game_id": str(line.game_id),
                "quantity": line.quantity,
                "price": games[str(line.game_id)].effective_price,
            }
            for line in cart.lines
        ]
        subtotal = sum(line["price"] * line["quantity"] for line in lines)

        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            pricing=get_pricing().quote(subtotal),
            delivery_notes=command.delivery_notes,
        )

        game_repo = current_domain.repository_for(Game)
        for line in lines:
            game = games[line["game_id"]]
            game.reserve_stock(line["quantity"], order_id=str(order.id))
            game_repo.add(game)

        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_price=order.total_price,
            lines=len(lines),
        )
        return str(order.id)
