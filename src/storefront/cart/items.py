"""Cart item management: commands and handler.

Stock is checked against the total quantity the cart would hold after the
change, not against the delta.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.lookup import find_cart, load_cart
from storefront.catalogue.lookup import load_game
from storefront.domain import storefront
from storefront.errors import InsufficientStockError, NotFoundError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        game = load_game(command.game_id)

        cart = find_cart(command.user_id) or Cart.start(command.user_id)
        requested = cart.quantity_of(game.id) + command.quantity
        if not game.can_supply(requested):
            raise InsufficientStockError(game.title, requested=requested, available=game.stock_count or 0)

        line_id = cart.add_item(game.id, command.quantity, game.effective_price)
        current_domain.repository_for(Cart).add(cart)
        logger.debug("cart_item_added", user_id=str(command.user_id), game_id=str(game.id), quantity=requested)
        return line_id

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        if command.quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        cart = load_cart(command.user_id)
        line = cart.line(command.line_id)
        if line is None:
            raise NotFoundError("Item not found in cart")

        game = load_game(line.game_id)
        if not game.can_supply(command.quantity):
            raise InsufficientStockError(game.title, requested=command.quantity, available=game.stock_count or 0)

        cart.update_quantity(command.line_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        cart = load_cart(command.user_id)
        cart.remove_line(command.line_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
