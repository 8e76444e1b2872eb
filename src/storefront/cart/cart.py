"""Cart aggregate: one mutable pre-purchase basket per user.

Every line snapshots the game's price at the moment it was added. The cart
total is derived from the lines and recomputed after every mutation.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.errors import NotFoundError


@storefront.entity(part_of="Cart")
class CartLine:
    game_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    added_at = DateTime()

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    lines = HasMany(CartLine)
    total_price = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_game(self):
        game_ids = [str(line.game_id) for line in self.lines]
        if len(game_ids) != len(set(game_ids)):
            raise ValidationError({"lines": ["A game can appear only once in the cart"]})

    @classmethod
    def start(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, total_price=0.0, created_at=now, updated_at=now)

    def line_for_game(self, game_id) -> CartLine | None:
        return next((line for line in self.lines if str(line.game_id) == str(game_id)), None)

    def line(self, line_id) -> CartLine | None:
        return next((line for line in self.lines if str(line.id) == str(line_id)), None)

    def quantity_of(self, game_id) -> int:
        existing = self.line_for_game(game_id)
        return existing.quantity if existing else 0

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def _recalculate(self):
        self.total_price = round(sum(line.price * line.quantity for line in self.lines), 2)
        self.updated_at = datetime.now(UTC)

    def add_item(self, game_id, quantity, price):
        """Add ``quantity`` of a game, merging into its existing line.

        A merged line takes the price offered now, so the snapshot always
        reflects the last time the customer chose the game.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for_game(game_id)
        if existing:
            existing.quantity += quantity
            existing.price = price
            line_id = str(existing.id)
            new_quantity = existing.quantity
        else:
            line = CartLine(game_id=game_id, quantity=quantity, price=price, added_at=datetime.now(UTC))
            self.add_lines(line)
            line_id = str(line.id)
            new_quantity = quantity

        self._recalculate()
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                line_id=line_id,
                game_id=str(game_id),
                quantity=new_quantity,
                price=price,
            )
        )
        return line_id

    def update_quantity(self, line_id, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        line = self.line(line_id)
        if line is None:
            raise NotFoundError("Item not found in cart")

        previous = line.quantity
        line.quantity = quantity
        self._recalculate()
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                line_id=str(line_id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_line(self, line_id):
        """Remove a line. Removing a line that is not there changes nothing."""
        line = self.line(line_id)
        if line is None:
            return

        self.remove_lines(line)
        self._recalculate()
        self.raise_(CartItemRemoved(cart_id=str(self.id), line_id=str(line_id), game_id=str(line.game_id)))

    def clear(self):
        for line in list(self.lines):
            self.remove_lines(line)
        self._recalculate()
        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id)))
