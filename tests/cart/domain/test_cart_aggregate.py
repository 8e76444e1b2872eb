import pytest
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.errors import NotFoundError


def _cart():
    return Cart.start("user-1")


class TestAddItem:
    def test_new_cart_is_empty(self):
        cart = _cart()
        assert cart.is_empty
        assert cart.total_price == 0.0

    def test_add_item_creates_line(self):
        cart = _cart()
        line_id = cart.add_item("game-1", 2, 10.0)

        assert len(cart.lines) == 1
        assert cart.line(line_id).quantity == 2
        assert cart.total_price == 20.0

        event = cart._events[-1]
        assert isinstance(event, CartItemAdded)
        assert event.quantity == 2

    def test_same_game_merges_into_one_line(self):
        cart = _cart()
        first = cart.add_item("game-1", 1, 10.0)
        second = cart.add_item("game-1", 2, 10.0)

        assert first == second
        assert len(cart.lines) == 1
        assert cart.quantity_of("game-1") == 3
        assert cart.total_price == 30.0

    def test_merge_takes_current_price(self):
        cart = _cart()
        cart.add_item("game-1", 1, 10.0)
        cart.add_item("game-1", 1, 8.0)

        assert cart.line_for_game("game-1").price == 8.0
        assert cart.total_price == 16.0

    def test_total_spans_lines(self):
        cart = _cart()
        cart.add_item("game-1", 2, 10.0)
        cart.add_item("game-2", 1, 4.5)
        assert cart.total_price == 24.5

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _cart().add_item("game-1", 0, 10.0)


class TestUpdateQuantity:
    def test_update_quantity(self):
        cart = _cart()
        line_id = cart.add_item("game-1", 1, 10.0)

        cart.update_quantity(line_id, 4)

        assert cart.line(line_id).quantity == 4
        assert cart.total_price == 40.0
        assert isinstance(cart._events[-1], CartQuantityUpdated)

    @pytest.mark.parametrize("quantity", [0, -1, None])
    def test_quantity_below_one_rejected(self, quantity):
        cart = _cart()
        line_id = cart.add_item("game-1", 1, 10.0)

        with pytest.raises(ValidationError):
            cart.update_quantity(line_id, quantity)
        assert cart.line(line_id).quantity == 1

    def test_unknown_line(self):
        with pytest.raises(NotFoundError):
            _cart().update_quantity("missing", 2)


class TestRemoveAndClear:
    def test_remove_line(self):
        cart = _cart()
        line_id = cart.add_item("game-1", 1, 10.0)
        cart.add_item("game-2", 1, 5.0)

        cart.remove_line(line_id)

        assert cart.line(line_id) is None
        assert cart.total_price == 5.0
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_missing_line_is_noop(self):
        cart = _cart()
        cart.add_item("game-1", 1, 10.0)
        events_before = len(cart._events)

        cart.remove_line("missing")

        assert len(cart.lines) == 1
        assert len(cart._events) == events_before

    def test_clear(self):
        cart = _cart()
        cart.add_item("game-1", 1, 10.0)
        cart.add_item("game-2", 3, 5.0)

        cart.clear()

        assert cart.is_empty
        assert cart.total_price == 0.0
        assert isinstance(cart._events[-1], CartCleared)
