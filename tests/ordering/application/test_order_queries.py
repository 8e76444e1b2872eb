import pytest

from storefront.errors import ForbiddenError, NotFoundError
from storefront.order.queries import list_orders, load_order, load_order_for, orders_for_user


@pytest.fixture
def admin(make_user):
    return make_user(name="Store Admin", email="admin@gamebazaar.test", role="admin")


class TestOrderQueries:
    def test_owner_and_admin_can_read(self, make_user, make_game, place_order, admin):
        owner = make_user(name="Owner", email="owner@example.com")
        order_id = place_order(owner, [(make_game(), 1)])

        assert load_order_for(order_id, owner).id == order_id
        assert load_order_for(order_id, admin).id == order_id

    def test_stranger_is_forbidden(self, make_user, make_game, place_order):
        owner = make_user(name="Owner", email="owner@example.com")
        stranger = make_user(name="Stranger", email="stranger@example.com")
        order_id = place_order(owner, [(make_game(), 1)])

        with pytest.raises(ForbiddenError):
            load_order_for(order_id, stranger)

    def test_unknown_order(self):
        with pytest.raises(NotFoundError):
            load_order("missing")

    def test_orders_for_user_only_returns_theirs(self, make_user, make_game, place_order):
        game = make_game(stock_count=10)
        alice = make_user(name="Alice", email="alice@example.com")
        bob = make_user(name="Bob", email="bob@example.com")
        alice_order = place_order(alice, [(game, 1)])
        place_order(bob, [(game, 1)])

        assert [o.id for o in orders_for_user(alice.id)] == [alice_order]

    def test_list_orders_by_status(self, make_user, make_game, place_order, admin):
        from protean import current_domain

        from storefront.order.lifecycle import UpdateOrderStatus

        game = make_game(stock_count=10)
        customer = make_user(name="Customer", email="customer@example.com")
        first = place_order(customer, [(game, 1)])
        second = place_order(customer, [(game, 1)])
        current_domain.process(
            UpdateOrderStatus(order_id=first, status="cancelled", actor_id=admin.id), asynchronous=False
        )

        assert {o.id for o in list_orders()} == {first, second}
        assert [o.id for o in list_orders("pending")] == [second]
        assert [o.id for o in list_orders("CANCELLED")] == [first]
