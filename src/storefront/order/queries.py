"""Order lookups and access rules for reading orders."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import ForbiddenError, NotFoundError
from storefront.order.order import Order, OrderStatus


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundError(f"Order not found with id of {order_id}") from None


def load_order_for(order_id, actor) -> Order:
    """Load an order the actor may see: their own, or any order for an admin."""
    order = load_order(order_id)
    if not (actor.is_admin or order.is_owned_by(actor.id)):
        raise ForbiddenError("Not authorized to access this order")
    return order


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: o.created_at.timestamp() if o.created_at else 0.0, reverse=True)


def orders_for_user(user_id) -> list[Order]:
    repo = current_domain.repository_for(Order)
    return _newest_first(repo._dao.query.filter(user_id=str(user_id)).all().items)


def list_orders(status: str | None = None) -> list[Order]:
    """All orders, newest first, optionally restricted to one status."""
    repo = current_domain.repository_for(Order)
    if status:
        orders = repo._dao.query.filter(status=OrderStatus.parse(status).value).all().items
    else:
        orders = repo._dao.query.all().items
    return _newest_first(orders)
