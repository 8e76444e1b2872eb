"""Order notifications: emails the customer when an order is placed or moves on.

Runs after the order's unit of work has committed. Any failure is logged
and dropped so the order change that triggered it stands.
"""

import structlog
from protean.utils.mixins import handle

from storefront.account.registration import find_user
from storefront.domain import storefront
from storefront.notifications.dispatch import NOTIFY_STATUSES, get_dispatcher
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order
from storefront.order.queries import load_order

logger = structlog.get_logger(__name__)


def _load_recipient(event):
    user = find_user(event.user_id)
    if user is None:
        logger.warning("Notification recipient not found", user_id=str(event.user_id), order_id=str(event.order_id))
    return user


@storefront.event_handler(part_of=Order)
class OrderNotificationsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        try:
            user = _load_recipient(event)
            if user is None:
                return
            get_dispatcher().order_confirmed(load_order(event.order_id), user)
        except Exception as e:
            logger.error("Order confirmation email failed", order_id=str(event.order_id), error=str(e))

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        if event.new_status not in NOTIFY_STATUSES:
            return

        try:
            user = _load_recipient(event)
            if user is None:
                return
            get_dispatcher().status_changed(load_order(event.order_id), user, event.new_status)
        except Exception as e:
            logger.error(
                "Order status email failed",
                order_id=str(event.order_id),
                status=event.new_status,
                error=str(e),
            )
