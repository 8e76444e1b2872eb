"""Order lifecycle after checkout: status changes, approval and payment."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.registration import load_user
from storefront.domain import storefront
from storefront.errors import ForbiddenError
from storefront.order.order import Order, OrderStatus
from storefront.order.queries import load_order

logger = structlog.get_logger(__name__)


def _require_admin(actor_id):
    actor = load_user(actor_id)
    if not actor.is_admin:
        raise ForbiddenError("Only administrators can manage orders")
    return actor


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    actor_id = Identifier(required=True)


@storefront.command(part_of="Order")
class ApproveOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@storefront.command(part_of="Order")
class PayOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    gateway_id = String(max_length=255)
    gateway_status = String(max_length=50)
    update_time = String(max_length=50)
    email_address = String(max_length=254)


@storefront.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        _require_admin(command.actor_id)
        order = load_order(command.order_id)
        target = OrderStatus.parse(command.status)

        previous = order.status
        if target == OrderStatus.APPROVED:
            actor = load_user(command.actor_id)
            order.approve(actor.id, actor.name, actor.email)
        else:
            order.transition_to(target, changed_by=command.actor_id)
        current_domain.repository_for(Order).add(order)

        logger.info("order_status_updated", order_id=str(order.id), previous=previous, status=order.status)
        return str(order.id)

    @handle(ApproveOrder)
    def approve_order(self, command):
        actor = _require_admin(command.actor_id)
        order = load_order(command.order_id)
        order.approve(actor.id, actor.name, actor.email)
        current_domain.repository_for(Order).add(order)

        logger.info("order_approved", order_id=str(order.id), approved_by=actor.email)
        return str(order.id)

    @handle(PayOrder)
    def pay_order(self, command):
        actor = load_user(command.actor_id)
        order = load_order(command.order_id)
        if not (actor.is_admin or order.is_owned_by(actor.id)):
            raise ForbiddenError("Not authorized to pay for this order")

        order.record_payment(
            gateway_id=command.gateway_id,
            status=command.gateway_status,
            update_time=command.update_time,
            email_address=command.email_address,
            paid_by=actor.id,
        )
        current_domain.repository_for(Order).add(order)

        logger.info("order_paid", order_id=str(order.id), amount=order.total_price)
        return str(order.id)
