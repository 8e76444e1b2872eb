"""Order aggregate: an immutable purchase snapshot with a mutable fulfillment status.

State machine:
    PENDING → PROCESSING → APPROVED → SHIPPED → DELIVERED
    PENDING → APPROVED
    CANCELLED from any non-terminal state
    DELIVERED and CANCELLED are terminal

The legacy label ``completed`` is accepted on input and read as APPROVED.
Lines and prices are fixed when the order is placed; only status, payment
and delivery fields change afterwards.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderApproved, OrderPaid, OrderPlaced, OrderStatusChanged

_MOBILE_PATTERN = re.compile(r"^[0-9]{10,15}$")


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    APPROVED = "approved"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str) -> "OrderStatus":
        """Read a status label supplied by a caller, case-insensitively."""
        label = (value or "").strip().lower()
        label = _LEGACY_LABELS.get(label, label)
        try:
            return cls(label)
        except ValueError:
            raise ValidationError({"status": [f"Invalid order status: {value!r}"]}) from None


_LEGACY_LABELS = {"completed": OrderStatus.APPROVED.value}

_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.APPROVED, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.APPROVED, OrderStatus.CANCELLED},
    OrderStatus.APPROVED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


class PaymentMethod(Enum):
    CREDIT_CARD = "creditCard"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    BKASH = "bkash"
    NAGAD = "nagad"


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CREDIT_CARD.value: "Credit Card",
    PaymentMethod.PAYPAL.value: "PayPal",
    PaymentMethod.STRIPE.value: "Stripe",
    PaymentMethod.BKASH.value: "bKash",
    PaymentMethod.NAGAD.value: "Nagad",
}


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout and never edited afterwards."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    mobile = String(required=True, max_length=15)

    @invariant.post
    def mobile_must_be_digits(self):
        if self.mobile and not _MOBILE_PATTERN.match(self.mobile):
            raise ValidationError({"mobile": ["Mobile number must be 10 to 15 digits"]})


@storefront.value_object(part_of="Order")
class PaymentResult:
    """Correlation record returned by the external payment gateway."""

    gateway_id = String(max_length=255)
    status = String(max_length=50)
    update_time = String(max_length=50)
    email_address = String(max_length=254)


@storefront.value_object(part_of="Order")
class Approver:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)


@storefront.entity(part_of="Order")
class OrderLine:
    """A purchased game. ``game_id`` is a weak reference: the game may be gone later."""

    game_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_method = String(choices=PaymentMethod, required=True)
    payment_result = ValueObject(PaymentResult)
    delivery_notes = Text()
    items_price = Float(default=0.0)
    tax_price = Float(default=0.0)
    shipping_price = Float(default=0.0)
    total_price = Float(default=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    approved_at = DateTime()
    approved_by = ValueObject(Approver)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, lines, shipping_address, payment_method, pricing, delivery_notes=None):
        """Create an order from ``lines`` (dicts of game_id, quantity, price).

        ``pricing`` is the ``PriceBreakdown`` quoted for the lines' subtotal.
        """
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            lines=[OrderLine(**line) for line in lines],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            delivery_notes=delivery_notes,
            items_price=pricing.subtotal,
            tax_price=pricing.tax,
            shipping_price=pricing.shipping,
            total_price=pricing.total,
            status=OrderStatus.PENDING.value,
            is_paid=False,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                line_count=len(order.lines),
                total_price=order.total_price,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS.get(self.current_status, set())

    def _assert_can_transition(self, target: OrderStatus):
        if not self.can_transition_to(target):
            raise ValidationError(
                {"status": [f"Cannot transition from {self.current_status.value} to {target.value}"]}
            )

    def transition_to(self, target: OrderStatus, changed_by=None):
        self._assert_can_transition(target)

        previous = self.current_status
        now = datetime.now(UTC)
        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous.value,
                new_status=target.value,
                changed_by=str(changed_by) if changed_by else None,
                changed_at=now,
            )
        )

    def approve(self, approver_id, approver_name, approver_email):
        self.transition_to(OrderStatus.APPROVED, changed_by=approver_id)
        self.approved_at = self.updated_at
        self.approved_by = Approver(name=approver_name, email=approver_email)

        self.raise_(
            OrderApproved(
                order_id=str(self.id),
                approved_by_name=approver_name,
                approved_by_email=approver_email,
                approved_at=self.approved_at,
            )
        )

    def record_payment(self, gateway_id=None, status=None, update_time=None, email_address=None, paid_by=None):
        """Mark the order paid. A pending order moves on to processing."""
        if self.is_paid:
            raise ValidationError({"is_paid": ["Order is already paid"]})
        if self.current_status == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["A cancelled order cannot be paid"]})

        now = datetime.now(UTC)
        self.is_paid = True
        self.paid_at = now
        self.payment_result = PaymentResult(
            gateway_id=gateway_id,
            status=status,
            update_time=update_time,
            email_address=email_address,
        )
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                user_id=str(self.user_id),
                amount=self.total_price,
                gateway_id=gateway_id,
                paid_at=now,
            )
        )

        if self.current_status == OrderStatus.PENDING:
            self.transition_to(OrderStatus.PROCESSING, changed_by=paid_by)
