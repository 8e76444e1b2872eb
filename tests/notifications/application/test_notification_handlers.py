"""Emails triggered by account and order events."""

import pytest
from protean import current_domain

from storefront.order.lifecycle import PayOrder, UpdateOrderStatus
from storefront.order.order import OrderStatus
from storefront.order.queries import load_order


@pytest.fixture
def admin(make_user):
    return make_user(name="Store Admin", email="admin@gamebazaar.test", role="admin")


@pytest.fixture
def customer(make_user):
    return make_user(name="Nadia", email="nadia@example.com")


def _emails_to(channel, address):
    return [e for e in channel.sent_emails if e["to"] == address]


class TestWelcomeEmail:
    def test_registration_sends_welcome(self, make_user, email_channel):
        make_user(name="Rafi", email="rafi@example.com")

        emails = _emails_to(email_channel, "rafi@example.com")
        assert [e["subject"] for e in emails] == ["Welcome to GameBazaar, Rafi!"]

    def test_failed_welcome_does_not_block_registration(self, make_user, email_channel):
        email_channel.configure(should_succeed=False)

        user = make_user(name="Rafi", email="rafi@example.com")
        assert user.email == "rafi@example.com"


class TestOrderEmails:
    def test_order_placed_sends_confirmation(self, customer, make_game, place_order, email_channel):
        email_channel.reset()
        order_id = place_order(customer, [(make_game(), 1)])

        emails = _emails_to(email_channel, customer.email)
        assert [e["subject"] for e in emails] == [f"Order Confirmation - {order_id}"]
        assert len(emails[0]["attachments"]) == 1

    def test_shipped_sends_status_email_with_receipt(self, admin, customer, make_game, place_order, email_channel):
        order_id = place_order(customer, [(make_game(), 1)])
        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="approved", actor_id=admin.id), asynchronous=False
        )
        email_channel.reset()

        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="shipped", actor_id=admin.id), asynchronous=False
        )

        emails = _emails_to(email_channel, customer.email)
        assert [e["subject"] for e in emails] == [f"Order Status Update - {order_id} (SHIPPED)"]
        assert emails[0]["attachments"][0].filename == f"GameBazaar-Receipt-{order_id}-shipped.pdf"

    def test_payment_sends_processing_email(self, customer, make_game, place_order, email_channel):
        order_id = place_order(customer, [(make_game(), 1)])
        email_channel.reset()

        current_domain.process(PayOrder(order_id=order_id, actor_id=customer.id), asynchronous=False)

        emails = _emails_to(email_channel, customer.email)
        assert [e["subject"] for e in emails] == [f"Order Status Update - {order_id} (PROCESSING)"]
        assert emails[0]["attachments"] == []

    def test_email_failure_keeps_status_change(self, admin, customer, make_game, place_order, email_channel):
        order_id = place_order(customer, [(make_game(), 1)])
        email_channel.configure(should_succeed=False)

        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="cancelled", actor_id=admin.id), asynchronous=False
        )

        assert load_order(order_id).status == OrderStatus.CANCELLED.value

    def test_render_failure_keeps_order(self, customer, make_game, place_order, email_channel, receipt_renderer):
        receipt_renderer.configure(should_fail=True)

        order_id = place_order(customer, [(make_game(), 1)])

        assert load_order(order_id).status == OrderStatus.PENDING.value
        emails = _emails_to(email_channel, customer.email)
        confirmation = [e for e in emails if e["subject"].startswith("Order Confirmation")]
        assert confirmation[0]["attachments"] == []
