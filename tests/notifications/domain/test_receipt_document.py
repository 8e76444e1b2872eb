from datetime import datetime
from types import SimpleNamespace

import pytest

from storefront.account.user import User
from storefront.notifications.receipt.document import (
    UNAVAILABLE_PLATFORM,
    UNAVAILABLE_TITLE,
    build_receipt,
    format_money,
    payment_label,
    render_receipt_html,
)
from storefront.order.order import Order
from storefront.order.pricing import PriceBreakdown


def _order(tax=0.6, shipping=5.0, payment_method="bkash"):
    return Order.place(
        user_id="user-1",
        lines=[
            {"game_id": "game-1", "quantity": 2, "price": 10.0},
            {"game_id": "game-2", "quantity": 1, "price": 10.0},
        ],
        shipping_address={
            "street": "12 Lake Road",
            "city": "Dhaka",
            "state": "Dhaka",
            "zip_code": "1207",
            "country": "Bangladesh",
            "mobile": "01712345678",
        },
        payment_method=payment_method,
        pricing=PriceBreakdown(subtotal=30.0, tax=tax, shipping=shipping),
    )


def _catalogue(**games):
    return lambda game_id: games.get(str(game_id))


@pytest.fixture
def user():
    return User(name="Nadia", email="nadia@example.com")


class TestBuildReceipt:
    def test_lines_resolve_titles_and_platforms(self, user):
        hades = SimpleNamespace(title="Hades", platform_list=["PC", "Switch"])
        celeste = SimpleNamespace(title="Celeste", platform_list=[])

        receipt = build_receipt(_order(), user, lookup=_catalogue(**{"game-1": hades, "game-2": celeste}))

        assert [line.title for line in receipt.lines] == ["Hades", "Celeste"]
        assert receipt.lines[0].platform == "PC, Switch"
        assert receipt.lines[1].platform == UNAVAILABLE_PLATFORM
        assert receipt.subtotal == 30.0
        assert receipt.total == 35.6

    def test_removed_game_gets_placeholder(self, user):
        receipt = build_receipt(_order(), user, lookup=_catalogue())

        line = receipt.lines[0]
        assert line.title == UNAVAILABLE_TITLE
        assert line.platform == UNAVAILABLE_PLATFORM
        assert line.available is False
        assert line.line_total == 20.0

    def test_tax_and_shipping_come_from_the_order(self, user):
        receipt = build_receipt(_order(tax=1.25, shipping=0.0), user, lookup=_catalogue())

        assert receipt.tax == 1.25
        assert receipt.shipping == 0.0
        assert receipt.total == 31.25

    def test_reference_and_payment_label(self, user):
        order = _order()
        receipt = build_receipt(order, user, lookup=_catalogue())

        assert receipt.reference == str(order.id)[-8:].upper()
        assert receipt.payment_method == "BKASH"
        assert receipt.is_approved is False

    def test_approval_carried_over(self, user):
        order = _order()
        order.approve("admin-1", "Store Admin", "admin@gamebazaar.test")

        receipt = build_receipt(order, user, lookup=_catalogue())
        assert receipt.is_approved is True
        assert receipt.approved_by_email == "admin@gamebazaar.test"


class TestFormatting:
    def test_payment_labels(self):
        assert payment_label("creditCard") == "CREDIT CARD"
        assert payment_label("paypal") == "PAYPAL"
        assert payment_label("crypto") == "CRYPTO"
        assert payment_label(None) == "UNKNOWN"

    def test_format_money(self, monkeypatch):
        monkeypatch.delenv("STORE_CURRENCY", raising=False)
        assert format_money(1234.5) == "BDT 1,234.50"
        assert format_money(3, currency="USD") == "USD 3.00"

    def test_receipt_html(self, user):
        order = _order()
        order.created_at = datetime(2024, 5, 1)
        receipt = build_receipt(order, user, lookup=_catalogue())

        html = render_receipt_html(receipt)
        assert "GameBazaar Receipt" in html
        assert "01 May 2024" in html
        assert f"<em>{UNAVAILABLE_TITLE}</em>" in html
        assert "Unpaid" in html
