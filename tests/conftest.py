import json
import os
from pathlib import Path
from uuid import uuid4

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config environment before any test module imports the domain."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_domain():
    """Initialize the storefront domain once per session."""
    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront_domain)

    yield

    drop_db(storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture(autouse=True)
def email_channel():
    """Route all email through an in-memory adapter."""
    from storefront.notifications.channel import reset_email_channel, set_email_channel
    from storefront.notifications.channel.fake_email import FakeEmailAdapter
    from storefront.notifications.dispatch import reset_dispatcher

    channel = FakeEmailAdapter()
    set_email_channel(channel)
    reset_dispatcher()

    yield channel

    reset_email_channel()
    reset_dispatcher()


@pytest.fixture(autouse=True)
def receipt_renderer(email_channel):
    from storefront.notifications.dispatch import reset_dispatcher
    from storefront.notifications.receipt import reset_receipt_renderer, set_receipt_renderer
    from storefront.notifications.receipt.fake import FakeReceiptRenderer

    renderer = FakeReceiptRenderer()
    set_receipt_renderer(renderer)
    reset_dispatcher()

    yield renderer

    reset_receipt_renderer()
    reset_dispatcher()


@pytest.fixture(autouse=True)
def pricing():
    """Tax- and shipping-free pricing unless a test installs its own policy."""
    from storefront.order.pricing import StandardPricing, reset_pricing, set_pricing

    policy = StandardPricing(tax_rate=0.0, shipping_fee=0.0)
    set_pricing(policy)

    yield policy

    reset_pricing()


@pytest.fixture
def make_user():
    from protean import current_domain

    from storefront.account.registration import RegisterUser
    from storefront.account.user import User

    def _make(name="Test Customer", email=None, role="customer"):
        email = email or f"user-{uuid4().hex[:8]}@example.com"
        user_id = current_domain.process(RegisterUser(name=name, email=email, role=role), asynchronous=False)
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture
def make_game():
    from protean import current_domain

    from storefront.catalogue.game import Game

    def _make(
        title="Halo Infinite",
        price=10.0,
        discount_price=None,
        stock_count=5,
        genres=("Shooter",),
        platforms=("Xbox",),
        **kwargs,
    ):
        game = Game.create(
            title=title,
            description=f"{title} description",
            price=price,
            discount_price=discount_price,
            stock_count=stock_count,
            genres=list(genres),
            platforms=list(platforms),
            **kwargs,
        )
        current_domain.repository_for(Game).add(game)
        return game

    return _make


@pytest.fixture
def shipping_address():
    return {
        "street": "12 Lake Road",
        "city": "Dhaka",
        "state": "Dhaka",
        "zip_code": "1207",
        "country": "Bangladesh",
        "mobile": "01712345678",
    }


@pytest.fixture
def place_order(shipping_address):
    """Fill a user's cart and check it out; returns the new order id."""
    from protean import current_domain

    from storefront.cart.items import AddToCart
    from storefront.order.checkout import PlaceOrder

    def _place(user, items, payment_method="creditCard"):
        for game, quantity in items:
            current_domain.process(AddToCart(user_id=user.id, game_id=game.id, quantity=quantity), asynchronous=False)
        return current_domain.process(
            PlaceOrder(
                user_id=user.id,
                payment_method=payment_method,
                shipping_address=json.dumps(shipping_address),
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture
def client():
    """API client without the request middleware; the test's domain context is already active."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from storefront.api import (
        blog_router,
        cart_router,
        game_router,
        order_router,
        register_error_handlers,
        review_router,
        user_router,
        wishlist_router,
    )

    app = FastAPI()
    for router in (user_router, game_router, cart_router, order_router, wishlist_router, review_router, blog_router):
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth():
    def _headers(user):
        return {"X-User-Id": str(user.id)}

    return _headers
