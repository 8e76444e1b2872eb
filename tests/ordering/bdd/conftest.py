"""Shared BDD fixtures and step definitions for checkout and order fulfillment."""

import json

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when

from storefront.cart.items import AddToCart
from storefront.cart.lookup import load_cart
from storefront.catalogue.lookup import load_game
from storefront.errors import StorefrontError
from storefront.order.checkout import PlaceOrder
from storefront.order.lifecycle import UpdateOrderStatus
from storefront.order.queries import load_order


@pytest.fixture()
def world():
    """Named users and games plus the outcome of the last action."""
    return {"users": {}, "games": {}, "order_id": None, "error": None}


def _email(name):
    return f"{name.lower().replace(' ', '.')}@example.com"


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a customer "{name}"'))
def _(world, make_user, name):
    world["users"][name] = make_user(name=name, email=_email(name))


@given(parsers.cfparse('an administrator "{name}"'))
def _(world, make_user, name):
    world["users"][name] = make_user(name=name, email=_email(name), role="admin")


@given(parsers.cfparse('the game "{title}" priced {price:f} with {stock:d} in stock'))
def _(world, make_game, title, price, stock):
    world["games"][title] = make_game(title=title, price=price, stock_count=stock)


@given(parsers.cfparse('"{name}" has {quantity:d} of "{title}" in the cart'))
def _(world, name, quantity, title):
    current_domain.process(
        AddToCart(user_id=world["users"][name].id, game_id=world["games"][title].id, quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('"{name}" placed an order for {quantity:d} of "{title}"'))
def _(world, place_order, name, quantity, title):
    world["order_id"] = place_order(world["users"][name], [(world["games"][title], quantity)])


@given(parsers.cfparse('"{actor}" moved the order to "{status}"'))
def _(world, actor, status):
    current_domain.process(
        UpdateOrderStatus(order_id=world["order_id"], status=status, actor_id=world["users"][actor].id),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{name}" checks out'))
def _(world, shipping_address, name):
    try:
        world["order_id"] = current_domain.process(
            PlaceOrder(
                user_id=world["users"][name].id,
                payment_method="creditCard",
                shipping_address=json.dumps(shipping_address),
            ),
            asynchronous=False,
        )
    except (StorefrontError, ValidationError) as exc:
        world["error"] = exc


@when(parsers.cfparse('"{actor}" moves the order to "{status}"'))
def _(world, actor, status):
    try:
        current_domain.process(
            UpdateOrderStatus(order_id=world["order_id"], status=status, actor_id=world["users"][actor].id),
            asynchronous=False,
        )
    except (StorefrontError, ValidationError) as exc:
        world["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {total:f}"))
def _(world, total):
    assert world["error"] is None
    assert load_order(world["order_id"]).total_price == total


@then(parsers.cfparse('"{title}" has {stock:d} in stock'))
def _(world, title, stock):
    assert load_game(world["games"][title].id).stock_count == stock


@then(parsers.cfparse('the cart of "{name}" is empty'))
def _(world, name):
    cart = load_cart(world["users"][name].id)
    assert cart.is_empty
    assert cart.total_price == 0.0


@then(parsers.cfparse('the cart of "{name}" still holds {quantity:d} of "{title}"'))
def _(world, name, quantity, title):
    assert load_cart(world["users"][name].id).quantity_of(world["games"][title].id) == quantity


@then(parsers.cfparse('the action is refused with "{message}"'))
def _(world, message):
    assert isinstance(world["error"], StorefrontError)
    assert world["error"].message.startswith(message)


@then("the change is refused")
def _(world):
    assert isinstance(world["error"], (StorefrontError, ValidationError))


@then(parsers.cfparse('the order status is "{status}"'))
def _(world, status):
    assert load_order(world["order_id"]).status == status


@then(parsers.cfparse('"{name}" was emailed "{subject_prefix}"'))
def _(world, email_channel, name, subject_prefix):
    address = world["users"][name].email
    subjects = [e["subject"] for e in email_channel.sent_emails if e["to"] == address]
    assert any(subject.startswith(subject_prefix) for subject in subjects)
