"""Tests for the Game aggregate: pricing, invariants and list fields."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import GameAdded, GameUpdated
from storefront.catalogue.game import Game, slugify


def _make_game(**overrides):
    defaults = {
        "title": "Elden Ring",
        "description": "Open-world action RPG",
        "price": 59.99,
        "stock_count": 3,
        "genres": ["RPG", "Action"],
        "platforms": ["PC", "PS5"],
    }
    defaults.update(overrides)
    return Game.create(**defaults)


class TestGameCreation:
    def test_create_sets_fields(self):
        game = _make_game()
        assert game.title == "Elden Ring"
        assert game.slug == "elden-ring"
        assert game.stock_count == 3
        assert game.in_stock is True
        assert game.sales_count == 0

    def test_create_without_stock_is_out_of_stock(self):
        game = _make_game(stock_count=0)
        assert game.in_stock is False

    def test_create_raises_game_added(self):
        game = _make_game()
        events = [e for e in game._events if isinstance(e, GameAdded)]
        assert len(events) == 1
        assert events[0].title == "Elden Ring"
        assert events[0].stock_count == 3

    def test_list_fields_round_trip(self):
        game = _make_game(images=["cover.png"])
        assert game.genre_list == ["RPG", "Action"]
        assert game.platform_list == ["PC", "PS5"]
        assert game.image_list == ["cover.png"]

    def test_blank_list_entries_are_dropped(self):
        game = _make_game(genres=["RPG", " ", ""])
        assert game.genre_list == ["RPG"]

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_game(price=-1.0)

    def test_slugify(self):
        assert slugify("  FIFA 24: Ultimate Edition! ") == "fifa-24-ultimate-edition"


class TestEffectivePrice:
    def test_uses_list_price_without_discount(self):
        assert _make_game(price=40.0).effective_price == 40.0

    def test_uses_discount_when_set(self):
        assert _make_game(price=40.0, discount_price=30.0).effective_price == 30.0

    def test_zero_discount_means_no_discount(self):
        assert _make_game(price=40.0, discount_price=0.0).effective_price == 40.0


class TestDiscountInvariant:
    def test_discount_above_price_rejected_on_create(self):
        with pytest.raises(ValidationError) as exc:
            _make_game(price=20.0, discount_price=25.0)
        assert "discount_price" in exc.value.messages

    def test_discount_equal_to_price_allowed(self):
        game = _make_game(price=20.0, discount_price=20.0)
        assert game.discount_price == 20.0

    def test_lowering_price_below_discount_rejected(self):
        game = _make_game(price=50.0, discount_price=40.0)
        with pytest.raises(ValidationError):
            game.update_details(price=30.0)


class TestUpdateDetails:
    def test_partial_update(self):
        game = _make_game()
        game.update_details(price=49.99, platforms=["PC"])
        assert game.price == 49.99
        assert game.platform_list == ["PC"]
        assert game.title == "Elden Ring"

    def test_title_change_refreshes_slug(self):
        game = _make_game()
        game.update_details(title="Elden Ring Nightreign")
        assert game.slug == "elden-ring-nightreign"

    def test_update_raises_event(self):
        game = _make_game()
        game._events.clear()
        game.update_details(discount_price=39.99)
        events = [e for e in game._events if isinstance(e, GameUpdated)]
        assert len(events) == 1
        assert events[0].discount_price == 39.99
