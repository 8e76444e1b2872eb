"""Tests for catalogue administration commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.game import Game
from storefront.catalogue.lookup import find_game, load_game
from storefront.catalogue.management import AddGame, RemoveGame, SetGameStock, UpdateGame
from storefront.errors import NotFoundError


def _add_game(**overrides):
    defaults = {
        "title": "Celeste",
        "description": "Precision platformer",
        "price": 19.99,
        "genres": json.dumps(["Platformer", "Indie"]),
        "platforms": json.dumps(["PC", "Switch"]),
        "release_date": "2018-01-25",
        "stock_count": 4,
    }
    defaults.update(overrides)
    return current_domain.process(AddGame(**defaults), asynchronous=False)


class TestAddGame:
    def test_add_game_persists(self):
        game_id = _add_game()
        game = current_domain.repository_for(Game).get(game_id)
        assert game.title == "Celeste"
        assert game.genre_list == ["Platformer", "Indie"]
        assert game.release_date.year == 2018
        assert game.in_stock is True

    def test_discount_above_price_rejected(self):
        with pytest.raises(ValidationError):
            _add_game(price=10.0, discount_price=12.0)


class TestUpdateGame:
    def test_only_given_fields_change(self):
        game_id = _add_game()
        current_domain.process(UpdateGame(game_id=game_id, price=14.99), asynchronous=False)

        game = load_game(game_id)
        assert game.price == 14.99
        assert game.description == "Precision platformer"
        assert game.platform_list == ["PC", "Switch"]

    def test_update_lists(self):
        game_id = _add_game()
        current_domain.process(UpdateGame(game_id=game_id, platforms=json.dumps(["PS5"])), asynchronous=False)
        assert load_game(game_id).platform_list == ["PS5"]

    def test_unknown_game(self):
        with pytest.raises(NotFoundError):
            current_domain.process(UpdateGame(game_id="missing", price=1.0), asynchronous=False)


class TestSetGameStock:
    def test_set_stock(self):
        game_id = _add_game(stock_count=0)
        current_domain.process(SetGameStock(game_id=game_id, stock_count=8), asynchronous=False)

        game = load_game(game_id)
        assert game.stock_count == 8
        assert game.in_stock is True


class TestRemoveGame:
    def test_remove_game(self):
        game_id = _add_game()
        current_domain.process(RemoveGame(game_id=game_id), asynchronous=False)
        assert find_game(game_id) is None

    def test_remove_unknown_game(self):
        with pytest.raises(NotFoundError):
            current_domain.process(RemoveGame(game_id="missing"), asynchronous=False)
