"""Catalogue administration: commands and handler for games and their stock."""

import json
from datetime import date

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.game import Game
from storefront.catalogue.lookup import load_game
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

_UPDATABLE = (
    "title",
    "description",
    "price",
    "discount_price",
    "developer",
    "publisher",
    "rating",
    "featured",
    "on_sale",
)
_UPDATABLE_LISTS = ("genres", "platforms", "images")


def _parse_date(value):
    return date.fromisoformat(value) if value else None


def _load_list(value):
    return json.loads(value) if value else []


@storefront.command(part_of="Game")
class AddGame:
    title: String(required=True, max_length=100)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    genres: Text()
    platforms: Text()
    developer: String(max_length=100)
    publisher: String(max_length=100)
    rating: String(max_length=4)
    release_date: String(max_length=10)
    images: Text()
    featured: Boolean(default=False)
    on_sale: Boolean(default=False)
    stock_count: Integer(default=0, min_value=0)


@storefront.command(part_of="Game")
class UpdateGame:
    """Partial update: only fields that are set are applied."""

    game_id: Identifier(required=True)
    title: String(max_length=100)
    description: Text()
    price: Float(min_value=0.0)
    discount_price: Float(min_value=0.0)
    genres: Text()
    platforms: Text()
    developer: String(max_length=100)
    publisher: String(max_length=100)
    rating: String(max_length=4)
    release_date: String(max_length=10)
    images: Text()
    featured: Boolean()
    on_sale: Boolean()


@storefront.command(part_of="Game")
class SetGameStock:
    game_id: Identifier(required=True)
    stock_count: Integer(required=True, min_value=0)


@storefront.command(part_of="Game")
class RemoveGame:
    game_id: Identifier(required=True)


@storefront.command_handler(part_of=Game)
class ManageGameHandler:
    @handle(AddGame)
    def add_game(self, command):
        game = Game.create(
            title=command.title,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            genres=_load_list(command.genres),
            platforms=_load_list(command.platforms),
            developer=command.developer,
            publisher=command.publisher,
            rating=command.rating,
            release_date=_parse_date(command.release_date),
            images=_load_list(command.images),
            featured=command.featured,
            on_sale=command.on_sale,
            stock_count=command.stock_count,
        )
        current_domain.repository_for(Game).add(game)
        logger.info("game_added", game_id=str(game.id), title=game.title)
        return str(game.id)

    @handle(UpdateGame)
    def update_game(self, command):
        game = load_game(command.game_id)

        changes = {}
        for field_name in _UPDATABLE:
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value
        for field_name in _UPDATABLE_LISTS:
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = _load_list(value)
        if command.release_date:
            changes["release_date"] = _parse_date(command.release_date)

        game.update_details(**changes)
        current_domain.repository_for(Game).add(game)
        return str(game.id)

    @handle(SetGameStock)
    def set_stock(self, command):
        game = load_game(command.game_id)
        game.set_stock(command.stock_count)
        current_domain.repository_for(Game).add(game)
        logger.info("stock_adjusted", game_id=str(game.id), stock_count=game.stock_count)
        return str(game.id)

    @handle(RemoveGame)
    def remove_game(self, command):
        game = load_game(command.game_id)
        current_domain.repository_for(Game)._dao.delete(game)
        logger.info("game_removed", game_id=str(game.id), title=game.title)
        return str(game.id)
