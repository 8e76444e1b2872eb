"""Wishlist management: commands, handler and read model."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import find_game, load_game
from storefront.domain import storefront
from storefront.wishlist.wishlist import Wishlist


@storefront.command(part_of="Wishlist")
class AddToWishlist:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)


def find_wishlist(user_id) -> Wishlist | None:
    repo = current_domain.repository_for(Wishlist)
    found = repo._dao.query.filter(user_id=str(user_id)).all().items
    return found[0] if found else None


@storefront.command_handler(part_of=Wishlist)
class WishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        game = load_game(command.game_id)
        wishlist = find_wishlist(command.user_id) or Wishlist.start(command.user_id)
        wishlist.add_game(game.id)
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        wishlist = find_wishlist(command.user_id)
        if wishlist is None:
            return None
        wishlist.remove_game(command.game_id)
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)


def wishlisted_games(user_id) -> list:
    """Games on the user's wishlist, skipping ones removed from the catalogue."""
    wishlist = find_wishlist(user_id)
    if wishlist is None:
        return []
    games = (find_game(entry.game_id) for entry in wishlist.entries)
    return [game for game in games if game is not None]
