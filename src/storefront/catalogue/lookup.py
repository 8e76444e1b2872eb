"""Game lookups.

Orders and carts hold weak references to games: a game may be removed from
the catalogue after it was bought. ``find_game`` returns ``None`` for such
references and every caller decides how to present the absence.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.game import Game
from storefront.errors import NotFoundError


def find_game(game_id) -> Game | None:
    if not game_id:
        return None
    try:
        return current_domain.repository_for(Game).get(game_id)
    except ObjectNotFoundError:
        return None


def load_game(game_id) -> Game:
    game = find_game(game_id)
    if game is None:
        raise NotFoundError(f"Game not found with id of {game_id}")
    return game
