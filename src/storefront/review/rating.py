"""Keep each game's average rating and review count in step with its reviews."""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.game import Game
from storefront.catalogue.lookup import find_game
from storefront.domain import storefront
from storefront.review.events import ReviewEdited, ReviewRemoved, ReviewSubmitted
from storefront.review.queries import reviews_for_game
from storefront.review.review import Review

logger = structlog.get_logger(__name__)


def refresh_game_rating(game_id) -> Game | None:
    """Recompute a game's rating summary from its active reviews."""
    game = find_game(game_id)
    if game is None:
        logger.info("rating_skipped_missing_game", game_id=str(game_id))
        return None

    reviews = reviews_for_game(game_id)
    average = sum(review.rating for review in reviews) / len(reviews) if reviews else 0.0
    game.record_rating(average, len(reviews))
    current_domain.repository_for(Game).add(game)

    logger.debug("game_rating_refreshed", game_id=str(game_id), average=game.average_rating, count=game.review_count)
    return game


@storefront.event_handler(part_of=Review)
class GameRatingHandler:
    @handle(ReviewSubmitted)
    def on_review_submitted(self, event: ReviewSubmitted) -> None:
        refresh_game_rating(event.game_id)

    @handle(ReviewEdited)
    def on_review_edited(self, event: ReviewEdited) -> None:
        refresh_game_rating(event.game_id)

    @handle(ReviewRemoved)
    def on_review_removed(self, event: ReviewRemoved) -> None:
        refresh_game_rating(event.game_id)
