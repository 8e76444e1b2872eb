"""SubmitReview: rate and comment on a game.

One active review per user per game is enforced here, since it needs a
repository query across Review instances.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.lookup import load_game
from storefront.domain import storefront
from storefront.review.queries import active_review_by
from storefront.review.review import MAX_RATING, MIN_RATING, Review

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class SubmitReview:
    game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text(required=True)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        game = load_game(command.game_id)

        if active_review_by(command.user_id, game.id) is not None:
            raise ValidationError({"review": ["You have already reviewed this game"]})

        review = Review.submit(
            game_id=game.id,
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Review).add(review)

        logger.info("review_submitted", review_id=str(review.id), game_id=str(game.id), rating=review.rating)
        return str(review.id)
