from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.review.queries import load_active_review
from storefront.review.review import Review


@storefront.command(part_of="Review")
class ToggleReviewLike:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class ReviewLikeHandler:
    @handle(ToggleReviewLike)
    def toggle_like(self, command):
        review = load_active_review(command.review_id)
        liked = review.toggle_like(command.user_id)
        current_domain.repository_for(Review).add(review)
        return liked
