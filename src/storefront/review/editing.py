"""EditReview: change the rating or comment of a review.

Allowed for the review's author and for administrators.
"""

from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.account.registration import load_user
from storefront.domain import storefront
from storefront.errors import ForbiddenError
from storefront.review.queries import load_active_review
from storefront.review.review import MAX_RATING, MIN_RATING, Review


@storefront.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    rating = Integer(min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text()


@storefront.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        actor = load_user(command.actor_id)
        review = load_active_review(command.review_id)
        if not (actor.is_admin or review.is_written_by(actor.id)):
            raise ForbiddenError("Not authorized to update this review")

        changes = {}
        if command.rating is not None:
            changes["rating"] = command.rating
        if command.comment is not None:
            changes["comment"] = command.comment

        review.edit(**changes)
        current_domain.repository_for(Review).add(review)
        return str(review.id)
