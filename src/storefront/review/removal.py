"""RemoveReview: take a review down. Allowed for its author and for administrators."""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.account.registration import load_user
from storefront.domain import storefront
from storefront.errors import ForbiddenError
from storefront.review.queries import load_active_review
from storefront.review.review import Review

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class RemoveReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class RemoveReviewHandler:
    @handle(RemoveReview)
    def remove_review(self, command):
        actor = load_user(command.actor_id)
        review = load_active_review(command.review_id)
        if not (actor.is_admin or review.is_written_by(actor.id)):
            raise ForbiddenError("Not authorized to delete this review")

        review.remove(removed_by=actor.id)
        current_domain.repository_for(Review).add(review)

        logger.info("review_removed", review_id=str(review.id), removed_by=str(actor.id))
        return str(review.id)
