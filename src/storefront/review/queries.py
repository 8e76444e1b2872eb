"""Review lookups."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import NotFoundError
from storefront.review.review import Review, ReviewStatus


def load_review(review_id) -> Review:
    try:
        return current_domain.repository_for(Review).get(review_id)
    except ObjectNotFoundError:
        raise NotFoundError(f"Review not found with id of {review_id}") from None


def load_active_review(review_id) -> Review:
    review = load_review(review_id)
    if not review.is_active:
        raise NotFoundError(f"Review not found with id of {review_id}")
    return review


def reviews_for_game(game_id) -> list[Review]:
    """Active reviews of a game, newest first."""
    repo = current_domain.repository_for(Review)
    found = repo._dao.query.filter(game_id=str(game_id), status=ReviewStatus.ACTIVE.value).all().items
    return sorted(found, key=lambda r: r.created_at.timestamp() if r.created_at else 0.0, reverse=True)


def active_review_by(user_id, game_id) -> Review | None:
    repo = current_domain.repository_for(Review)
    found = repo._dao.query.filter(
        user_id=str(user_id),
        game_id=str(game_id),
        status=ReviewStatus.ACTIVE.value,
    ).all()
    return found.items[0] if found.items else None
