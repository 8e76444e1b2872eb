"""Review aggregate: a customer's star rating and comment on a game.

A user keeps at most one active review per game. Removing a review retires
it rather than deleting it, which frees the user to review the game again.

State machine:
    ACTIVE -> REMOVED
    REMOVED -> (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.review.events import ReviewEdited, ReviewRemoved, ReviewSubmitted

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MIN_RATING = 1
MAX_RATING = 5


class ReviewStatus(Enum):
    ACTIVE = "active"
    REMOVED = "removed"


@storefront.entity(part_of="Review")
class ReviewLike:
    user_id = Identifier(required=True)
    liked_at = DateTime(required=True)


@storefront.aggregate
class Review:
    game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text(required=True)
    likes = HasMany(ReviewLike)
    status = String(choices=ReviewStatus, default=ReviewStatus.ACTIVE.value)
    is_edited = Boolean(default=False)
    removed_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and not self.comment.strip():
            raise ValidationError({"comment": ["Please add a comment"]})

    @classmethod
    def submit(cls, game_id, user_id, rating, comment):
        now = datetime.now(UTC)
        review = cls(
            game_id=game_id,
            user_id=user_id,
            rating=rating,
            comment=comment.strip() if comment else comment,
            status=ReviewStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                game_id=str(game_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review

    @property
    def is_active(self) -> bool:
        return self.status == ReviewStatus.ACTIVE.value

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_written_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def _assert_active(self):
        if not self.is_active:
            raise ValidationError({"status": ["Review has been removed"]})

    def edit(self, rating=_UNSET, comment=_UNSET):
        """Change the rating and/or the comment of an active review."""
        self._assert_active()

        now = datetime.now(UTC)
        with atomic_change(self):
            if rating is not _UNSET:
                self.rating = rating
            if comment is not _UNSET:
                self.comment = comment.strip() if comment else comment
            self.is_edited = True
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                game_id=str(self.game_id),
                rating=self.rating,
                edited_at=now,
            )
        )

    def remove(self, removed_by):
        self._assert_active()

        now = datetime.now(UTC)
        self.status = ReviewStatus.REMOVED.value
        self.removed_by = removed_by
        self.updated_at = now

        self.raise_(
            ReviewRemoved(
                review_id=str(self.id),
                game_id=str(self.game_id),
                removed_by=str(removed_by),
                removed_at=now,
            )
        )

    def toggle_like(self, user_id) -> bool:
        """Like the review, or take an earlier like back. Returns whether it is now liked."""
        self._assert_active()

        existing = next((like for like in self.likes if str(like.user_id) == str(user_id)), None)
        if existing is not None:
            self.remove_likes(existing)
            return False

        self.add_likes(ReviewLike(user_id=user_id, liked_at=datetime.now(UTC)))
        return True

    def liked_by(self, user_id) -> bool:
        return any(str(like.user_id) == str(user_id) for like in self.likes)
