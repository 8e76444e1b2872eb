import pytest
from protean.exceptions import ValidationError

from storefront.review.events import ReviewEdited, ReviewRemoved, ReviewSubmitted
from storefront.review.review import Review, ReviewStatus


def _review(**overrides):
    defaults = {
        "game_id": "game-1",
        "user_id": "user-1",
        "rating": 4,
        "comment": "  Tight controls, great soundtrack.  ",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestSubmit:
    def test_fields(self):
        review = _review()
        assert review.status == ReviewStatus.ACTIVE.value
        assert review.comment == "Tight controls, great soundtrack."
        assert review.is_edited is False
        assert review.like_count == 0

    def test_raises_submitted_event(self):
        review = _review()
        events = [e for e in review._events if isinstance(e, ReviewSubmitted)]
        assert len(events) == 1
        assert events[0].rating == 4
        assert events[0].game_id == "game-1"

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _review(rating=rating)

    def test_blank_comment_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _review(comment="   ")
        assert "comment" in exc.value.messages


class TestEdit:
    def test_partial_edit(self):
        review = _review()
        review.edit(rating=2)

        assert review.rating == 2
        assert review.comment == "Tight controls, great soundtrack."
        assert review.is_edited is True
        assert isinstance(review._events[-1], ReviewEdited)

    def test_invalid_rating_rejected(self):
        review = _review()
        with pytest.raises(ValidationError):
            review.edit(rating=9)

    def test_removed_review_cannot_be_edited(self):
        review = _review()
        review.remove(removed_by="user-1")
        with pytest.raises(ValidationError):
            review.edit(comment="Changed my mind")


class TestRemove:
    def test_remove(self):
        review = _review()
        review.remove(removed_by="admin-1")

        assert review.is_active is False
        assert review.removed_by == "admin-1"
        event = review._events[-1]
        assert isinstance(event, ReviewRemoved)
        assert event.removed_by == "admin-1"

    def test_remove_twice(self):
        review = _review()
        review.remove(removed_by="user-1")
        with pytest.raises(ValidationError):
            review.remove(removed_by="user-1")


class TestLikes:
    def test_toggle(self):
        review = _review()

        assert review.toggle_like("user-2") is True
        assert review.liked_by("user-2") is True
        assert review.like_count == 1

        assert review.toggle_like("user-2") is False
        assert review.like_count == 0

    def test_likes_from_several_users(self):
        review = _review()
        review.toggle_like("user-2")
        review.toggle_like("user-3")
        assert review.like_count == 2
