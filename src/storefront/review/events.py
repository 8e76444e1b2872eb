"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewEdited:
    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    rating = Integer(required=True)
    edited_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewRemoved:
    """A review was taken down by its author or an administrator."""

    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    removed_by = Identifier(required=True)
    removed_at = DateTime(required=True)
