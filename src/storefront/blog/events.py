"""Domain events for the BlogPost aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="BlogPost")
class BlogPostCreated:
    __version__ = 1

    post_id = Identifier(required=True)
    title = String(required=True)
    slug = String(required=True)
    author_id = Identifier(required=True)
    status = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="BlogPost")
class BlogPostUpdated:
    __version__ = 1

    post_id = Identifier(required=True)
    title = String(required=True)
    slug = String(required=True)
    status = String(required=True)
    updated_at = DateTime(required=True)
