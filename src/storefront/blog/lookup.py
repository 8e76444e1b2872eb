"""Blog post lookups by id or slug."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.blog.post import BlogPost
from storefront.errors import NotFoundError


def find_post(post_id) -> BlogPost | None:
    if not post_id:
        return None
    try:
        return current_domain.repository_for(BlogPost).get(post_id)
    except ObjectNotFoundError:
        return None


def find_post_by_slug(slug: str) -> BlogPost | None:
    found = current_domain.repository_for(BlogPost)._dao.query.filter(slug=slug).all().items
    return found[0] if found else None


def load_post(post_id) -> BlogPost:
    post = find_post(post_id)
    if post is None:
        raise NotFoundError("Blog not found")
    return post


def load_visible_post(key: str, viewer=None) -> BlogPost:
    """Resolve ``key`` as an id, then as a slug.

    Unpublished posts are only visible to administrators; everyone else gets
    the same 404 as for a post that does not exist.
    """
    post = find_post(key) or find_post_by_slug(key)
    if post is None or not (post.is_published or (viewer is not None and viewer.is_admin)):
        raise NotFoundError("Blog not found")
    return post
