"""Blog listings: filter, search and paginate posts, newest first."""

import math
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.blog.post import BlogPost, BlogStatus
from storefront.catalogue.browsing import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

FEATURED_LIMIT = 5


@dataclass
class PostFilter:
    blog_type: str | None = None
    tag: str | None = None
    search: str | None = None
    featured: bool | None = None
    status: str | None = None
    include_unpublished: bool = False

    def matches(self, post: BlogPost) -> bool:
        if not self.include_unpublished and not post.is_published:
            return False
        if self.status and post.status != self.status:
            return False
        if self.blog_type and self.blog_type.lower() not in (post.blog_type or "").lower():
            return False
        if self.tag and self.tag.lower() not in (t.lower() for t in post.tag_list):
            return False
        if self.search:
            needle = self.search.lower()
            haystack = f"{post.title} {post.description} {post.content}".lower()
            if needle not in haystack:
                return False
        if self.featured is not None and bool(post.featured) != self.featured:
            return False
        return True


@dataclass
class PostPage:
    items: list[BlogPost] = field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 0


def _newest_first(posts: list[BlogPost]) -> list[BlogPost]:
    return sorted(posts, key=lambda p: p.created_at.timestamp() if p.created_at else 0.0, reverse=True)


def browse_posts(filters: PostFilter | None = None, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> PostPage:
    filters = filters or PostFilter()
    posts = current_domain.repository_for(BlogPost)._dao.query.all().items
    matching = _newest_first([post for post in posts if filters.matches(post)])

    limit = max(1, min(limit, MAX_PAGE_SIZE))
    page = max(1, page)
    start = (page - 1) * limit

    return PostPage(
        items=matching[start : start + limit],
        total=len(matching),
        page=page,
        pages=math.ceil(len(matching) / limit),
    )


def featured_posts(limit: int = FEATURED_LIMIT) -> list[BlogPost]:
    repo = current_domain.repository_for(BlogPost)
    posts = repo._dao.query.filter(featured=True, status=BlogStatus.PUBLISHED.value).all().items
    return _newest_first(posts)[: max(1, limit)]
