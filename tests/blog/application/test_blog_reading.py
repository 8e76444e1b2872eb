from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain

from storefront.blog.lookup import load_visible_post
from storefront.blog.post import BlogPost
from storefront.blog.reading import PostFilter, browse_posts, featured_posts
from storefront.errors import NotFoundError

CONTENT = "Ranked tips, loadouts and map rotations explained for newer players in detail. " * 2


@pytest.fixture
def make_post():
    def _make(title, status="published", blog_type="Gaming Tips", tags=(), featured=False, age_days=0):
        post = BlogPost.create(
            title=title,
            description=f"{title} summary",
            content=CONTENT,
            blog_type=blog_type,
            frontpage_image="cover.png",
            author_id="admin-1",
            tags=list(tags),
            status=status,
            featured=featured,
        )
        post.created_at = datetime.now(UTC) - timedelta(days=age_days)
        current_domain.repository_for(BlogPost).add(post)
        return post

    return _make


class TestBrowsePosts:
    def test_public_listing_hides_unpublished(self, make_post):
        make_post("Live Post")
        make_post("Draft Post", status="draft")
        make_post("Old Post", status="archived")

        assert [p.title for p in browse_posts().items] == ["Live Post"]

    def test_admin_listing_includes_everything(self, make_post):
        make_post("Live Post")
        make_post("Draft Post", status="draft")

        result = browse_posts(PostFilter(include_unpublished=True))
        assert result.total == 2

        drafts = browse_posts(PostFilter(include_unpublished=True, status="draft"))
        assert [p.title for p in drafts.items] == ["Draft Post"]

    def test_newest_first(self, make_post):
        make_post("First", age_days=2)
        make_post("Second", age_days=1)

        assert [p.title for p in browse_posts().items] == ["Second", "First"]

    def test_filters(self, make_post):
        make_post("Aim Guide", blog_type="Game Guides", tags=["FPS"])
        make_post("GPU Roundup", blog_type="Hardware & Tech", tags=["hardware"])

        assert [p.title for p in browse_posts(PostFilter(blog_type="game guides")).items] == ["Aim Guide"]
        assert [p.title for p in browse_posts(PostFilter(tag="fps")).items] == ["Aim Guide"]
        assert [p.title for p in browse_posts(PostFilter(search="roundup")).items] == ["GPU Roundup"]

    def test_pagination(self, make_post):
        for i in range(5):
            make_post(f"Post {i}")

        result = browse_posts(page=2, limit=2)
        assert result.total == 5
        assert result.pages == 3
        assert len(result.items) == 2


def test_featured_posts(make_post):
    make_post("Featured Live", featured=True)
    make_post("Featured Draft", status="draft", featured=True)
    make_post("Plain")

    assert [p.title for p in featured_posts()] == ["Featured Live"]


class TestVisibility:
    def test_resolve_by_id_or_slug(self, make_post):
        post = make_post("Ranked Basics")

        assert load_visible_post(post.id).id == post.id
        assert load_visible_post("ranked-basics").id == post.id

    def test_draft_hidden_from_public(self, make_post, make_user):
        post = make_post("Secret Draft", status="draft")

        with pytest.raises(NotFoundError, match="Blog not found"):
            load_visible_post(post.id)
        with pytest.raises(NotFoundError):
            load_visible_post(post.id, viewer=make_user())

        assert load_visible_post(post.id, viewer=make_user(role="admin")).id == post.id
