"""BlogPost aggregate: editorial content written by administrators.

Only published posts are visible to the public. The slug is derived from the
title and the read time from the word count of the content, both refreshed
whenever those fields change.
"""

import json
import math
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from storefront.blog.events import BlogPostCreated, BlogPostUpdated
from storefront.catalogue.game import slugify
from storefront.domain import storefront

WORDS_PER_MINUTE = 200
MIN_CONTENT_LENGTH = 100
MAX_IMAGES = 10
MAX_TAG_LENGTH = 50


class BlogType(Enum):
    GAME_NEWS = "Game News"
    GAMING_TIPS = "Gaming Tips"
    INSTALLATION_TROUBLESHOOTING = "Installation Troubleshooting"
    GAME_REVIEWS = "Game Reviews"
    INDUSTRY_UPDATES = "Industry Updates"
    HARDWARE_AND_TECH = "Hardware & Tech"
    GAME_GUIDES = "Game Guides"
    GAMING_CULTURE = "Gaming Culture"


class BlogStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


def read_time_for(content: str) -> int:
    words = len((content or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def _dump(values) -> str:
    return json.dumps([str(v).strip() for v in (values or []) if str(v).strip()])


@storefront.aggregate
class BlogPost:
    title: String(required=True, max_length=200)
    slug: String(max_length=220)
    description: String(required=True, max_length=500)
    content: Text(required=True)
    blog_type: String(required=True, choices=BlogType)
    frontpage_image: Text(required=True)
    images: Text(default="[]")
    tags: Text(default="[]")
    related_games: Text(default="[]")
    author_id: Identifier(required=True)
    status: String(choices=BlogStatus, default=BlogStatus.DRAFT.value)
    featured: Boolean(default=False)
    views: Integer(default=0, min_value=0)
    liked_by: Text(default="[]")
    read_time: Integer(default=1, min_value=1)
    published_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def content_has_minimum_length(self):
        if self.content is not None and len(self.content.strip()) < MIN_CONTENT_LENGTH:
            raise ValidationError({"content": [f"Content must be at least {MIN_CONTENT_LENGTH} characters long"]})

    @invariant.post
    def images_cannot_exceed_maximum(self):
        if len(self.image_list) > MAX_IMAGES:
            raise ValidationError({"images": [f"Maximum {MAX_IMAGES} images allowed"]})

    @invariant.post
    def tags_are_short(self):
        if any(len(tag) > MAX_TAG_LENGTH for tag in self.tag_list):
            raise ValidationError({"tags": [f"Tag cannot exceed {MAX_TAG_LENGTH} characters"]})

    @classmethod
    def create(
        cls,
        title,
        description,
        content,
        blog_type,
        frontpage_image,
        author_id,
        images=None,
        tags=None,
        related_games=None,
        status=BlogStatus.DRAFT.value,
        featured=False,
    ):
        now = datetime.now(UTC)
        post = cls(
            title=title.strip(),
            slug=slugify(title),
            description=description,
            content=content,
            blog_type=blog_type,
            frontpage_image=frontpage_image,
            images=_dump(images),
            tags=_dump(tags),
            related_games=_dump(related_games),
            author_id=author_id,
            status=status,
            featured=featured,
            read_time=read_time_for(content),
            published_at=now if status == BlogStatus.PUBLISHED.value else None,
            created_at=now,
            updated_at=now,
        )
        post.raise_(
            BlogPostCreated(
                post_id=str(post.id),
                title=post.title,
                slug=post.slug,
                author_id=str(author_id),
                status=post.status,
                created_at=now,
            )
        )
        return post

    @property
    def is_published(self) -> bool:
        return self.status == BlogStatus.PUBLISHED.value

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def tag_list(self) -> list[str]:
        return json.loads(self.tags) if self.tags else []

    @property
    def related_game_ids(self) -> list[str]:
        return json.loads(self.related_games) if self.related_games else []

    @property
    def liked_by_ids(self) -> list[str]:
        return json.loads(self.liked_by) if self.liked_by else []

    @property
    def like_count(self) -> int:
        return len(self.liked_by_ids)

    def revise(self, **changes):
        """Apply a partial update. List fields take Python lists."""
        now = datetime.now(UTC)
        with atomic_change(self):
            for field_name in ("images", "tags", "related_games"):
                if field_name in changes:
                    changes[field_name] = _dump(changes[field_name])
            if "title" in changes:
                changes["title"] = changes["title"].strip()
                changes["slug"] = slugify(changes["title"])
            if "content" in changes:
                changes["read_time"] = read_time_for(changes["content"])
            if changes.get("status") == BlogStatus.PUBLISHED.value and self.published_at is None:
                changes["published_at"] = now
            for field_name, value in changes.items():
                setattr(self, field_name, value)
            self.updated_at = now

        self.raise_(
            BlogPostUpdated(
                post_id=str(self.id),
                title=self.title,
                slug=self.slug,
                status=self.status,
                updated_at=now,
            )
        )

    def record_view(self):
        self.views = (self.views or 0) + 1

    def toggle_like(self, user_id) -> bool:
        """Like the post, or take an earlier like back. Returns whether it is now liked."""
        if not self.is_published:
            raise ValidationError({"status": ["Only published posts can be liked"]})

        likers = self.liked_by_ids
        user_id = str(user_id)
        if user_id in likers:
            likers.remove(user_id)
            liked = False
        else:
            likers.append(user_id)
            liked = True
        self.liked_by = json.dumps(likers)
        return liked
