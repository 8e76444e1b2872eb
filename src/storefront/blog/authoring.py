"""Blog administration: create, revise and delete posts.

Only administrators write posts. Slugs are unique across posts, and every
related game must exist in the catalogue.
"""

import json

import structlog
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.account.registration import load_user
from storefront.blog.lookup import find_post_by_slug, load_post
from storefront.blog.post import BlogPost
from storefront.catalogue.game import slugify
from storefront.catalogue.lookup import find_game
from storefront.domain import storefront
from storefront.errors import ForbiddenError

logger = structlog.get_logger(__name__)

_REVISABLE = ("title", "description", "content", "blog_type", "frontpage_image", "status", "featured")
_REVISABLE_LISTS = ("images", "tags", "related_games")


def _require_admin(actor_id):
    actor = load_user(actor_id)
    if not actor.is_admin:
        raise ForbiddenError(f"User role {actor.role} is not authorized to manage blog posts")
    return actor


def _load_list(value):
    return json.loads(value) if value else []


def _check_slug_free(title, post_id=None):
    existing = find_post_by_slug(slugify(title))
    if existing is not None and str(existing.id) != str(post_id):
        raise ValidationError({"title": ["Blog with similar title already exists"]})


def _check_related_games(game_ids):
    if any(find_game(game_id) is None for game_id in game_ids):
        raise ValidationError({"related_games": ["One or more related games not found"]})


@storefront.command(part_of="BlogPost")
class CreateBlogPost:
    actor_id = Identifier(required=True)
    title = String(required=True, max_length=200)
    description = String(required=True, max_length=500)
    content = Text(required=True)
    blog_type = String(required=True, max_length=50)
    frontpage_image = Text(required=True)
    images = Text()
    tags = Text()
    related_games = Text()
    status = String(max_length=20, default="draft")
    featured = Boolean(default=False)


@storefront.command(part_of="BlogPost")
class UpdateBlogPost:
    """Partial update: only fields that are set are applied."""

    post_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    title = String(max_length=200)
    description = String(max_length=500)
    content = Text()
    blog_type = String(max_length=50)
    frontpage_image = Text()
    images = Text()
    tags = Text()
    related_games = Text()
    status = String(max_length=20)
    featured = Boolean()


@storefront.command(part_of="BlogPost")
class DeleteBlogPost:
    post_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@storefront.command_handler(part_of=BlogPost)
class BlogAuthoringHandler:
    @handle(CreateBlogPost)
    def create_post(self, command):
        actor = _require_admin(command.actor_id)
        _check_slug_free(command.title)
        related = _load_list(command.related_games)
        _check_related_games(related)

        post = BlogPost.create(
            title=command.title,
            description=command.description,
            content=command.content,
            blog_type=command.blog_type,
            frontpage_image=command.frontpage_image,
            author_id=actor.id,
            images=_load_list(command.images),
            tags=_load_list(command.tags),
            related_games=related,
            status=command.status,
            featured=command.featured,
        )
        current_domain.repository_for(BlogPost).add(post)

        logger.info("blog_post_created", post_id=str(post.id), slug=post.slug, status=post.status)
        return str(post.id)

    @handle(UpdateBlogPost)
    def update_post(self, command):
        _require_admin(command.actor_id)
        post = load_post(command.post_id)

        changes = {}
        for field_name in _REVISABLE:
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value
        for field_name in _REVISABLE_LISTS:
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = _load_list(value)

        if "title" in changes:
            _check_slug_free(changes["title"], post_id=post.id)
        if "related_games" in changes:
            _check_related_games(changes["related_games"])

        post.revise(**changes)
        current_domain.repository_for(BlogPost).add(post)
        return str(post.id)

    @handle(DeleteBlogPost)
    def delete_post(self, command):
        _require_admin(command.actor_id)
        post = load_post(command.post_id)
        current_domain.repository_for(BlogPost)._dao.delete(post)
        logger.info("blog_post_deleted", post_id=str(post.id), slug=post.slug)
        return str(post.id)
