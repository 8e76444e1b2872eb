"""Reader engagement with published posts: view counts and likes."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.blog.lookup import load_post
from storefront.blog.post import BlogPost
from storefront.domain import storefront


@storefront.command(part_of="BlogPost")
class RecordBlogView:
    post_id = Identifier(required=True)


@storefront.command(part_of="BlogPost")
class ToggleBlogLike:
    post_id = Identifier(required=True)
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=BlogPost)
class BlogEngagementHandler:
    @handle(RecordBlogView)
    def record_view(self, command):
        post = load_post(command.post_id)
        if not post.is_published:
            return post.views
        post.record_view()
        current_domain.repository_for(BlogPost).add(post)
        return post.views

    @handle(ToggleBlogLike)
    def toggle_like(self, command):
        post = load_post(command.post_id)
        liked = post.toggle_like(command.user_id)
        current_domain.repository_for(BlogPost).add(post)
        return liked
