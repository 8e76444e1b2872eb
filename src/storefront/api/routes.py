"""FastAPI endpoints for the storefront."""

import json

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from protean.utils.globals import current_domain

from storefront.account.registration import RegisterUser, load_user
from storefront.account.user import User
from storefront.api.auth import admin_user, current_user, optional_user
from storefront.api.schemas import (
    AddToCartRequest,
    AddToWishlistRequest,
    BlogPostRequest,
    EditReviewRequest,
    Envelope,
    GameRequest,
    PaymentResultRequest,
    PlaceOrderRequest,
    RegisterUserRequest,
    SetStockRequest,
    SubmitReviewRequest,
    UpdateBlogPostRequest,
    UpdateCartItemRequest,
    UpdateGameRequest,
    UpdateStatusRequest,
)
from storefront.api.serializers import blog_post_to_dict, game_to_dict, order_to_dict, review_to_dict, user_to_dict
from storefront.blog.authoring import CreateBlogPost, DeleteBlogPost, UpdateBlogPost
from storefront.blog.engagement import RecordBlogView, ToggleBlogLike
from storefront.blog.lookup import load_post, load_visible_post
from storefront.blog.reading import FEATURED_LIMIT, PostFilter, browse_posts, featured_posts
from storefront.cart.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItem
from storefront.cart.lookup import get_or_start_cart, load_cart
from storefront.cart.view import cart_view
from storefront.catalogue.browsing import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, GameFilter, browse_games
from storefront.catalogue.lookup import load_game
from storefront.catalogue.management import AddGame, RemoveGame, SetGameStock, UpdateGame
from storefront.notifications.dispatch import receipt_filename
from storefront.notifications.receipt import get_receipt_renderer
from storefront.notifications.receipt.document import build_receipt
from storefront.order.checkout import PlaceOrder
from storefront.order.lifecycle import ApproveOrder, PayOrder, UpdateOrderStatus
from storefront.order.queries import list_orders, load_order, load_order_for, orders_for_user
from storefront.review.editing import EditReview
from storefront.review.likes import ToggleReviewLike
from storefront.review.queries import load_review, reviews_for_game
from storefront.review.removal import RemoveReview
from storefront.review.submission import SubmitReview
from storefront.wishlist.entries import AddToWishlist, RemoveFromWishlist, wishlisted_games

user_router = APIRouter(prefix="/users", tags=["users"])
game_router = APIRouter(prefix="/games", tags=["games"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
blog_router = APIRouter(prefix="/blogs", tags=["blogs"])


def _json_list(values):
    return json.dumps(values) if values is not None else None


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=Envelope)
async def register_user(body: RegisterUserRequest) -> Envelope:
    user_id = current_domain.process(RegisterUser(name=body.name, email=body.email), asynchronous=False)
    return Envelope(data=user_to_dict(load_user(user_id)))


@user_router.get("/me", response_model=Envelope)
async def me(user: User = Depends(current_user)) -> Envelope:
    return Envelope(data=user_to_dict(user))


# --- Game endpoints ---


@game_router.get("", response_model=Envelope)
async def list_games(
    search: str | None = None,
    genre: str | None = None,
    platform: str | None = None,
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    in_stock: bool | None = None,
    featured: bool | None = None,
    on_sale: bool | None = None,
    sort: str = "newest",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> Envelope:
    result = browse_games(
        GameFilter(
            search=search,
            genre=genre,
            platform=platform,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            featured=featured,
            on_sale=on_sale,
        ),
        sort=sort,
        page=page,
        limit=limit,
    )
    return Envelope(
        data={
            "count": len(result.items),
            "total": result.total,
            "page": result.page,
            "pages": result.pages,
            "games": [game_to_dict(game) for game in result.items],
        }
    )


@game_router.get("/{game_id}", response_model=Envelope)
async def get_game(game_id: str) -> Envelope:
    return Envelope(data=game_to_dict(load_game(game_id)))


@game_router.post("", status_code=201, response_model=Envelope)
async def add_game(body: GameRequest, admin: User = Depends(admin_user)) -> Envelope:
    command = AddGame(
        title=body.title,
        description=body.description,
        price=body.price,
        discount_price=body.discount_price,
        genres=_json_list(body.genres),
        platforms=_json_list(body.platforms),
        developer=body.developer,
        publisher=body.publisher,
        rating=body.rating,
        release_date=body.release_date.isoformat() if body.release_date else None,
        images=_json_list(body.images),
        featured=body.featured,
        on_sale=body.on_sale,
        stock_count=body.stock_count,
    )
    game_id = current_domain.process(command, asynchronous=False)
    return Envelope(data=game_to_dict(load_game(game_id)))


@game_router.put("/{game_id}", response_model=Envelope)
async def update_game(game_id: str, body: UpdateGameRequest, admin: User = Depends(admin_user)) -> Envelope:
    command = UpdateGame(
        game_id=game_id,
        title=body.title,
        description=body.description,
        price=body.price,
        discount_price=body.discount_price,
        genres=_json_list(body.genres),
        platforms=_json_list(body.platforms),
        developer=body.developer,
        publisher=body.publisher,
        rating=body.rating,
        release_date=body.release_date.isoformat() if body.release_date else None,
        images=_json_list(body.images),
        featured=body.featured,
        on_sale=body.on_sale,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(data=game_to_dict(load_game(game_id)))


@game_router.put("/{game_id}/stock", response_model=Envelope)
async def set_stock(game_id: str, body: SetStockRequest, admin: User = Depends(admin_user)) -> Envelope:
    current_domain.process(SetGameStock(game_id=game_id, stock_count=body.stock_count), asynchronous=False)
    return Envelope(data=game_to_dict(load_game(game_id)))


@game_router.delete("/{game_id}", response_model=Envelope)
async def remove_game(game_id: str, admin: User = Depends(admin_user)) -> Envelope:
    current_domain.process(RemoveGame(game_id=game_id), asynchronous=False)
    return Envelope(data={})


# --- Cart endpoints ---


@cart_router.get("", response_model=Envelope)
async def get_cart(user: User = Depends(current_user)) -> Envelope:
    return Envelope(data=cart_view(get_or_start_cart(user.id)))


@cart_router.post("", response_model=Envelope)
async def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)) -> Envelope:
    command = AddToCart(user_id=user.id, game_id=body.game_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return Envelope(data=cart_view(load_cart(user.id)))


@cart_router.put("/{item_id}", response_model=Envelope)
async def update_cart_item(item_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)) -> Envelope:
    command = UpdateCartItem(user_id=user.id, line_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return Envelope(data=cart_view(load_cart(user.id)))


@cart_router.delete("/{item_id}", response_model=Envelope)
async def remove_cart_item(item_id: str, user: User = Depends(current_user)) -> Envelope:
    current_domain.process(RemoveCartItem(user_id=user.id, line_id=item_id), asynchronous=False)
    return Envelope(data=cart_view(load_cart(user.id)))


@cart_router.delete("", response_model=Envelope)
async def clear_cart(user: User = Depends(current_user)) -> Envelope:
    current_domain.process(ClearCart(user_id=user.id), asynchronous=False)
    return Envelope(data=cart_view(load_cart(user.id)))


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=Envelope)
async def place_order(body: PlaceOrderRequest, user: User = Depends(current_user)) -> Envelope:
    command = PlaceOrder(
        user_id=user.id,
        payment_method=body.payment_method,
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        delivery_notes=body.delivery_notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return Envelope(data=order_to_dict(load_order(order_id)))


@order_router.get("/mine", response_model=Envelope)
async def my_orders(user: User = Depends(current_user)) -> Envelope:
    return Envelope(data=[order_to_dict(order) for order in orders_for_user(user.id)])


@order_router.get("", response_model=Envelope)
async def all_orders(status: str | None = None, admin: User = Depends(admin_user)) -> Envelope:
    return Envelope(data=[order_to_dict(order) for order in list_orders(status)])


@order_router.get("/{order_id}", response_model=Envelope)
async def get_order(order_id: str, user: User = Depends(current_user)) -> Envelope:
    return Envelope(data=order_to_dict(load_order_for(order_id, user)))


@order_router.get("/{order_id}/receipt")
async def download_receipt(order_id: str, user: User = Depends(current_user)) -> Response:
    order = load_order_for(order_id, user)
    owner = user if order.is_owned_by(user.id) else load_user(order.user_id)
    renderer = get_receipt_renderer()
    content = renderer.render(build_receipt(order, owner))
    return Response(
        content=content,
        media_type=renderer.content_type,
        headers={"Content-Disposition": f'attachment; filename="{receipt_filename(str(order.id))}"'},
    )


@order_router.put("/{order_id}/status", response_model=Envelope)
async def update_status(order_id: str, body: UpdateStatusRequest, user: User = Depends(current_user)) -> Envelope:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, actor_id=user.id)
    current_domain.process(command, asynchronous=False)
    return Envelope(data=order_to_dict(load_order(order_id)))


@order_router.put("/{order_id}/approve", response_model=Envelope)
async def approve_order(order_id: str, user: User = Depends(current_user)) -> Envelope:
    current_domain.process(ApproveOrder(order_id=order_id, actor_id=user.id), asynchronous=False)
    return Envelope(data=order_to_dict(load_order(order_id)))


@order_router.put("/{order_id}/pay", response_model=Envelope)
async def pay_order(order_id: str, body: PaymentResultRequest, user: User = Depends(current_user)) -> Envelope:
    command = PayOrder(
        order_id=order_id,
        actor_id=user.id,
        gateway_id=body.id,
        gateway_status=body.status,
        update_time=body.update_time,
        email_address=body.email_address,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(data=order_to_dict(load_order(order_id)))


# --- Wishlist endpoints ---


@wishlist_router.get("", response_model=Envelope)
async def get_wishlist(user: User = Depends(current_user)) -> Envelope:
    return Envelope(data=[game_to_dict(game) for game in wishlisted_games(user.id)])


@wishlist_router.post("", status_code=201, response_model=Envelope)
async def add_to_wishlist(body: AddToWishlistRequest, user: User = Depends(current_user)) -> Envelope:
    current_domain.process(AddToWishlist(user_id=user.id, game_id=body.game_id), asynchronous=False)
    return Envelope(data=[game_to_dict(game) for game in wishlisted_games(user.id)])


@wishlist_router.delete("/{game_id}", response_model=Envelope)
async def remove_from_wishlist(game_id: str, user: User = Depends(current_user)) -> Envelope:
    current_domain.process(RemoveFromWishlist(user_id=user.id, game_id=game_id), asynchronous=False)
    return Envelope(data=[game_to_dict(game) for game in wishlisted_games(user.id)])


# --- Review endpoints ---


@review_router.get("", response_model=Envelope)
async def list_reviews(game: str = Query(min_length=1), user: User | None = Depends(optional_user)) -> Envelope:
    reviews = reviews_for_game(game)
    return Envelope(data={"count": len(reviews), "reviews": [review_to_dict(r, viewer=user) for r in reviews]})


@review_router.post("", status_code=201, response_model=Envelope)
async def submit_review(body: SubmitReviewRequest, user: User = Depends(current_user)) -> Envelope:
    command = SubmitReview(game_id=body.game_id, user_id=user.id, rating=body.rating, comment=body.comment)
    review_id = current_domain.process(command, asynchronous=False)
    return Envelope(data=review_to_dict(load_review(review_id), viewer=user))


@review_router.put("/{review_id}", response_model=Envelope)
async def edit_review(review_id: str, body: EditReviewRequest, user: User = Depends(current_user)) -> Envelope:
    command = EditReview(review_id=review_id, actor_id=user.id, rating=body.rating, comment=body.comment)
    current_domain.process(command, asynchronous=False)
    return Envelope(data=review_to_dict(load_review(review_id), viewer=user))


@review_router.delete("/{review_id}", response_model=Envelope)
async def remove_review(review_id: str, user: User = Depends(current_user)) -> Envelope:
    current_domain.process(RemoveReview(review_id=review_id, actor_id=user.id), asynchronous=False)
    return Envelope(data={})


@review_router.put("/{review_id}/like", response_model=Envelope)
async def like_review(review_id: str, user: User = Depends(current_user)) -> Envelope:
    current_domain.process(ToggleReviewLike(review_id=review_id, user_id=user.id), asynchronous=False)
    return Envelope(data=review_to_dict(load_review(review_id), viewer=user))


# --- Blog endpoints ---


@blog_router.get("", response_model=Envelope)
async def list_posts(
    blog_type: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    featured: bool | None = None,
    status: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: User | None = Depends(optional_user),
) -> Envelope:
    is_admin = user is not None and user.is_admin
    result = browse_posts(
        PostFilter(
            blog_type=blog_type,
            tag=tag,
            search=search,
            featured=featured,
            status=status if is_admin else None,
            include_unpublished=is_admin,
        ),
        page=page,
        limit=limit,
    )
    return Envelope(
        data={
            "count": len(result.items),
            "total": result.total,
            "page": result.page,
            "pages": result.pages,
            "posts": [blog_post_to_dict(post, summary=True) for post in result.items],
        }
    )


@blog_router.get("/featured", response_model=Envelope)
async def list_featured_posts(limit: int = Query(default=FEATURED_LIMIT, ge=1, le=MAX_PAGE_SIZE)) -> Envelope:
    return Envelope(data=[blog_post_to_dict(post, summary=True) for post in featured_posts(limit)])


@blog_router.get("/{key}", response_model=Envelope)
async def get_post(key: str, user: User | None = Depends(optional_user)) -> Envelope:
    post = load_visible_post(key, viewer=user)
    if post.is_published:
        current_domain.process(RecordBlogView(post_id=post.id), asynchronous=False)
        post = load_post(post.id)
    return Envelope(data=blog_post_to_dict(post))


@blog_router.post("", status_code=201, response_model=Envelope)
async def create_post(body: BlogPostRequest, admin: User = Depends(admin_user)) -> Envelope:
    command = CreateBlogPost(
        actor_id=admin.id,
        title=body.title,
        description=body.description,
        content=body.content,
        blog_type=body.blog_type,
        frontpage_image=body.frontpage_image,
        images=_json_list(body.images),
        tags=_json_list(body.tags),
        related_games=_json_list(body.related_games),
        status=body.status,
        featured=body.featured,
    )
    post_id = current_domain.process(command, asynchronous=False)
    return Envelope(data=blog_post_to_dict(load_post(post_id)))


@blog_router.put("/{post_id}", response_model=Envelope)
async def update_post(post_id: str, body: UpdateBlogPostRequest, admin: User = Depends(admin_user)) -> Envelope:
    command = UpdateBlogPost(
        post_id=post_id,
        actor_id=admin.id,
        title=body.title,
        description=body.description,
        content=body.content,
        blog_type=body.blog_type,
        frontpage_image=body.frontpage_image,
        images=_json_list(body.images),
        tags=_json_list(body.tags),
        related_games=_json_list(body.related_games),
        status=body.status,
        featured=body.featured,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(data=blog_post_to_dict(load_post(post_id)))


@blog_router.delete("/{post_id}", response_model=Envelope)
async def delete_post(post_id: str, admin: User = Depends(admin_user)) -> Envelope:
    current_domain.process(DeleteBlogPost(post_id=post_id, actor_id=admin.id), asynchronous=False)
    return Envelope(data={})


@blog_router.put("/{post_id}/like", response_model=Envelope)
async def like_post(post_id: str, user: User = Depends(current_user)) -> Envelope:
    liked = current_domain.process(ToggleBlogLike(post_id=post_id, user_id=user.id), asynchronous=False)
    post = load_post(post_id)
    return Envelope(data={"liked": liked, "likes": post.like_count})
