"""Turn aggregates into JSON-ready dicts for API responses."""

from storefront.account.registration import find_user
from storefront.catalogue.lookup import find_game
from storefront.notifications.receipt.document import UNAVAILABLE_TITLE


def _iso(value):
    return value.isoformat() if value else None


def user_to_dict(user) -> dict:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "created_at": _iso(user.created_at),
    }


def game_to_dict(game) -> dict:
    return {
        "id": str(game.id),
        "title": game.title,
        "slug": game.slug,
        "description": game.description,
        "price": game.price,
        "discount_price": game.discount_price,
        "effective_price": game.effective_price,
        "genres": game.genre_list,
        "platforms": game.platform_list,
        "developer": game.developer,
        "publisher": game.publisher,
        "rating": game.rating,
        "release_date": _iso(game.release_date),
        "images": game.image_list,
        "featured": game.featured,
        "on_sale": game.on_sale,
        "stock_count": game.stock_count,
        "in_stock": game.in_stock,
        "sales_count": game.sales_count,
        "average_rating": game.average_rating,
        "review_count": game.review_count,
        "created_at": _iso(game.created_at),
    }


def order_to_dict(order) -> dict:
    lines = []
    for line in order.lines:
        game = find_game(line.game_id)
        lines.append(
            {
                "id": str(line.id),
                "game_id": str(line.game_id),
                "title": game.title if game else UNAVAILABLE_TITLE,
                "available": game is not None,
                "quantity": line.quantity,
                "price": line.price,
                "subtotal": line.subtotal,
            }
        )

    address = order.shipping_address
    payment = order.payment_result
    approver = order.approved_by
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "lines": lines,
        "shipping_address": {
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
            "country": address.country,
            "mobile": address.mobile,
        }
        if address
        else None,
        "payment_method": order.payment_method,
        "payment_result": {
            "id": payment.gateway_id,
            "status": payment.status,
            "update_time": payment.update_time,
            "email_address": payment.email_address,
        }
        if payment
        else None,
        "delivery_notes": order.delivery_notes,
        "items_price": order.items_price,
        "tax_price": order.tax_price,
        "shipping_price": order.shipping_price,
        "total_price": order.total_price,
        "status": order.status,
        "is_paid": order.is_paid,
        "paid_at": _iso(order.paid_at),
        "is_delivered": order.is_delivered,
        "delivered_at": _iso(order.delivered_at),
        "approved_at": _iso(order.approved_at),
        "approved_by": {"name": approver.name, "email": approver.email} if approver else None,
        "created_at": _iso(order.created_at),
    }


def review_to_dict(review, viewer=None) -> dict:
    author = find_user(review.user_id)
    return {
        "id": str(review.id),
        "game_id": str(review.game_id),
        "user": {"id": str(review.user_id), "name": author.name if author else None},
        "rating": review.rating,
        "comment": review.comment,
        "likes": review.like_count,
        "liked": review.liked_by(viewer.id) if viewer else False,
        "is_edited": review.is_edited,
        "created_at": _iso(review.created_at),
        "updated_at": _iso(review.updated_at),
    }


def blog_post_to_dict(post, summary: bool = False) -> dict:
    author = find_user(post.author_id)
    data = {
        "id": str(post.id),
        "title": post.title,
        "slug": post.slug,
        "description": post.description,
        "blog_type": post.blog_type,
        "frontpage_image": post.frontpage_image,
        "tags": post.tag_list,
        "author": {"id": str(post.author_id), "name": author.name if author else None},
        "status": post.status,
        "featured": post.featured,
        "views": post.views,
        "likes": post.like_count,
        "read_time": post.read_time,
        "published_at": _iso(post.published_at),
        "created_at": _iso(post.created_at),
        "updated_at": _iso(post.updated_at),
    }
    if summary:
        return data

    related = (find_game(game_id) for game_id in post.related_game_ids)
    data["content"] = post.content
    data["images"] = post.image_list
    data["related_games"] = [
        {"id": str(game.id), "title": game.title, "price": game.price} for game in related if game is not None
    ]
    return data
