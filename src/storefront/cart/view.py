"""Read model for displaying a cart with its games resolved."""

from storefront.cart.cart import Cart
from storefront.catalogue.lookup import find_game


def cart_view(cart: Cart) -> dict:
    lines = []
    for line in cart.lines:
        game = find_game(line.game_id)
        lines.append(
            {
                "id": str(line.id),
                "game_id": str(line.game_id),
                "game": _game_summary(game) if game else None,
                "quantity": line.quantity,
                "price": line.price,
                "subtotal": line.subtotal,
            }
        )

    return {
        "id": str(cart.id),
        "user_id": str(cart.user_id),
        "lines": lines,
        "total_price": cart.total_price,
    }


def _game_summary(game) -> dict:
    images = game.image_list
    return {
        "id": str(game.id),
        "title": game.title,
        "image": images[0] if images else None,
        "price": game.price,
        "discount_price": game.discount_price,
        "stock_count": game.stock_count,
        "in_stock": game.in_stock,
    }
