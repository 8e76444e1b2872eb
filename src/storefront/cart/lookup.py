from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.errors import NotFoundError


def find_cart(user_id) -> Cart | None:
    repo = current_domain.repository_for(Cart)
    carts = repo._dao.query.filter(user_id=str(user_id)).all().items
    return carts[0] if carts else None


def load_cart(user_id) -> Cart:
    cart = find_cart(user_id)
    if cart is None:
        raise NotFoundError("Cart not found")
    return cart


def get_or_start_cart(user_id) -> Cart:
    """Return the user's cart, creating an empty one on first access."""
    cart = find_cart(user_id)
    if cart is None:
        cart = Cart.start(user_id)
        current_domain.repository_for(Cart).add(cart)
    return cart
