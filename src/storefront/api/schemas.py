"""Pydantic request/response schemas for the storefront API.

These are external contracts, separate from the internal protean commands.
"""

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    success: bool = True
    data: Any = None


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class GameRequest(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    genres: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    developer: str | None = None
    publisher: str | None = None
    rating: Literal["E", "E10+", "T", "M", "A"] | None = None
    release_date: date | None = None
    images: list[str] = Field(default_factory=list)
    featured: bool = False
    on_sale: bool = False
    stock_count: int = Field(default=0, ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Elden Ring",
                    "description": "Open-world action RPG.",
                    "price": 59.99,
                    "discount_price": 49.99,
                    "genres": ["RPG", "Action"],
                    "platforms": ["PC", "PS5"],
                    "rating": "M",
                    "stock_count": 25,
                }
            ]
        }
    }


class UpdateGameRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    genres: list[str] | None = None
    platforms: list[str] | None = None
    developer: str | None = None
    publisher: str | None = None
    rating: Literal["E", "E10+", "T", "M", "A"] | None = None
    release_date: date | None = None
    images: list[str] | None = None
    featured: bool | None = None
    on_sale: bool | None = None


class SetStockRequest(BaseModel):
    stock_count: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Cart and wishlist
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    game_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1)


class AddToWishlistRequest(BaseModel):
    game_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    mobile: str = Field(pattern=r"^[0-9]{10,15}$")


class PlaceOrderRequest(BaseModel):
    payment_method: Literal["creditCard", "paypal", "stripe", "bkash", "nagad"]
    shipping_address: ShippingAddressSchema
    delivery_notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "payment_method": "creditCard",
                    "shipping_address": {
                        "street": "12 Lake Road",
                        "city": "Dhaka",
                        "state": "Dhaka",
                        "zip_code": "1207",
                        "country": "Bangladesh",
                        "mobile": "01712345678",
                    },
                }
            ]
        }
    }


class UpdateStatusRequest(BaseModel):
    status: str


class PaymentResultRequest(BaseModel):
    id: str | None = None
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    game_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1)


class EditReviewRequest(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = Field(default=None, min_length=1)


# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------
BlogTypeName = Literal[
    "Game News",
    "Gaming Tips",
    "Installation Troubleshooting",
    "Game Reviews",
    "Industry Updates",
    "Hardware & Tech",
    "Game Guides",
    "Gaming Culture",
]
BlogStatusName = Literal["draft", "published", "archived"]


class BlogPostRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=100)
    blog_type: BlogTypeName
    frontpage_image: str = Field(min_length=1)
    images: list[str] = Field(default_factory=list, max_length=10)
    tags: list[str] = Field(default_factory=list)
    related_games: list[str] = Field(default_factory=list)
    status: BlogStatusName = "draft"
    featured: bool = False


class UpdateBlogPostRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = Field(default=None, min_length=100)
    blog_type: BlogTypeName | None = None
    frontpage_image: str | None = None
    images: list[str] | None = Field(default=None, max_length=10)
    tags: list[str] | None = None
    related_games: list[str] | None = None
    status: BlogStatusName | None = None
    featured: bool | None = None
