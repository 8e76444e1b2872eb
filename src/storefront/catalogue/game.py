"""Game aggregate: a catalogue entry with price, discount and stock."""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Date, DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InsufficientStockError


class EsrbRating(Enum):
    EVERYONE = "E"
    EVERYONE_10 = "E10+"
    TEEN = "T"
    MATURE = "M"
    ADULTS_ONLY = "A"


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def _dump_list(values) -> str:
    return json.dumps([str(v).strip() for v in (values or []) if str(v).strip()])


@storefront.aggregate
class Game:
    """A video game offered in the storefront.

    ``in_stock`` mirrors ``stock_count > 0`` and is kept in step by every
    stock operation. ``genres``, ``platforms`` and ``images`` are stored as
    JSON arrays.
    """

    title: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    genres: Text(default="[]")
    platforms: Text(default="[]")
    developer: String(max_length=100)
    publisher: String(max_length=100)
    rating: String(choices=EsrbRating)
    release_date: Date()
    images: Text(default="[]")
    featured: Boolean(default=False)
    on_sale: Boolean(default=False)
    stock_count: Integer(default=0, min_value=0)
    in_stock: Boolean(default=False)
    sales_count: Integer(default=0, min_value=0)
    average_rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def discount_cannot_exceed_price(self):
        if self.discount_price is not None and self.price is not None and self.discount_price > self.price:
            raise ValidationError({"discount_price": ["Discount price cannot exceed the regular price"]})

    @invariant.post
    def in_stock_follows_stock_count(self):
        if self.in_stock != ((self.stock_count or 0) > 0):
            raise ValidationError({"in_stock": ["In-stock flag does not match stock count"]})

    @classmethod
    def create(
        cls,
        title,
        description,
        price,
        discount_price=None,
        genres=None,
        platforms=None,
        developer=None,
        publisher=None,
        rating=None,
        release_date=None,
        images=None,
        featured=False,
        on_sale=False,
        stock_count=0,
    ):
        from storefront.catalogue.events import GameAdded

        now = datetime.now(UTC)
        game = cls(
            title=title,
            slug=slugify(title),
            description=description,
            price=price,
            discount_price=discount_price,
            genres=_dump_list(genres),
            platforms=_dump_list(platforms),
            developer=developer,
            publisher=publisher,
            rating=rating,
            release_date=release_date,
            images=_dump_list(images),
            featured=featured,
            on_sale=on_sale,
            stock_count=stock_count,
            in_stock=stock_count > 0,
            created_at=now,
            updated_at=now,
        )
        game.raise_(
            GameAdded(
                game_id=game.id,
                title=game.title,
                price=game.price,
                stock_count=game.stock_count,
                added_at=now,
            )
        )
        return game

    @property
    def effective_price(self) -> float:
        """Price charged right now: the discount when one is set, else the list price."""
        if self.discount_price:
            return self.discount_price
        return self.price

    @property
    def genre_list(self) -> list[str]:
        return json.loads(self.genres) if self.genres else []

    @property
    def platform_list(self) -> list[str]:
        return json.loads(self.platforms) if self.platforms else []

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def update_details(self, **changes):
        """Apply a partial update of descriptive and pricing fields."""
        from storefront.catalogue.events import GameUpdated

        with atomic_change(self):
            for field_name in ("genres", "platforms", "images"):
                if field_name in changes:
                    changes[field_name] = _dump_list(changes[field_name])
            if "title" in changes:
                changes["slug"] = slugify(changes["title"])
            for field_name, value in changes.items():
                setattr(self, field_name, value)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            GameUpdated(
                game_id=self.id,
                title=self.title,
                price=self.price,
                discount_price=self.discount_price,
                updated_at=self.updated_at,
            )
        )

    def record_rating(self, average_rating: float, review_count: int):
        """Store the review summary recomputed from the game's active reviews."""
        self.average_rating = round(average_rating, 2) if review_count else 0.0
        self.review_count = review_count

    def can_supply(self, quantity: int) -> bool:
        return bool(self.in_stock) and (self.stock_count or 0) >= quantity

    def reserve_stock(self, quantity: int, order_id=None):
        """Take ``quantity`` units out of stock, refusing when not enough remain."""
        from storefront.catalogue.events import StockReserved

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.can_supply(quantity):
            raise InsufficientStockError(self.title, requested=quantity, available=self.stock_count or 0)

        with atomic_change(self):
            self.stock_count -= quantity
            self.sales_count = (self.sales_count or 0) + quantity
            self.in_stock = self.stock_count > 0
            self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReserved(
                game_id=self.id,
                order_id=order_id,
                quantity=quantity,
                remaining=self.stock_count,
            )
        )

    def release_stock(self, quantity: int, order_id=None):
        """Return previously reserved units, e.g. when an order is cancelled."""
        from storefront.catalogue.events import StockReleased

        with atomic_change(self):
            self.stock_count = (self.stock_count or 0) + quantity
            self.sales_count = max((self.sales_count or 0) - quantity, 0)
            self.in_stock = self.stock_count > 0
            self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReleased(
                game_id=self.id,
                order_id=order_id,
                quantity=quantity,
                remaining=self.stock_count,
            )
        )

    def set_stock(self, stock_count: int):
        from storefront.catalogue.events import StockAdjusted

        if stock_count < 0:
            raise ValidationError({"stock_count": ["Stock count cannot be negative"]})

        previous = self.stock_count or 0
        with atomic_change(self):
            self.stock_count = stock_count
            self.in_stock = stock_count > 0
            self.updated_at = datetime.now(UTC)

        self.raise_(
            StockAdjusted(
                game_id=self.id,
                previous_count=previous,
                new_count=stock_count,
            )
        )
