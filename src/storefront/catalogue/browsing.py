"""Catalogue browsing: filter, sort and paginate games."""

import math
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.catalogue.game import Game

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

_SORTS = {
    "newest": (lambda g: g.created_at.timestamp() if g.created_at else 0.0, True),
    "price": (lambda g: g.effective_price, False),
    "-price": (lambda g: g.effective_price, True),
    "title": (lambda g: (g.title or "").lower(), False),
    "bestselling": (lambda g: g.sales_count or 0, True),
}


@dataclass
class GameFilter:
    search: str | None = None
    genre: str | None = None
    platform: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    in_stock: bool | None = None
    featured: bool | None = None
    on_sale: bool | None = None

    def matches(self, game: Game) -> bool:
        if self.search and self.search.lower() not in (game.title or "").lower():
            return False
        if self.genre and self.genre.lower() not in (g.lower() for g in game.genre_list):
            return False
        if self.platform and self.platform.lower() not in (p.lower() for p in game.platform_list):
            return False
        if self.min_price is not None and game.effective_price < self.min_price:
            return False
        if self.max_price is not None and game.effective_price > self.max_price:
            return False
        if self.in_stock is not None and bool(game.in_stock) != self.in_stock:
            return False
        if self.featured is not None and bool(game.featured) != self.featured:
            return False
        if self.on_sale is not None and bool(game.on_sale) != self.on_sale:
            return False
        return True


@dataclass
class GamePage:
    items: list[Game] = field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 0


def browse_games(
    filters: GameFilter | None = None,
    sort: str = "newest",
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> GamePage:
    """Return one page of games matching ``filters``.

    Unknown sort keys fall back to newest first. ``limit`` is clamped to
    ``1..MAX_PAGE_SIZE`` and ``page`` to at least 1.
    """
    filters = filters or GameFilter()
    games = current_domain.repository_for(Game)._dao.query.all().items
    matching = [game for game in games if filters.matches(game)]

    key, reverse = _SORTS.get(sort, _SORTS["newest"])
    matching.sort(key=key, reverse=reverse)

    limit = max(1, min(limit, MAX_PAGE_SIZE))
    page = max(1, page)
    start = (page - 1) * limit

    return GamePage(
        items=matching[start : start + limit],
        total=len(matching),
        page=page,
        pages=math.ceil(len(matching) / limit),
    )
