"""Wishlist aggregate: games a user wants to remember, one entry per game."""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier

from storefront.domain import storefront


@storefront.entity(part_of="Wishlist")
class WishlistEntry:
    game_id = Identifier(required=True)
    added_at = DateTime()


@storefront.aggregate
class Wishlist:
    user_id = Identifier(required=True)
    entries = HasMany(WishlistEntry)

    @classmethod
    def start(cls, user_id):
        return cls(user_id=user_id)

    def contains(self, game_id) -> bool:
        return any(str(entry.game_id) == str(game_id) for entry in self.entries)

    def add_game(self, game_id):
        if self.contains(game_id):
            return
        self.add_entries(WishlistEntry(game_id=game_id, added_at=datetime.now(UTC)))

    def remove_game(self, game_id):
        entry = next((e for e in self.entries if str(e.game_id) == str(game_id)), None)
        if entry is not None:
            self.remove_entries(entry)
