"""Return stock to the catalogue when an order is cancelled."""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.game import Game
from storefront.catalogue.lookup import find_game
from storefront.domain import storefront
from storefront.order.events import OrderStatusChanged
from storefront.order.order import Order, OrderStatus
from storefront.order.queries import load_order

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class OrderRestockHandler:
    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        if event.new_status != OrderStatus.CANCELLED.value:
            return

        order = load_order(event.order_id)
        repo = current_domain.repository_for(Game)
        for line in order.lines:
            game = find_game(line.game_id)
            if game is None:
                logger.info("restock_skipped_missing_game", order_id=event.order_id, game_id=str(line.game_id))
                continue
            game.release_stock(line.quantity, order_id=event.order_id)
            repo.add(game)

        logger.info("order_restocked", order_id=event.order_id)
