"""Welcome email for newly registered users."""

import structlog
from protean.utils.mixins import handle

from storefront.account.events import UserRegistered
from storefront.account.registration import find_user
from storefront.account.user import User
from storefront.domain import storefront
from storefront.notifications.dispatch import get_dispatcher

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=User)
class AccountNotificationsHandler:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        try:
            user = find_user(event.user_id)
            if user is None:
                logger.warning("Registered user not found", user_id=str(event.user_id))
                return
            get_dispatcher().welcome(user)
        except Exception as e:
            logger.error("Welcome email failed", user_id=str(event.user_id), error=str(e))
