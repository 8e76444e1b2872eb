"""Template registry: maps notification kinds to template classes."""

from storefront.notifications.notification import NotificationKind
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.status_update import StatusUpdateTemplate
from storefront.notifications.templates.welcome import WelcomeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationKind.WELCOME.value: WelcomeTemplate,
    NotificationKind.ORDER_CONFIRMED.value: OrderConfirmationTemplate,
    NotificationKind.STATUS_CHANGED.value: StatusUpdateTemplate,
}


def get_template(kind: str):
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for notification kind: {kind}")
    return template_cls
