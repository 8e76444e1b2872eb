"""Notification dispatcher: renders, sends and records order emails.

The dispatcher is the one place that talks to the email channel and the
receipt renderer. It never raises: a receipt that cannot be built or rendered
is dropped and the email goes out without it, and a transport failure comes
back as an unsuccessful ``DeliveryResult``. Every attempt is recorded as a
``Notification``; a failed record write is logged and the result still
returned.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import find_game
from storefront.notifications.channel import get_email_channel
from storefront.notifications.channel.email_port import Attachment, DeliveryResult, EmailPort
from storefront.notifications.notification import Notification, NotificationKind
from storefront.notifications.receipt import get_receipt_renderer
from storefront.notifications.receipt.document import STORE_NAME, build_receipt
from storefront.notifications.receipt.port import ReceiptRenderer
from storefront.notifications.templates import get_template
from storefront.order.order import OrderStatus

logger = structlog.get_logger(__name__)

# Status changes the customer hears about
NOTIFY_STATUSES = frozenset(
    {
        OrderStatus.PROCESSING.value,
        OrderStatus.APPROVED.value,
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
        OrderStatus.CANCELLED.value,
    }
)

# Status changes that carry an updated receipt
RECEIPT_STATUSES = frozenset(
    {
        OrderStatus.APPROVED.value,
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
    }
)


def _unresolved(game_id):
    return None


def receipt_filename(order_id: str, status: str | None = None) -> str:
    if status:
        return f"{STORE_NAME}-Receipt-{order_id}-{status}.pdf"
    return f"{STORE_NAME}-Receipt-{order_id}.pdf"


class NotificationDispatcher:
    def __init__(self, email: EmailPort, renderer: ReceiptRenderer, game_lookup=find_game) -> None:
        self.email = email
        self.renderer = renderer
        self.game_lookup = game_lookup

    def welcome(self, user) -> DeliveryResult:
        return self.notify(user, NotificationKind.WELCOME.value)

    def order_confirmed(self, order, user) -> DeliveryResult:
        return self.notify(user, NotificationKind.ORDER_CONFIRMED.value, order=order)

    def status_changed(self, order, user, status: str) -> DeliveryResult:
        return self.notify(user, NotificationKind.STATUS_CHANGED.value, order=order, status=status)

    def wants_receipt(self, kind: str, status: str | None = None) -> bool:
        if kind == NotificationKind.ORDER_CONFIRMED.value:
            return True
        return kind == NotificationKind.STATUS_CHANGED.value and status in RECEIPT_STATUSES

    def notify(self, user, kind: str, order=None, status: str | None = None) -> DeliveryResult:
        log = logger.bind(kind=kind, user_id=str(user.id), order_id=str(order.id) if order else None, status=status)

        context = {"name": user.name, "email": user.email, "status": status}
        receipt = None
        receipt_complete = True
        if order is not None:
            try:
                receipt = build_receipt(order, user, lookup=self.game_lookup)
            except Exception as exc:
                # Body still goes out, with placeholder lines and no attachment
                log.warning("receipt_build_failed", error=str(exc))
                receipt_complete = False
                receipt = build_receipt(order, user, lookup=_unresolved)
            context["receipt"] = receipt

        attachments: list[Attachment] = []
        attachment_skipped = False
        wants_attachment = receipt is not None and self.wants_receipt(kind, status)
        if wants_attachment and not receipt_complete:
            attachment_skipped = True
        elif wants_attachment:
            try:
                attachments.append(
                    Attachment(
                        filename=receipt_filename(receipt.order_id, status),
                        content=self.renderer.render(receipt),
                        content_type=self.renderer.content_type,
                    )
                )
            except Exception as exc:
                attachment_skipped = True
                log.warning("receipt_render_failed", error=str(exc))
        context["with_receipt"] = bool(attachments)

        rendered = get_template(kind).render(context)
        notification = Notification.create(
            recipient_id=user.id,
            recipient_email=user.email,
            kind=kind,
            subject=rendered["subject"],
            order_id=str(order.id) if order else None,
            order_status=status,
        )

        try:
            result = self.email.send(
                to=user.email,
                subject=rendered["subject"],
                html=rendered["html"],
                text=rendered["text"],
                attachments=attachments,
            )
        except Exception as exc:
            log.error("email_transport_error", error=str(exc), exc_info=True)
            result = DeliveryResult(success=False, error=str(exc))

        if result.success:
            notification.mark_sent(
                result.message_id,
                has_attachment=bool(attachments),
                attachment_skipped=attachment_skipped,
            )
            log.info("notification_sent", message_id=result.message_id, attachment=bool(attachments))
        else:
            notification.mark_failed(result.error, attachment_skipped=attachment_skipped)
            log.warning("notification_failed", error=result.error)

        try:
            current_domain.repository_for(Notification).add(notification)
        except Exception as exc:
            log.error("notification_record_failed", error=str(exc), exc_info=True)
        return result


_current_dispatcher: NotificationDispatcher | None = None


def get_dispatcher() -> NotificationDispatcher:
    """Return the active dispatcher, wired to the configured channel and renderer."""
    global _current_dispatcher
    if _current_dispatcher is None:
        _current_dispatcher = NotificationDispatcher(email=get_email_channel(), renderer=get_receipt_renderer())
    return _current_dispatcher


def set_dispatcher(dispatcher: NotificationDispatcher) -> None:
    global _current_dispatcher
    _current_dispatcher = dispatcher


def reset_dispatcher() -> None:
    global _current_dispatcher
    _current_dispatcher = None
