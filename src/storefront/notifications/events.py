"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Notification")
class NotificationSent:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    kind: String(required=True)
    message_id: String()
    sent_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationFailed:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    kind: String(required=True)
    reason: String(required=True)
    failed_at: DateTime(required=True)
