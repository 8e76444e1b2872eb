"""Notification aggregate: the audit record of one outgoing email.

State Machine:
    PENDING → SENT
    PENDING → FAILED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront
from storefront.notifications.events import NotificationFailed, NotificationSent


class NotificationKind(Enum):
    WELCOME = "welcome"
    ORDER_CONFIRMED = "orderConfirmed"
    STATUS_CHANGED = "statusChanged"


class NotificationStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {NotificationStatus.SENT, NotificationStatus.FAILED},
    NotificationStatus.SENT: set(),
    NotificationStatus.FAILED: set(),
}


@storefront.aggregate
class Notification:
    recipient_id: Identifier(required=True)
    recipient_email: String(required=True, max_length=254)
    kind: String(choices=NotificationKind, required=True)
    order_id: Identifier()
    order_status: String(max_length=20)
    subject: String(max_length=500)
    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    message_id: String(max_length=255)
    failure_reason: String(max_length=500)
    has_attachment: Boolean(default=False)
    attachment_skipped: Boolean(default=False)
    sent_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, recipient_id, recipient_email, kind, subject, order_id=None, order_status=None):
        now = datetime.now(UTC)
        return cls(
            recipient_id=recipient_id,
            recipient_email=recipient_email,
            kind=kind,
            subject=subject,
            order_id=order_id,
            order_status=order_status,
            status=NotificationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    def _assert_can_transition(self, target_status):
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, message_id, has_attachment=False, attachment_skipped=False):
        self._assert_can_transition(NotificationStatus.SENT)

        now = datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.message_id = message_id
        self.has_attachment = has_attachment
        self.attachment_skipped = attachment_skipped
        self.sent_at = now
        self.updated_at = now

        self.raise_(
            NotificationSent(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                kind=self.kind,
                message_id=message_id,
                sent_at=now,
            )
        )

    def mark_failed(self, reason, attachment_skipped=False):
        self._assert_can_transition(NotificationStatus.FAILED)

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = (reason or "Unknown error")[:500]
        self.attachment_skipped = attachment_skipped
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                kind=self.kind,
                reason=self.failure_reason,
                failed_at=now,
            )
        )
