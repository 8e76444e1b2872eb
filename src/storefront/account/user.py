"""User aggregate: the authenticated actor behind carts, orders and wishlists."""

import re
from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront

_EMAIL_PATTERN = re.compile(r"^[^@\s;,()<>\[\]\\\"]+@[^@\s.][^@\s]*\.[^@\s.]+$")


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.aggregate
class User:
    """A registered storefront account.

    The role decides which operations the user may perform: administrators
    manage the catalogue and move orders through fulfillment.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and (".." in self.email or not _EMAIL_PATTERN.match(self.email)):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @classmethod
    def register(cls, name, email, role=Role.CUSTOMER.value):
        from storefront.account.events import UserRegistered

        now = datetime.now()
        user = cls(name=name, email=email.strip().lower(), role=role, created_at=now)
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user
