import pytest
from protean.exceptions import ValidationError

from storefront.account.events import UserRegistered
from storefront.account.user import Role, User


class TestUserRegister:
    def test_register_normalises_email(self):
        user = User.register(name="Nadia", email="  Nadia@Example.COM ")

        assert user.email == "nadia@example.com"
        assert user.role == Role.CUSTOMER.value
        assert user.is_admin is False
        event = user._events[-1]
        assert isinstance(event, UserRegistered)
        assert event.email == "nadia@example.com"

    def test_admin_role(self):
        assert User.register(name="Admin", email="admin@gamebazaar.test", role="admin").is_admin

    @pytest.mark.parametrize("email", ["no-at-sign", "a@b", "a..b@example.com", "two@@example.com"])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError):
            User.register(name="Nadia", email=email)

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            User.register(name="Nadia", email="nadia@example.com", role="owner")
