"""User registration: command, handler and lookups."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.account.user import Role, User
from storefront.domain import storefront
from storefront.errors import NotFoundError


@storefront.command(part_of="User")
class RegisterUser:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    role: String(choices=Role, default=Role.CUSTOMER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if find_user_by_email(command.email) is not None:
            raise ValidationError({"email": ["A user with this email already exists"]})

        user = User.register(name=command.name, email=command.email, role=command.role)
        current_domain.repository_for(User).add(user)
        return str(user.id)


def find_user(user_id) -> User | None:
    if not user_id:
        return None
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return None


def load_user(user_id) -> User:
    user = find_user(user_id)
    if user is None:
        raise NotFoundError(f"User not found with id of {user_id}")
    return user


def find_user_by_email(email: str) -> User | None:
    repo = current_domain.repository_for(User)
    matches = repo._dao.query.filter(email=email.strip().lower()).all().items
    return matches[0] if matches else None
