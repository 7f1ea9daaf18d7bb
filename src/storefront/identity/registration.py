"""User registration: Command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new shopper account."""

    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    first_name: String(max_length=100)
    last_name: String(max_length=100)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["User with this email already exists"]})

        user = User.register(
            email=command.email,
            password=command.password,
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        return str(user.id)
