"""Account maintenance: profile edits by the owner, role changes by an administrator."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    email: String(max_length=254)


@storefront.command(part_of="User")
class ChangeUserRole:
    user_id: Identifier(required=True)
    role: String(required=True, max_length=20)


@storefront.command_handler(part_of=User)
class AccountMaintenanceHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email:
            owner = repo.find_by_email(command.email)
            if owner is not None and owner.id != user.id:
                raise ValidationError({"email": ["User with this email already exists"]})

        user.update_profile(
            first_name=command.first_name,
            last_name=command.last_name,
            email=command.email or None,
        )
        repo.add(user)

    @handle(ChangeUserRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)
        logger.info("user_role_changed", user_id=str(user.id), role=user.role)
