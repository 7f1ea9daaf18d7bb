"""Email verification and password recovery: Commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class VerifyEmail:
    token: String(required=True, max_length=128)


@storefront.command(part_of="User")
class RequestPasswordReset:
    email: String(required=True, max_length=254)


@storefront.command(part_of="User")
class ResetPassword:
    token: String(required=True, max_length=128)
    password: String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class AccountRecoveryHandler:
    @handle(VerifyEmail)
    def verify_email(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_verify_token(command.token)
        if user is None:
            raise ValidationError({"token": ["Invalid verification token"]})

        user.verify_email()
        repo.add(user)

    @handle(RequestPasswordReset)
    def request_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            # Unknown addresses get the same response as known ones
            logger.info("password_reset_unknown_email")
            return

        user.request_password_reset(expiry_hours=get_settings().password_reset_expiry_hours)
        repo.add(user)

    @handle(ResetPassword)
    def reset_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_reset_token(command.token)
        if user is None:
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        user.reset_password(command.token, command.password)
        repo.add(user)
