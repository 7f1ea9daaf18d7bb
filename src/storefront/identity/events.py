"""Domain events for the User aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created and is awaiting email verification."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String()
    verify_token: String(required=True)


@storefront.event(part_of="User")
class EmailVerified:
    """The account holder confirmed ownership of their email address."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)


@storefront.event(part_of="User")
class PasswordResetRequested:
    """A password reset token was issued for the account."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String()
    reset_token: String(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String()
    last_name: String()


@storefront.event(part_of="User")
class UserRoleChanged:
    """An administrator promoted or demoted the account."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    role: String(required=True)
