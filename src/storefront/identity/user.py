"""User aggregate root: storefront accounts, roles and account recovery tokens."""

import secrets
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront
from storefront.identity.passwords import hash_password, verify_password

MIN_PASSWORD_LENGTH = 8


class UserRole(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@storefront.aggregate
class User:
    """A registered shopper or back-office administrator.

    The email address is the login identifier and is stored lower-cased.
    Verification and reset tokens are single-use: they are cleared as soon
    as they are redeemed.
    """

    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    role: String(choices=UserRole, default=UserRole.USER.value)
    is_verified: Boolean(default=False)
    verify_token: String(max_length=128)
    reset_token: String(max_length=128)
    reset_token_expires_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        email = self.email or ""
        local, _, domain_part = email.partition("@")
        if not local or "." not in domain_part or " " in email or domain_part.startswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @classmethod
    def register(cls, email, password, first_name=None, last_name=None, role=UserRole.USER.value):
        from storefront.identity.events import UserRegistered

        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

        now = datetime.now(UTC)
        user = cls(
            email=email.strip().lower(),
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            verify_token=secrets.token_hex(32),
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                first_name=first_name,
                verify_token=user.verify_token,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def verify_email(self):
        from storefront.identity.events import EmailVerified

        self.is_verified = True
        self.verify_token = None
        self.updated_at = datetime.now(UTC)
        self.raise_(EmailVerified(user_id=self.id, email=self.email))

    def request_password_reset(self, expiry_hours: int = 24):
        from storefront.identity.events import PasswordResetRequested

        now = datetime.now(UTC)
        self.reset_token = secrets.token_hex(32)
        self.reset_token_expires_at = now + timedelta(hours=expiry_hours)
        self.updated_at = now
        self.raise_(
            PasswordResetRequested(
                user_id=self.id,
                email=self.email,
                first_name=self.first_name,
                reset_token=self.reset_token,
            )
        )
        return self.reset_token

    def reset_password(self, token: str, new_password: str):
        if not self.reset_token or token != self.reset_token:
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        expires_at = self.reset_token_expires_at
        if expires_at is not None and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at is None or expires_at < datetime.now(UTC):
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

        self.password_hash = hash_password(new_password)
        self.reset_token = None
        self.reset_token_expires_at = None
        self.updated_at = datetime.now(UTC)

    def update_profile(self, first_name=None, last_name=None, email=None):
        """Apply the given changes; fields left as ``None`` keep their value."""
        from storefront.identity.events import ProfileUpdated

        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if email is not None:
            self.email = email.strip().lower()

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                email=self.email,
                first_name=self.first_name,
                last_name=self.last_name,
            )
        )

    def change_role(self, role: str):
        from storefront.identity.events import UserRoleChanged

        if role not in {r.value for r in UserRole}:
            raise ValidationError({"role": ["Invalid role"]})
        if role == self.role:
            return

        previous = self.role
        self.role = role
        self.updated_at = datetime.now(UTC)
        self.raise_(UserRoleChanged(user_id=self.id, previous_role=previous, role=role))
