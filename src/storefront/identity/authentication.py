"""Login, token refresh and caller resolution."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.tokens import Principal, create_access_token, create_refresh_token, decode_refresh_token
from storefront.identity.user import User
from storefront.shared.errors import AuthenticationError

logger = structlog.get_logger(__name__)


def issue_refresh_token(user: User) -> str:
    return create_refresh_token(user_id=str(user.id), email=user.email, role=user.role)


def authenticate(email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue an access token.

    Unknown emails and wrong passwords produce the same error.
    """
    repo = current_domain.repository_for(User)
    user = repo.find_by_email(email)
    if user is None or not user.check_password(password):
        logger.info("login_failed")
        raise AuthenticationError("Invalid credentials")

    token = create_access_token(user_id=str(user.id), email=user.email, role=user.role)
    logger.info("login_succeeded", user_id=str(user.id))
    return user, token


def refresh_access_token(refresh_token: str) -> str:
    """Mint a new access token from a refresh token.

    Claims are taken from the stored user, so a role change made since the
    refresh token was issued shows up in the new access token.
    """
    principal = decode_refresh_token(refresh_token)
    if principal is None:
        raise AuthenticationError("Invalid or expired refresh token")

    user = load_user(principal)
    return create_access_token(user_id=str(user.id), email=user.email, role=user.role)


def load_user(principal: Principal) -> User:
    try:
        return current_domain.repository_for(User).get(principal.user_id)
    except ObjectNotFoundError:
        raise AuthenticationError("User not found") from None
