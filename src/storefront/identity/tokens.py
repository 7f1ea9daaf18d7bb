"""Access and refresh tokens (JWT, HS256) issued at login.

Both kinds carry the same principal claims. A ``typ`` claim tells them
apart: refresh tokens are only good for minting a new access token, and
are refused anywhere an access token is expected.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
import structlog

from storefront.config import get_settings

logger = structlog.get_logger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as carried by the access token."""

    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"


def _encode(user_id: str, email: str, role: str, token_type: str, lifetime: timedelta) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "typ": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, get_settings().jwt_secret, algorithm=JWT_ALGORITHM)


def _decode(token: str, token_type: str) -> Principal | None:
    try:
        payload = jwt.decode(token, get_settings().jwt_secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("token_expired", token_type=token_type)
        return None
    except jwt.InvalidTokenError as exc:
        logger.debug("token_invalid", token_type=token_type, error=str(exc))
        return None

    # Tokens minted before the typ claim existed are access tokens
    if payload.get("typ", ACCESS) != token_type:
        logger.debug("token_wrong_type", expected=token_type, actual=payload.get("typ"))
        return None

    return Principal(user_id=payload["sub"], email=payload.get("email", ""), role=payload.get("role", "USER"))


def create_access_token(user_id: str, email: str, role: str) -> str:
    lifetime = timedelta(minutes=get_settings().jwt_expiry_minutes)
    return _encode(user_id, email, role, ACCESS, lifetime)


def create_refresh_token(user_id: str, email: str, role: str) -> str:
    lifetime = timedelta(days=get_settings().jwt_refresh_expiry_days)
    return _encode(user_id, email, role, REFRESH, lifetime)


def decode_access_token(token: str) -> Principal | None:
    """Return the token's principal, or None when it is expired, invalid or a refresh token."""
    return _decode(token, ACCESS)


def decode_refresh_token(token: str) -> Principal | None:
    return _decode(token, REFRESH)
