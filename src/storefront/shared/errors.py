"""Errors raised outside Protean's own exception hierarchy.

Validation failures and missing aggregates use ``protean.exceptions``
(``ValidationError``, ``ObjectNotFoundError``). The classes here cover
the remaining cases the HTTP layer needs to tell apart.
"""


class StorefrontError(Exception):
    """Base class carrying the HTTP status the API should answer with."""

    status_code = 500
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(StorefrontError):
    status_code = 401


class PermissionDeniedError(StorefrontError):
    status_code = 403


class ExternalServiceError(StorefrontError):
    """A collaborator outside the process (payment provider, object storage) failed."""

    status_code = 502


class PaymentProviderError(ExternalServiceError):
    pass


class StorageError(ExternalServiceError):
    pass


class WebhookSignatureError(StorefrontError):
    """A webhook arrived without a valid provider signature."""

    status_code = 400


class RateLimitExceededError(StorefrontError):
    status_code = 429

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after

    @property
    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}
