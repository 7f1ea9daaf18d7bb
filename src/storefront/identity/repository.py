"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.identity.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def find_by_verify_token(self, token: str) -> User | None:
        return self._dao.query.filter(verify_token=token).all().first

    def find_by_reset_token(self, token: str) -> User | None:
        return self._dao.query.filter(reset_token=token).all().first

    def list_all(self) -> list[User]:
        return self._dao.query.order_by("created_at").all().items
