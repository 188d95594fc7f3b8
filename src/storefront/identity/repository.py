"""Repository for the User aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.identity.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find(self, user_id) -> User | None:
        try:
            return self.get(str(user_id))
        except ObjectNotFoundError:
            return None

    def find_by_username(self, username: str) -> User | None:
        return self._dao.query.filter(username=username).all().first

    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email).all().first

    def count(self) -> int:
        return self._dao.query.all().total
