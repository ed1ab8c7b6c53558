"""Repository for the User aggregate."""

from protean.exceptions import ObjectNotFoundError

from authentication.domain import authentication
from authentication.user.user import User, normalize_email
from shared.errors import DuplicateKey, EntityNotFound
from shared.persistence import QueryableRepository


@authentication.repository(part_of=User)
class UserRepository(QueryableRepository):
    """Users are looked up by their lower-cased email address."""

    def find_by_id(self, user_id: str) -> User:
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            raise EntityNotFound("user") from None

    def find_by_email(self, email: str) -> User:
        user = self._dao.query.filter(email=normalize_email(email)).all().first
        if user is None:
            raise EntityNotFound("user")
        return user

    def create(self, user: User) -> User:
        if self._dao.query.filter(email=user.email).all().total:
            raise DuplicateKey("email")
        return self.add(user)

    def update(self, user: User) -> User:
        return self.add(user)
