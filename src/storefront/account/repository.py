from storefront.account.user import User
from storefront.domain import storefront


@storefront.repository(part_of=User)
class UserRepository:
    def by_email(self, email) -> User | None:
        if not email:
            return None
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def by_username(self, username) -> User | None:
        if not username:
            return None
        return self._dao.query.filter(username=username.strip()).all().first

    def list_active(self) -> list[User]:
        """Active accounts, by username. Backs the customer picker for manual orders."""
        return self._dao.query.filter(is_active=True).order_by("username").all().items
