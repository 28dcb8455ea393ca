"""User aggregate: a storefront account with a hashed password and a role."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.account.events import ProfileUpdated, UserLoggedIn, UserRegistered
from storefront.account.passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from storefront.domain import storefront
from storefront.shared.email import normalize_email


class UserRole(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


@storefront.aggregate
class User:
    username = String(required=True, min_length=3, max_length=50)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    first_name = String(required=True, max_length=50)
    last_name = String(required=True, max_length=50)
    phone_number = String(max_length=20)
    address = String(max_length=200)
    role = String(choices=UserRole, default=UserRole.CUSTOMER.value)
    is_active = Boolean(default=True)
    registered_at = DateTime()
    last_login_at = DateTime()
    updated_at = DateTime()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def register(
        cls,
        username,
        email,
        password,
        first_name,
        last_name,
        phone_number=None,
        address=None,
        role=UserRole.CUSTOMER.value,
    ):
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                {"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."]}
            )

        now = datetime.now(UTC)
        user = cls(
            username=username.strip(),
            email=normalize_email(email),
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            address=address,
            role=role,
            is_active=True,
            registered_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=user.username,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def check_password(self, password) -> bool:
        return verify_password(password, self.password_hash)

    def record_login(self):
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=str(self.id), logged_in_at=now))

    def update_profile(self, username, first_name, last_name, phone_number=None, address=None):
        self.username = username.strip()
        self.first_name = first_name
        self.last_name = last_name
        self.phone_number = phone_number
        self.address = address
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProfileUpdated(
                user_id=str(self.id),
                username=self.username,
                updated_at=now,
            )
        )

    def deactivate(self):
        self.is_active = False
        self.updated_at = datetime.now(UTC)
