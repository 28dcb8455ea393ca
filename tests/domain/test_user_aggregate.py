"""Tests for the User aggregate, password hashing and email validation."""

import pytest
from protean.exceptions import ValidationError
from storefront.account.events import UserLoggedIn, UserRegistered
from storefront.account.passwords import hash_password, verify_password
from storefront.account.user import User, UserRole
from storefront.shared.email import normalize_email


def _register(**overrides):
    defaults = {
        "username": "sipho",
        "email": "Sipho@Example.com",
        "password": "correct-horse",
        "first_name": "Sipho",
        "last_name": "Nkosi",
    }
    defaults.update(overrides)
    return User.register(**defaults)


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret-pass")
        assert hashed != "secret-pass"
        assert hashed.startswith("$pbkdf2-sha256$")

    def test_verify(self):
        hashed = hash_password("secret-pass")
        assert verify_password("secret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_verify_without_hash(self):
        assert not verify_password("anything", "")


class TestEmail:
    def test_normalizes_case_and_whitespace(self):
        assert normalize_email("  Jane@Example.COM ") == "jane@example.com"

    @pytest.mark.parametrize("email", ["no-at-sign", "two@@example.com", "a@nodot", "a b@example.com", "a@.example.com"])
    def test_rejects_malformed_addresses(self, email):
        with pytest.raises(ValidationError):
            normalize_email(email)


class TestRegister:
    def test_register(self):
        user = _register()
        assert user.username == "sipho"
        assert user.email == "sipho@example.com"
        assert user.role == UserRole.CUSTOMER.value
        assert user.is_active is True
        assert user.full_name == "Sipho Nkosi"

    def test_password_is_hashed(self):
        user = _register()
        assert user.password_hash != "correct-horse"
        assert user.check_password("correct-horse")

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(password="short")
        assert exc.value.messages["password"] == ["Password must be at least 8 characters long."]

    def test_username_length(self):
        with pytest.raises(ValidationError):
            _register(username="ab")

    def test_raises_registered_event(self):
        user = _register()
        events = [e for e in user._events if isinstance(e, UserRegistered)]
        assert events[0].email == "sipho@example.com"


class TestLoginAndProfile:
    def test_record_login(self):
        user = _register()
        user.record_login()
        assert user.last_login_at is not None
        assert len([e for e in user._events if isinstance(e, UserLoggedIn)]) == 1

    def test_update_profile_keeps_email(self):
        user = _register()
        user.update_profile(username="sipho_n", first_name="Sipho", last_name="Ndlovu", address="1 Loop St")
        assert user.username == "sipho_n"
        assert user.last_name == "Ndlovu"
        assert user.email == "sipho@example.com"
