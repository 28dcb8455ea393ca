"""Credential verification: command and handler.

Failures never reveal whether the email or the password was wrong.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import logger, storefront

INVALID_CREDENTIALS = "Invalid email or password."
INACTIVE_ACCOUNT = "Account is inactive."


@storefront.command(part_of="User")
class AuthenticateUser:
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class AuthenticateUserHandler:
    @handle(AuthenticateUser)
    def authenticate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.by_email(command.email)

        if user is None:
            logger.warning("Authentication failed: user not found", email=command.email)
            raise ValidationError({"credentials": [INVALID_CREDENTIALS]})

        if not user.is_active:
            logger.warning("Authentication failed: account inactive", user_id=str(user.id))
            raise ValidationError({"credentials": [INACTIVE_ACCOUNT]})

        if not user.check_password(command.password):
            logger.warning("Authentication failed: invalid password", user_id=str(user.id))
            raise ValidationError({"credentials": [INVALID_CREDENTIALS]})

        user.record_login()
        repo.add(user)

        logger.info("User authenticated", user_id=str(user.id))
        return str(user.id)
