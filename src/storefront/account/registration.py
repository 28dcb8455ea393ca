"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import logger, storefront


@storefront.command(part_of="User")
class RegisterUser:
    username = String(required=True, min_length=3, max_length=50)
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)
    first_name = String(required=True, max_length=50)
    last_name = String(required=True, max_length=50)
    phone_number = String(max_length=20)
    address = String(max_length=200)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.by_email(command.email):
            raise ValidationError({"email": ["An account with this email already exists."]})
        if repo.by_username(command.username):
            raise ValidationError({"username": ["An account with this username already exists."]})

        user = User.register(
            username=command.username,
            email=command.email,
            password=command.password,
            first_name=command.first_name,
            last_name=command.last_name,
            phone_number=command.phone_number,
            address=command.address,
        )
        repo.add(user)

        logger.info("New user registered", user_id=str(user.id), email=user.email)
        return str(user.id)
