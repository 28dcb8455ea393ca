"""Profile management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import logger, storefront


@storefront.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    username = String(required=True, min_length=3, max_length=50)
    first_name = String(required=True, max_length=50)
    last_name = String(required=True, max_length=50)
    phone_number = String(max_length=20)
    address = String(max_length=200)


@storefront.command(part_of="User")
class DeactivateUser:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        other = repo.by_username(command.username)
        if other is not None and str(other.id) != str(user.id):
            raise ValidationError({"username": ["An account with this username already exists."]})

        user.update_profile(
            username=command.username,
            first_name=command.first_name,
            last_name=command.last_name,
            phone_number=command.phone_number,
            address=command.address,
        )
        repo.add(user)

    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate()
        repo.add(user)
        logger.info("User deactivated", user_id=str(user.id))
