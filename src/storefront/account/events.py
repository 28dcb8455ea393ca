"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    user_id = Identifier(required=True)
    username = String(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    user_id = Identifier(required=True)
    logged_in_at = DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    """Username, name, phone or address changed. Email never changes."""

    user_id = Identifier(required=True)
    username = String(required=True)
    updated_at = DateTime(required=True)
