"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


@storefront.value_object
class EmailAddress:
    """A structurally valid email address: one @, non-empty local and domain
    parts, a dotted domain, and no whitespace, consecutive dots or forbidden
    characters.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch in email for ch in " \t\n"):
            raise _invalid(email)

        if email.count("@") != 1:
            raise _invalid(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise _invalid(email)

        if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise _invalid(email)

        if "." not in domain_part or ".." in local_part or ".." in domain_part:
            raise _invalid(email)

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise _invalid(email)

        for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"):
            if forbidden in email:
                raise _invalid(email)


def normalize_email(value: str) -> str:
    """Validate an address and return it lower-cased for lookups."""
    address = (value or "").strip().lower()
    EmailAddress(address=address)
    return address
