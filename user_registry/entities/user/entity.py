"""User domain entity."""

from datetime import date

from pydantic import Field

from user_registry.entities._base import Entity


class User(Entity):
    """User entity representing a registered person.

    Every field is optional at this level so that incomplete payloads reach
    the validator, which reports the first missing field with its own
    message.
    """

    email: str | None = Field(default=None, description="User's email address")
    first_name: str | None = Field(default=None, description="User's first name")
    last_name: str | None = Field(default=None, description="User's last name")
    date_of_birth: date | None = Field(
        default=None, description="User's date of birth (YYYY-MM-DD)"
    )
    address: str | None = Field(default=None, description="User's address")
    phone_number: str | None = Field(
        default=None, description="User's phone number"
    )
