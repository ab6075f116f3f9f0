"""Field validation for users admitted to the registry."""

import re
from datetime import date

from user_registry.core.exceptions import InvalidInputError
from user_registry.entities.user.entity import User

EMAIL_PATTERN = r"[\w.-]+@([\w-]+\.)+[\w-]{2,}"
PHONE_PATTERN = r"(\+380|0)[0-9]{9}"


def age_in_years(date_of_birth: date, today: date) -> int:
    """Whole calendar years elapsed between ``date_of_birth`` and ``today``."""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


class UserValidator:
    """Ordered, side-effect free checks applied to a candidate user.

    Checks run in a fixed order and the first failing one raises
    ``InvalidInputError``; failures are never accumulated.

    Args:
        min_age_for_registration: Minimum age in whole years on the day of
            admission.
    """

    def __init__(self, min_age_for_registration: int) -> None:
        self._min_age = min_age_for_registration
        self._email_re = re.compile(EMAIL_PATTERN, re.ASCII)
        self._phone_re = re.compile(PHONE_PATTERN)

    @property
    def min_age_for_registration(self) -> int:
        return self._min_age

    def validate(self, user: User) -> None:
        """Raise ``InvalidInputError`` for the first check ``user`` fails."""
        if not user.first_name:
            raise InvalidInputError("First name cannot be empty.")
        if not user.last_name:
            raise InvalidInputError("Last name cannot be empty.")
        if not user.email:
            raise InvalidInputError("Email cannot be empty.")
        if not self.is_valid_email(user.email):
            raise InvalidInputError("Invalid email format.")
        if not self.is_valid_phone_number(user.phone_number):
            raise InvalidInputError("Invalid phone number format.")
        self.validate_date_of_birth(user.date_of_birth)

    def validate_date_of_birth(self, date_of_birth: date | None) -> None:
        if date_of_birth is None:
            raise InvalidInputError("Date of birth cannot be empty.")

        today = date.today()
        if date_of_birth > today:
            raise InvalidInputError("The date of birth cannot be in the future.")

        if age_in_years(date_of_birth, today) < self._min_age:
            raise InvalidInputError(
                f"To register, the user must be over {self._min_age} years old."
            )

    def is_valid_email(self, email: str) -> bool:
        return self._email_re.fullmatch(email) is not None

    def is_valid_phone_number(self, phone_number: str | None) -> bool:
        # A missing phone number counts as empty
        if not phone_number:
            return True
        return self._phone_re.fullmatch(phone_number) is not None
