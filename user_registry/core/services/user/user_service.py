from datetime import date

from loguru import logger

from user_registry.core.exceptions import (
    INVALID_DATE_FORMAT_MESSAGE,
    AlreadyExistsError,
    InvalidInputError,
    NotFoundError,
)
from user_registry.core.services.user.validator import UserValidator
from user_registry.entities.user import User, UserRepository


class UserService:
    """Registration, lookup, merge-update and removal of users.

    The database's unique index on email is authoritative; the lookups done
    here only let a duplicate fail early with a readable message.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        validator: UserValidator,
    ) -> None:
        self._user_repo = user_repository
        self._validator = validator

    @property
    def validator(self) -> UserValidator:
        return self._validator

    def create_user(self, user: User) -> User:
        """Admit a new user.

        The incoming id is ignored. Raises ``AlreadyExistsError`` when the
        email is taken and ``InvalidInputError`` when a field check fails;
        nothing is written in either case.
        """
        if self._user_repo.find_by_email(user.email) is not None:
            raise AlreadyExistsError()

        self._validator.validate(user)

        created = self._user_repo.save(user.model_copy(update={"id": None}))
        logger.info("Registered user {}", created.id)
        return created

    def get_user_by_id(self, user_id: int) -> User:
        user = self._user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id {user_id}")
        return user

    def list_users(self) -> list[User]:
        return self._user_repo.find_all()

    def delete_user(self, user_id: int) -> None:
        user = self.get_user_by_id(user_id)
        self._user_repo.delete(user)
        logger.info("Deleted user {}", user_id)

    def update_user(self, user: User, user_id: int) -> User:
        """Overwrite every non-id field of user ``user_id`` and revalidate.

        A missing id is reported as ``InvalidInputError`` rather than
        ``NotFoundError``, matching what clients of the PATCH endpoint see.
        """
        existing = self._user_repo.find_by_id(user_id)
        if existing is None:
            raise InvalidInputError(f"User not found with id: {user_id}")

        by_email = self._user_repo.find_by_email(user.email)
        if by_email is not None and by_email.id != existing.id:
            raise AlreadyExistsError()

        merged = existing.model_copy(
            update={
                "email": user.email,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "date_of_birth": user.date_of_birth,
                "address": user.address,
                "phone_number": user.phone_number,
            }
        )
        self._validator.validate(merged)

        updated = self._user_repo.save(merged)
        logger.info("Updated user {}", updated.id)
        return updated

    def get_users_in_date_range(
        self, start_date: date | None, end_date: date | None
    ) -> list[User]:
        """Users born between ``start_date`` and ``end_date`` inclusive.

        An inverted range is not rejected; it simply matches nobody.
        """
        if start_date is None or end_date is None:
            raise InvalidInputError(INVALID_DATE_FORMAT_MESSAGE)
        return self._user_repo.find_by_date_of_birth_between(start_date, end_date)
