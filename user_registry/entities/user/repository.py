"""User repository for data access operations."""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from user_registry.core.exceptions import AlreadyExistsError, PersistenceError
from user_registry.entities.user.entity import User
from user_registry.entities.user.table import UserTable


class UserRepository:
    """Data-access layer for users.

    Writes are committed immediately so that the unique email constraint is
    checked by the database inside the call that caused it. Database errors
    from reads and writes alike surface as ``PersistenceError``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, user_id: int) -> User | None:
        with self._guard("find_by_id"):
            row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def find_by_email(self, email: str | None) -> User | None:
        if email is None:
            return None
        statement = select(UserTable).where(UserTable.email == email)
        with self._guard("find_by_email"):
            row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def find_all(self) -> list[User]:
        statement = select(UserTable).order_by(col(UserTable.id))
        with self._guard("find_all"):
            rows = self._session.exec(statement).all()
        return self._to_entities(rows)

    def find_by_date_of_birth_between(self, start: date, end: date) -> list[User]:
        """Return users born within ``[start, end]``, both ends inclusive."""
        statement = (
            select(UserTable)
            .where(col(UserTable.date_of_birth).between(start, end))
            .order_by(col(UserTable.id))
        )
        with self._guard("find_by_date_of_birth_between"):
            rows = self._session.exec(statement).all()
        return self._to_entities(rows)

    def save(self, user: User) -> User:
        """Insert the user when it has no id, otherwise update the row with that id."""
        data = user.model_dump(exclude={"id"})

        with self._guard("save"):
            row = self._session.get(UserTable, user.id) if user.id is not None else None
        if row is None:
            row = UserTable(id=user.id, **data)
            self._session.add(row)
        else:
            for field, value in data.items():
                setattr(row, field, value)

        self._commit("save")
        with self._guard("save"):
            self._session.refresh(row)
        logger.debug("Saved user row {}", row.id)
        return User.model_validate(row, from_attributes=True)

    def delete(self, user: User) -> None:
        with self._guard("delete"):
            row = self._session.get(UserTable, user.id)
        if row is None:
            return
        self._session.delete(row)
        self._commit("delete")
        logger.debug("Deleted user row {}", user.id)

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Database error during {}: {}", operation, e)
            raise PersistenceError.from_exception(e, operation=operation) from e

    def _commit(self, operation: str) -> None:
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            if "unique" in str(e.orig).lower():
                logger.warning("Unique constraint rejected {}: {}", operation, e.orig)
                raise AlreadyExistsError() from e
            raise PersistenceError.from_exception(e, operation=operation) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Database error during {}: {}", operation, e)
            raise PersistenceError.from_exception(e, operation=operation) from e

    @staticmethod
    def _to_entities(rows: Sequence[UserTable]) -> list[User]:
        return [User.model_validate(row, from_attributes=True) for row in rows]
