"""User database table model."""

from datetime import date

from sqlmodel import Field

from user_registry.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    Email is unique at the store level; date of birth is indexed for range
    queries.
    """

    __tablename__ = "users"
    # Deleted ids are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    email: str = Field(unique=True, index=True)
    first_name: str
    last_name: str
    date_of_birth: date = Field(index=True)
    address: str | None = None
    phone_number: str | None = None
