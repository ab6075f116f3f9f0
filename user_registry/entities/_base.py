from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class with a server-assigned integer identifier.

    Attributes are snake_case in Python and camelCase on the wire; either
    spelling is accepted when parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int | None = PydanticField(
        default=None,
        description="Unique identifier assigned by the database",
    )


class EntityTable(SQLModel, table=False):
    """Base table class with an autoincrement primary key and audit timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier assigned by the database",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
