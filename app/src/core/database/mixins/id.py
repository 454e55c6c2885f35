from uuid import uuid4

import inflection
from sqlalchemy.orm import declared_attr
from sqlmodel import Field, SQLModel


class BaseIDMixin(SQLModel):
    """
    Base mixin for models with a primary key.\n

    Derives the table name from the class name (`Store` -> `stores`).
    """

    @declared_attr  # type: ignore
    def __tablename__(cls) -> str:  # type: ignore
        return inflection.pluralize(inflection.underscore(cls.__name__))


class IntegerIDMixin(BaseIDMixin):
    """
    Mixin for models with an auto-incremented integer primary key.

    Attributes:\n
        id (int | None): The primary key, assigned by the database.
    """

    id: int | None = Field(default=None, index=True, primary_key=True)


class StringIDMixin(BaseIDMixin):
    """
    Mixin for models keyed by a caller-chosen string id.

    A random hex id is generated when none is supplied.

    Attributes:\n
        id (str): The primary key field.
    """

    id: str = Field(
        default_factory=lambda: uuid4().hex,
        primary_key=True,
        index=True,
        max_length=128,
    )
