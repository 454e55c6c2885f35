from datetime import UTC, datetime

from sqlmodel import TIMESTAMP, Field, SQLModel


class AuditableMixin(SQLModel):
    """
    Mixin recording who created and last modified a record, and when.

    Attributes:\n
        created_date (datetime): When the record was created.
        created_by (str | None): User name of the creator.
        modified_date (datetime | None): When the record was last modified.
        modified_by (str | None): User name of the last modifier.
    """

    created_date: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=TIMESTAMP(timezone=True),  # type: ignore[assignment]
    )
    created_by: str | None = Field(default=None, max_length=64)
    modified_date: datetime | None = Field(
        default=None,
        nullable=True,
        sa_type=TIMESTAMP(timezone=True),  # type: ignore[assignment]
    )
    modified_by: str | None = Field(default=None, max_length=64)

    def touch(self, modified_by: str | None = None) -> None:
        """Stamp the record as modified now."""
        self.modified_date = datetime.now(UTC)
        self.modified_by = modified_by
