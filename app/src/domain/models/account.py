from typing import TYPE_CHECKING, ClassVar

from sqlalchemy import TEXT, Boolean, Column
from sqlmodel import Field, Relationship
from src.core.database.mixins import AuditableMixin, StringIDMixin
from src.domain.enums import AccountState

if TYPE_CHECKING:
    from src.domain.models import AccountPermission


class Account(StringIDMixin, AuditableMixin, table=True):
    """
    Represents a platform account as seen by the store module.

    Attributes:\n
        id (str): The unique identifier for the account.
        user_name (str): The unique login name of the account.
        email (str | None): The email address of the account.
        store_id (str | None): The store the account was registered in.
        is_administrator (bool): Administrators pass every permission check.
        user_state (AccountState): The approval state of the account.
        permissions (list[AccountPermission]): The permissions granted to the account.
    """

    SELECTABLE_FIELDS: ClassVar[list[str]] = [
        "id",
        "user_name",
        "email",
        "store_id",
        "user_state",
    ]

    user_name: str = Field(max_length=256, nullable=False, unique=True, index=True)
    email: str | None = Field(default=None, max_length=256)
    store_id: str | None = Field(default=None, max_length=128, index=True)
    is_administrator: bool = Field(default=False, sa_column=Column(Boolean(), nullable=False, default=False))
    user_state: AccountState = Field(
        default=AccountState.PENDING_APPROVAL,
        sa_column=Column(TEXT(), nullable=False, default=AccountState.PENDING_APPROVAL),
    )

    # Relationships
    permissions: list["AccountPermission"] = Relationship(
        back_populates="account",
        sa_relationship_kwargs={"lazy": "selectin", "cascade": "all, delete-orphan"},
    )

    def is_approved(self) -> bool:
        return AccountState(self.user_state).is_approved()

    def __repr__(self):
        return f"<Account(user_name={self.user_name}, state={self.user_state})>"
