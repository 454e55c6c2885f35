from typing import TYPE_CHECKING, Any

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Relationship
from src.core.database.mixins import IntegerIDMixin

if TYPE_CHECKING:
    from src.domain.models import Account


class AccountPermission(IntegerIDMixin, table=True):
    """
    A permission granted to an account, optionally bound to scopes.

    Attributes:\n
        id (int): Unique identifier for the grant.
        account_id (str): The account the permission is granted to.
        permission_id (str): The permission id (e.g store:read).
        scopes (list[dict[str, str]]): Assigned scopes as `{"type": ..., "scope": ...}`
            objects. An empty list grants the permission globally.
    """

    __table_args__ = (UniqueConstraint("account_id", "permission_id", name="uq_account_permission"),)

    account_id: str = Field(
        sa_column=Column(String(128), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    permission_id: str = Field(max_length=128, nullable=False, index=True)
    scopes: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSONB, nullable=False, default=list))

    # Relationships
    account: "Account" = Relationship(back_populates="permissions")

    def __str__(self):
        return self.permission_id
