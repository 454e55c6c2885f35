from enum import StrEnum


class AccountState(StrEnum):
    """
    Enumeration representing the approval state of an account.

    Attributes:\n
        PENDING_APPROVAL: The account is waiting for an administrator.
        APPROVED: The account can be used.
        REJECTED: The account was rejected and cannot be used.
    """

    PENDING_APPROVAL = "PendingApproval"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    def is_approved(self) -> bool:
        """Check if the account state is APPROVED."""
        return self == AccountState.APPROVED
