from contextvars import ContextVar
from types import TracebackType

from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.logging import get_logger

logger = get_logger(__name__)

_transaction_depth: ContextVar[int] = ContextVar("transaction_depth", default=0)


def in_transaction() -> bool:
    """Whether the current task is running inside a `Transaction` block."""
    return _transaction_depth.get() > 0


class Transaction:
    """
    Async context manager owning the commit/rollback of a unit of work.

    Repositories only flush while a transaction is open, the outermost block
    commits on success and rolls back on error.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._token = None

    async def __aenter__(self) -> AsyncSession:
        self._token = _transaction_depth.set(_transaction_depth.get() + 1)
        return self.session

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        is_outermost = _transaction_depth.get() == 1
        _transaction_depth.reset(self._token)  # type: ignore[arg-type]

        if not is_outermost:
            return

        if exc_type is None:
            await self.session.commit()
        else:
            logger.warning(
                "Rolling back transaction",
                extra={"event_type": "transaction_rollback", "exception_type": exc_type.__name__},
            )
            await self.session.rollback()
