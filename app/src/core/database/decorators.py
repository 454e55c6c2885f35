import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.database.transaction import Transaction, in_transaction

T = TypeVar("T")


def transactional(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Run a service coroutine inside a `Transaction`.

    The decorated callable must be a method of an object exposing `self.session`
    or receive a `session` keyword argument. Nested calls join the outer
    transaction.

    Usage:
        class StoreService:
            def __init__(self, session: AsyncSession):
                self.session = session

            @transactional
            async def update(self, stores): ...
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        session = kwargs.get("session")
        if session is None and args:
            session = getattr(args[0], "session", None)

        if not isinstance(session, AsyncSession):
            raise TypeError(f"{func.__qualname__} must run with an AsyncSession bound as `session`")

        if in_transaction():
            return await func(*args, **kwargs)

        async with Transaction(session):
            return await func(*args, **kwargs)

    return wrapper
