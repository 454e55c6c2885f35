from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, col, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.database.transaction import in_transaction
from src.core.exceptions import errors
from src.core.logging import get_logger

ModelType = TypeVar("ModelType", bound=SQLModel)

logger = get_logger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing lookups and persistence for SQLModel models.\n

    Automatically detects if operations are running within a transaction context
    and adjusts commit behavior accordingly. SQLAlchemy failures surface as
    `DatabaseError`.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    def _database_error(self, action: str, error: SQLAlchemyError, **metadata: Any) -> errors.DatabaseError:
        logger.exception(
            f"{__name__}:: failed to {action} {self.model.__name__}: {error}",
            extra={"model": self.model.__name__, **metadata},
        )
        return errors.DatabaseError(
            detail=f"An error occurred while trying to {action} {self.model.__name__.lower()}.",
            metadata=metadata,
        )

    async def _save_changes(self, refresh_obj=None):
        """
        Save changes to the database, respecting transaction context.

        If running within a transaction, just flush changes.
        If not in a transaction, commit changes.

        Args:
            refresh_obj: Object to refresh after saving changes
        """
        if in_transaction():
            await self.session.flush()
        else:
            await self.session.commit()

        if refresh_obj is not None:
            await self.session.refresh(refresh_obj)

    async def find_one_by_and_none(self, **kwargs: Any) -> ModelType | None:
        """
        Find a single record by field values (use AND condition).

        Args:
            **kwargs: Field names and values to filter by

        Returns:
            The found record or None
        """
        query = select(self.model)
        for field, value in kwargs.items():
            if hasattr(self.model, field):
                query = query.where(col(getattr(self.model, field)) == value)

        try:
            result = await self.session.exec(query)
            return result.one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find", e, **kwargs) from e

    async def find_one_by(self, id: Any) -> ModelType | None:
        """
        Get a single record by ID.

        Args:
            id: The id of the record to retrieve

        Returns:
            ModelType | None: The found record or None
        """
        if not id:
            return None

        try:
            query = select(self.model).where(col(self.model.id) == id)  # type: ignore
            return (await self.session.exec(query)).one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find", e, id=id) from e

    async def find_many_by_ids(self, ids: Sequence[Any]) -> list[ModelType]:
        """
        Get every record whose id is in `ids`. Unknown ids are skipped.
        """
        if not ids:
            return []

        try:
            query = select(self.model).where(col(self.model.id).in_(list(ids)))  # type: ignore
            return list((await self.session.exec(query)).all())
        except SQLAlchemyError as e:
            raise self._database_error("find", e, ids=list(ids)) from e

    async def add(self, db_obj: ModelType) -> ModelType:
        """
        Persist an already built model instance.

        Args:
            db_obj: The instance to persist

        Returns:
            The persisted instance, refreshed from the database
        """
        try:
            self.session.add(db_obj)
            await self._save_changes(refresh_obj=db_obj)
            return db_obj
        except SQLAlchemyError as e:
            raise self._database_error("create", e) from e

