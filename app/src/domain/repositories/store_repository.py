from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import array
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.domain.models import Store
from src.domain.repositories.base_repository import BaseRepository
from src.domain.schemas import StoreSearchCriteria

SORTABLE_FIELDS = {
    "id": Store.id,
    "name": Store.name,
    "url": Store.url,
    "catalog": Store.catalog,
    "storestate": Store.store_state,
    "createddate": Store.created_date,
    "modifieddate": Store.modified_date,
}


def parse_sort_expression(sort: str | None) -> list:
    """
    Translate a sort expression such as `name:desc;createdDate` into order by clauses.

    Unknown fields are ignored, the store name is used when nothing remains.
    """
    clauses = []

    for part in (sort or "").split(";"):
        field, _, direction = part.strip().partition(":")
        column = SORTABLE_FIELDS.get(field.strip().replace("_", "").lower())
        if column is None:
            continue
        clauses.append(col(column).desc() if direction.strip().lower() == "desc" else col(column).asc())

    return clauses or [col(Store.name).asc()]


class StoreRepository(BaseRepository[Store]):
    """
    Repository for managing stores in the system.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Store, session)

    async def search(self, criteria: StoreSearchCriteria) -> tuple[list[Store], int]:
        """
        Search stores matching `criteria`.

        Returns:
            tuple[list[Store], int]: The requested page and the total number of matches
        """
        conditions = []

        if criteria.keyword:
            pattern = f"%{criteria.keyword}%"
            conditions.append(
                or_(
                    col(Store.id).ilike(pattern),
                    col(Store.name).ilike(pattern),
                    col(Store.url).ilike(pattern),
                )
            )

        if criteria.store_ids:
            conditions.append(col(Store.id).in_(criteria.store_ids))

        count_query = select(func.count()).select_from(Store).where(*conditions)
        page_query = (
            select(Store)
            .where(*conditions)
            .order_by(*parse_sort_expression(criteria.sort))
            .offset(criteria.skip)
            .limit(criteria.take)
        )

        try:
            total_count = (await self.session.exec(count_query)).one()
            stores = list((await self.session.exec(page_query)).all()) if criteria.take > 0 else []
            return stores, total_count
        except SQLAlchemyError as e:
            raise self._database_error("search", e, keyword=criteria.keyword) from e

    async def find_ids_by_trusted_groups(self, groups: Sequence[str]) -> list[str]:
        """
        Get the ids of every store sharing at least one of `groups`.
        """
        if not groups:
            return []

        query = select(Store.id).where(col(Store.trusted_groups).has_any(array(list(groups))))

        try:
            return list((await self.session.exec(query)).all())
        except SQLAlchemyError as e:
            raise self._database_error("find", e, trusted_groups=list(groups)) from e

    async def delete_many(self, ids: Sequence[str]) -> int:
        """
        Delete every store whose id is in `ids`.

        Returns:
            int: The number of deleted stores
        """
        if not ids:
            return 0

        stores = await self.find_many_by_ids(ids)

        try:
            for store in stores:
                await self.session.delete(store)
            await self._save_changes()
            return len(stores)
        except SQLAlchemyError as e:
            raise self._database_error("delete", e, ids=list(ids)) from e
