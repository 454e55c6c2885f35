from collections.abc import Sequence

from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.database.decorators import transactional
from src.core.exceptions import errors
from src.core.logging import get_logger
from src.domain.models import Account, Store, StoreMethod
from src.domain.repositories import StoreRepository
from src.domain.schemas import StoreSearchCriteria

logger = get_logger(__name__)

# Columns an update copies from the incoming store onto the persisted one
UPDATABLE_FIELDS = (
    "name",
    "description",
    "url",
    "store_state",
    "time_zone",
    "country",
    "region",
    "default_language",
    "default_currency",
    "catalog",
    "credit_card_save_policy",
    "secure_url",
    "email",
    "admin_email",
    "display_out_of_stock",
    "fulfillment_center_id",
    "returns_fulfillment_center_id",
    "languages",
    "currencies",
    "settings",
)


class StoreService:
    """
    Service for reading, searching and maintaining stores.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.store_repository = StoreRepository(session=session)

    async def get_by_id(self, id: str) -> Store | None:
        return await self.store_repository.find_one_by(id)

    async def get_by_ids(self, ids: Sequence[str]) -> list[Store]:
        return await self.store_repository.find_many_by_ids(ids)

    async def search_stores(self, criteria: StoreSearchCriteria) -> tuple[list[Store], int]:
        """
        Search stores.

        Args:
            criteria (StoreSearchCriteria): Keyword, store ids, paging and sorting

        Returns:
            tuple[list[Store], int]: The requested page and the total number of matches
        """
        return await self.store_repository.search(criteria)

    async def create(self, store: Store, created_by: str | None = None) -> Store:
        """
        Persist a new store along with its payment, shipping and tax methods.
        """
        store.created_by = created_by
        created = await self.store_repository.add(store)

        logger.info(
            f"{__name__}.create:: store {created.id} created",
            extra={"store_id": created.id, "created_by": created_by},
        )

        return created

    def _merge_methods(self, existing: Store, incoming: Store) -> list[StoreMethod]:
        """
        Reconcile the methods of a persisted store with incoming ones, keyed by kind and code.

        Matching rows are updated in place so the (store, kind, code) constraint holds.
        """
        current_methods = {(method.kind, method.code): method for method in existing.methods}
        merged: list[StoreMethod] = []

        for method in incoming.methods:
            current = current_methods.get((method.kind, method.code))
            if current is None:
                merged.append(method)
                continue

            for field in ("name", "description", "logo_url", "priority", "is_active"):
                setattr(current, field, getattr(method, field))
            merged.append(current)

        return merged

    @transactional
    async def update(self, stores: Sequence[Store], modified_by: str | None = None) -> None:
        """
        Overwrite persisted stores with the given ones, all or nothing.

        Raises:
            StoreNotFoundError: If one of the stores does not exist
        """
        for store in stores:
            existing = await self.store_repository.find_one_by(store.id)

            if existing is None:
                raise errors.StoreNotFoundError(detail=f"Store not found. StoreId: {store.id}")

            for field in UPDATABLE_FIELDS:
                setattr(existing, field, getattr(store, field))

            existing.methods = self._merge_methods(existing, store)
            existing.touch(modified_by)
            self.session.add(existing)

        await self.session.flush()

        logger.info(
            f"{__name__}.update:: {len(stores)} store(s) updated",
            extra={"store_ids": [store.id for store in stores], "modified_by": modified_by},
        )

    async def delete(self, ids: Sequence[str]) -> None:
        """Delete stores by id, unknown ids are ignored."""
        deleted = await self.store_repository.delete_many(ids)

        logger.info(f"{__name__}.delete:: {deleted} store(s) deleted", extra={"store_ids": list(ids)})

    async def get_user_allowed_store_ids(self, account: Account) -> list[str]:
        """
        Get the ids of the stores an account may sign in to.

        These are the account's own store and every store sharing one of its
        trusted groups.

        Args:
            account (Account): The account to resolve stores for

        Returns:
            list[str]: Distinct store ids, the account's own store first
        """
        if not account.store_id:
            return []

        allowed_ids = [account.store_id]
        store = await self.get_by_id(account.store_id)

        if store is not None and store.trusted_groups:
            allowed_ids.extend(await self.store_repository.find_ids_by_trusted_groups(store.trusted_groups))

        return list(dict.fromkeys(allowed_ids))
