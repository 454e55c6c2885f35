from unittest.mock import MagicMock

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.database.transaction import Transaction
from src.domain.models import Store
from src.domain.repositories.base_repository import BaseRepository


class TestBaseRepository:
    """Test cases for BaseRepository"""

    def setup_method(self):
        self.session = MagicMock(spec=AsyncSession)
        self.repository = BaseRepository(Store, self.session)

    def test_exposes_only_lookups_and_add(self):
        """Test the repository surface is limited to what the stores and accounts use."""
        for name in ("find_one_by_and_none", "find_one_by", "find_many_by_ids", "add"):
            assert hasattr(self.repository, name)
        for name in ("find_one_by_or_none", "create", "update", "delete", "exists"):
            assert not hasattr(self.repository, name)

    @pytest.mark.asyncio
    async def test_add_commits_outside_transaction(self):
        """Test adding outside a transaction commits and refreshes the record."""
        store = Store(id="s1")

        assert await self.repository.add(store) is store

        self.session.add.assert_called_once_with(store)
        self.session.commit.assert_awaited_once()
        self.session.refresh.assert_awaited_once_with(store)

    @pytest.mark.asyncio
    async def test_add_flushes_inside_transaction(self):
        """Test adding inside a transaction only flushes."""
        store = Store(id="s1")

        async with Transaction(self.session):
            await self.repository.add(store)
            self.session.commit.assert_not_awaited()

        self.session.flush.assert_awaited_once()
        self.session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lookups_without_ids(self):
        """Test empty ids never reach the database."""
        assert await self.repository.find_one_by(None) is None
        assert await self.repository.find_many_by_ids([]) == []
        self.session.exec.assert_not_called()
