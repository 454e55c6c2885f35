from unittest.mock import AsyncMock, MagicMock

import pytest
from src.core.exceptions import errors
from src.domain.enums import StorePermission
from src.domain.models import Store
from src.domain.schemas import PermissionGrant, PermissionScope
from src.domain.services import AuthorizationService, PermissionScopeService, StoreSelectedScope


class TestAuthorizationService:
    """Test cases for AuthorizationService"""

    def setup_method(self):
        self.security_service = MagicMock()
        self.security_service.user_has_any_permission = AsyncMock(return_value=True)
        self.security_service.get_user_permissions = AsyncMock(return_value=[])

        scope_service = PermissionScopeService()
        scope_service.register_scope(StoreSelectedScope())

        self.authorization_service = AuthorizationService(
            security_service=self.security_service,
            permission_scope_service=scope_service,
        )

    @pytest.mark.asyncio
    async def test_has_global_permission_checks_without_scopes(self):
        """Test global checks pass no scopes."""
        assert await self.authorization_service.has_global_permission("jane", StorePermission.CREATE)

        self.security_service.user_has_any_permission.assert_awaited_once_with("jane", None, StorePermission.CREATE)

    @pytest.mark.asyncio
    async def test_check_global_permission_denied(self):
        """Test a missing global permission raises."""
        self.security_service.user_has_any_permission.return_value = False

        with pytest.raises(errors.InsufficientPermissionError):
            await self.authorization_service.check_global_permission("jane", StorePermission.CREATE)

    @pytest.mark.asyncio
    async def test_check_permission_for_objects_uses_distinct_scopes(self):
        """Test the scopes of every object are checked once each."""
        stores = [Store(id="s1"), Store(id="s2"), Store(id="s1")]

        await self.authorization_service.check_permission_for_objects("jane", StorePermission.DELETE, stores)

        self.security_service.user_has_any_permission.assert_awaited_once_with(
            "jane", ["StoreSelectedScope:s1", "StoreSelectedScope:s2"], StorePermission.DELETE
        )

    @pytest.mark.asyncio
    async def test_check_permission_for_objects_denied(self):
        """Test a denied object check raises."""
        self.security_service.user_has_any_permission.return_value = False

        with pytest.raises(errors.InsufficientPermissionError):
            await self.authorization_service.check_permission_for_objects("jane", StorePermission.READ, [Store(id="s1")])

    @pytest.mark.asyncio
    async def test_get_selected_store_ids(self):
        """Test selected stores come from matching grants assigned as store scopes."""
        self.security_service.get_user_permissions.return_value = [
            PermissionGrant(
                id="store:read",
                assigned_scopes=[
                    PermissionScope(type="StoreSelectedScope", scope="s1"),
                    PermissionScope(type="OnlyOrderResponsibleScope", scope="x"),
                ],
            ),
            PermissionGrant(
                id="store:read:extended",
                assigned_scopes=[PermissionScope(type="StoreSelectedScope", scope="s2")],
            ),
            PermissionGrant(
                id="store:update",
                assigned_scopes=[PermissionScope(type="StoreSelectedScope", scope="s3")],
            ),
            PermissionGrant(
                id="store:read",
                assigned_scopes=[PermissionScope(type="StoreSelectedScope", scope="s1")],
            ),
        ]

        store_ids = await self.authorization_service.get_selected_store_ids("jane", StorePermission.READ)

        assert store_ids == ["s1", "s2"]
