from collections.abc import Iterable
from typing import Any

from src.core.exceptions import errors
from src.core.logging import get_logger
from src.domain.services.permission_scope_service import PermissionScopeService, StoreSelectedScope
from src.domain.services.security_service import SecurityService

logger = get_logger(__name__)


class AuthorizationService:
    """
    Answers permission questions about the current caller and the objects they touch.
    """

    def __init__(self, security_service: SecurityService, permission_scope_service: PermissionScopeService):
        self.security_service = security_service
        self.permission_scope_service = permission_scope_service

    async def has_global_permission(self, user_name: str, *permission_ids: str) -> bool:
        return await self.security_service.user_has_any_permission(user_name, None, *permission_ids)

    async def check_global_permission(self, user_name: str, permission_id: str) -> None:
        """
        Raises:
            InsufficientPermissionError: If the caller lacks `permission_id` unscoped
        """
        if not await self.has_global_permission(user_name, permission_id):
            logger.info(
                f"{__name__}.check_global_permission:: {user_name} lacks {permission_id}",
                extra={"user_name": user_name, "permission_id": permission_id},
            )
            raise errors.InsufficientPermissionError(metadata={"permission": permission_id})

    async def check_permission_for_objects(self, user_name: str, permission_id: str, objects: Iterable[Any]) -> None:
        """
        Check the caller holds `permission_id` globally or for a scope of one of `objects`.

        Raises:
            InsufficientPermissionError: If the permission is not granted
        """
        scopes = list(
            dict.fromkeys(
                scope
                for obj in objects
                for scope in self.permission_scope_service.get_object_permission_scope_strings(obj)
            )
        )

        if not await self.security_service.user_has_any_permission(user_name, scopes, permission_id):
            logger.info(
                f"{__name__}.check_permission_for_objects:: {user_name} lacks {permission_id}",
                extra={"user_name": user_name, "permission_id": permission_id, "scopes": scopes},
            )
            raise errors.InsufficientPermissionError(metadata={"permission": permission_id})

    async def get_selected_store_ids(self, user_name: str, permission_id: str) -> list[str]:
        """
        Store ids the caller was granted `permission_id` (or one of its variants) for.

        Args:
            user_name (str): The caller
            permission_id (str): Permission id prefix, e.g `store:read`

        Returns:
            list[str]: Distinct ids of the `StoreSelectedScope` scopes of the matching grants
        """
        grants = await self.security_service.get_user_permissions(user_name)

        return list(
            dict.fromkeys(
                scope.scope
                for grant in grants
                if grant.id.startswith(permission_id)
                for scope in grant.assigned_scopes
                if scope.type == StoreSelectedScope.type
            )
        )
