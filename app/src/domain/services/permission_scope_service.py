from typing import Any, Protocol

from src.core.logging import get_logger
from src.domain.models import Store
from src.domain.schemas import PermissionScope

logger = get_logger(__name__)


class ScopeType(Protocol):
    """A kind of permission scope, able to derive its scopes from a domain object."""

    type: str

    def is_scope_available_for_permission(self, permission_id: str) -> bool: ...

    def get_object_scopes(self, obj: Any) -> list[PermissionScope]: ...


class StoreSelectedScope:
    """
    Restricts a store permission to selected stores.

    A store yields the scope `StoreSelectedScope:<store id>`.
    """

    type = "StoreSelectedScope"

    def is_scope_available_for_permission(self, permission_id: str) -> bool:
        return permission_id.startswith("store:")

    def get_object_scopes(self, obj: Any) -> list[PermissionScope]:
        if isinstance(obj, Store) and obj.id:
            return [PermissionScope(type=self.type, scope=obj.id)]
        return []


class PermissionScopeService:
    """
    Registry of scope types, resolving the permission scopes of domain objects.
    """

    def __init__(self) -> None:
        self._scope_types: dict[str, ScopeType] = {}

    def register_scope(self, scope_type: ScopeType) -> None:
        """Register a scope type, replacing any previous one with the same name."""
        self._scope_types[scope_type.type] = scope_type
        logger.debug(f"{__name__}.register_scope:: registered permission scope type {scope_type.type}")

    def get_scope_types(self, permission_id: str | None = None) -> list[str]:
        """Names of the registered scope types, optionally only those usable with `permission_id`."""
        return [
            name
            for name, scope_type in self._scope_types.items()
            if permission_id is None or scope_type.is_scope_available_for_permission(permission_id)
        ]

    def get_object_permission_scopes(self, obj: Any) -> list[PermissionScope]:
        """Every scope any registered scope type derives from `obj`."""
        return [scope for scope_type in self._scope_types.values() for scope in scope_type.get_object_scopes(obj)]

    def get_object_permission_scope_strings(self, obj: Any) -> list[str]:
        """
        Scope strings (`<ScopeType>:<scope>`) of `obj`.

        Args:
            obj (Any): The domain object being accessed

        Returns:
            list[str]: Distinct scope strings in registration order
        """
        return list(dict.fromkeys(str(scope) for scope in self.get_object_permission_scopes(obj)))


permission_scope_service = PermissionScopeService()
permission_scope_service.register_scope(StoreSelectedScope())
