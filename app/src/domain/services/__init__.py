from .authorization_service import AuthorizationService  # noqa: F401
from .permission_scope_service import (  # noqa: F401
    PermissionScopeService,
    StoreSelectedScope,
    permission_scope_service,
)
from .security_service import SecurityService  # noqa: F401
from .store_service import StoreService  # noqa: F401
