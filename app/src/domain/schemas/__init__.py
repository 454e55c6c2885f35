from .auth import AuthSessionState  # noqa: F401
from .security import PermissionGrant, PermissionScope  # noqa: F401
from .store import (  # noqa: F401
    FulfillmentCenterSchema,
    LoginOnBehalfInfo,
    SendDynamicNotificationRequest,
    StoreMethodSchema,
    StoreSchema,
    StoreSearchCriteria,
    StoreSearchResult,
    StoreSettingSchema,
)
