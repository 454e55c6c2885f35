from .account import AccountState  # noqa: F401
from .permission import StorePermission  # noqa: F401
from .store import SettingValueType, StoreMethodKind, StoreState  # noqa: F401
