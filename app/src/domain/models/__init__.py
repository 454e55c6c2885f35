from .account import Account  # noqa: F401
from .account_permission import AccountPermission  # noqa: F401
from .fulfillment_center import FulfillmentCenter  # noqa: F401
from .store import Store  # noqa: F401
from .store_method import StoreMethod  # noqa: F401
