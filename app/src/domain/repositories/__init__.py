from .account_repository import AccountRepository  # noqa: F401
from .base_repository import BaseRepository  # noqa: F401
from .store_repository import StoreRepository  # noqa: F401
