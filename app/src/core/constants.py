from contextvars import ContextVar

REQUEST_ID_CTX = ContextVar("request_id", default="")

DEFAULT_PAGE_SIZE = 20

# Stands in for "all rows" when listing every store
MAX_PAGE_SIZE = 2**31 - 1

# Proxy headers for client IP detection
DEFAULT_PROXY_HEADERS = [
    "X-Forwarded-For",
    "X-Real-IP",
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Client-IP",
]

DEFAULT_PROXY_COUNT = 1

STORE_OBJECT_TYPE = "Store"
