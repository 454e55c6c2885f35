from .openapi_security import OpenAPISecurityMiddleware  # noqa: F401
from .request_throttler import RequestThrottlerMiddleware  # noqa: F401
from .request_utils import RequestUtilsMiddleware  # noqa: F401
