from .exceptions import GatewayError, GatewayNotFoundError  # noqa: F401
from .factory import GatewayCatalogFactory  # noqa: F401
from .interface import GatewayCatalog  # noqa: F401
from .providers import InMemoryGatewayCatalog  # noqa: F401
from .schemas import GatewayMethod  # noqa: F401
from .service import GatewayService, gateway_service  # noqa: F401
