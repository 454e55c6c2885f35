from src.core.logging import get_logger
from src.libs.gateways.exceptions import GatewayNotFoundError
from src.libs.gateways.interface import GatewayCatalog
from src.libs.gateways.schemas import GatewayMethod

logger = get_logger(__name__)


class InMemoryGatewayCatalog(GatewayCatalog):
    """
    Gateway catalog held in process memory.
    """

    def __init__(self, name: str, methods: list[GatewayMethod] | None = None) -> None:
        self.name = name
        self._methods: dict[str, GatewayMethod] = {}

        for method in methods or []:
            self.register(method)

    def register(self, method: GatewayMethod) -> None:
        """Register a gateway, replacing any previous one with the same code."""
        self._methods[method.code] = method
        logger.debug(f"src.libs.gateways.providers.memory:: registered {self.name} gateway {method.code}")

    def unregister(self, code: str) -> None:
        self._methods.pop(code, None)

    def get_all(self) -> list[GatewayMethod]:
        return sorted(self._methods.values(), key=lambda method: (method.priority, method.code))

    def get(self, code: str) -> GatewayMethod:
        if code not in self._methods:
            raise GatewayNotFoundError(detail=f"No {self.name} gateway registered with code {code}")
        return self._methods[code]
