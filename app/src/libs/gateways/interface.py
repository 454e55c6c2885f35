from abc import ABC, abstractmethod

from src.libs.gateways.schemas import GatewayMethod


class GatewayCatalog(ABC):
    """
    Base abstract class for catalogs of store gateways.
    """

    @abstractmethod
    def get_all(self) -> list[GatewayMethod]:
        """
        Get every gateway known to the catalog.

        Returns:
            list[GatewayMethod]: The gateways ordered by priority
        """
        pass

    @abstractmethod
    def get(self, code: str) -> GatewayMethod:
        """
        Get a gateway by code.

        Raises:
            GatewayNotFoundError: If no gateway is registered under `code`
        """
        pass
