from typing import Any

import inflection
from src.core.config import settings
from src.libs.gateways.interface import GatewayCatalog
from src.libs.gateways.providers import InMemoryGatewayCatalog
from src.libs.gateways.schemas import GatewayMethod


class GatewayCatalogFactory:
    """
    Factory for creating gateway catalogs.
    """

    _providers: dict[str, type[GatewayCatalog]] = {
        "memory": InMemoryGatewayCatalog,
    }

    @classmethod
    def register_provider(cls, name: str, provider_class: type[GatewayCatalog]) -> None:
        cls._providers[name] = provider_class

    @classmethod
    def create_catalog(cls, provider_type: str, **config: Any) -> GatewayCatalog:
        """
        Create a catalog instance.

        Args:
            provider_type: Type of catalog to create
            **config: Catalog configuration

        Raises:
            ValueError: If the provider type is not supported
        """
        if provider_type not in cls._providers:
            raise ValueError(f"Unsupported gateway catalog type: {provider_type}")

        return cls._providers[provider_type](**config)  # type: ignore[call-arg]

    @staticmethod
    def methods_from_codes(codes: list[str]) -> list[GatewayMethod]:
        """Build active gateways from bare codes, keeping their order as priority."""
        return [
            GatewayMethod(code=code, name=inflection.titleize(code), priority=index, is_active=True)
            for index, code in enumerate(codes)
        ]

    @classmethod
    def get_configured_catalogs(cls) -> dict[str, GatewayCatalog]:
        """
        Build the shipping, payment and tax catalogs from settings.

        Returns:
            dict[str, GatewayCatalog]: Catalogs keyed by `shipping`, `payment` and `tax`
        """
        configured = {
            "shipping": settings.STORE_SHIPPING_METHODS,
            "payment": settings.STORE_PAYMENT_METHODS,
            "tax": settings.STORE_TAX_PROVIDERS,
        }

        return {
            name: cls.create_catalog("memory", name=name, methods=cls.methods_from_codes(list(codes)))
            for name, codes in configured.items()
        }
