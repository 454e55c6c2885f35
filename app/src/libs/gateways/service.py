from src.libs.gateways.factory import GatewayCatalogFactory
from src.libs.gateways.interface import GatewayCatalog
from src.libs.gateways.schemas import GatewayMethod


class GatewayService:
    """
    Read access to the shipping methods, payment methods and tax providers a store can be wired to.
    """

    def __init__(
        self,
        shipping_catalog: GatewayCatalog,
        payment_catalog: GatewayCatalog,
        tax_catalog: GatewayCatalog,
    ) -> None:
        self.shipping_catalog = shipping_catalog
        self.payment_catalog = payment_catalog
        self.tax_catalog = tax_catalog

    def get_all_shipping_methods(self) -> list[GatewayMethod]:
        return self.shipping_catalog.get_all()

    def get_all_payment_methods(self) -> list[GatewayMethod]:
        return self.payment_catalog.get_all()

    def get_all_tax_providers(self) -> list[GatewayMethod]:
        return self.tax_catalog.get_all()


_catalogs = GatewayCatalogFactory.get_configured_catalogs()

gateway_service = GatewayService(
    shipping_catalog=_catalogs["shipping"],
    payment_catalog=_catalogs["payment"],
    tax_catalog=_catalogs["tax"],
)
