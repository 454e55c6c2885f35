import pytest
from src.libs.gateways import (
    GatewayCatalogFactory,
    GatewayMethod,
    GatewayNotFoundError,
    GatewayService,
    InMemoryGatewayCatalog,
    gateway_service,
)


class TestInMemoryGatewayCatalog:
    """Test cases for InMemoryGatewayCatalog"""

    def setup_method(self):
        self.catalog = InMemoryGatewayCatalog(
            name="payment",
            methods=[
                GatewayMethod(code="Stripe", priority=1),
                GatewayMethod(code="Adyen", priority=1),
                GatewayMethod(code="DefaultManualPaymentMethod", priority=0),
            ],
        )

    def test_get_all_is_ordered_by_priority_then_code(self):
        """Test gateways are listed by priority, then code."""
        assert [method.code for method in self.catalog.get_all()] == ["DefaultManualPaymentMethod", "Adyen", "Stripe"]

    def test_register_replaces_same_code(self):
        """Test registering an existing code replaces it."""
        self.catalog.register(GatewayMethod(code="Stripe", name="Stripe Checkout", priority=5))

        assert self.catalog.get("Stripe").name == "Stripe Checkout"
        assert len(self.catalog.get_all()) == 3

    def test_unregister(self):
        """Test unregistered gateways are no longer listed."""
        self.catalog.unregister("Stripe")
        self.catalog.unregister("Unknown")

        with pytest.raises(GatewayNotFoundError):
            self.catalog.get("Stripe")


class TestGatewayCatalogFactory:
    """Test cases for GatewayCatalogFactory"""

    def test_methods_from_codes(self):
        """Test bare codes become active, titled gateways in order."""
        methods = GatewayCatalogFactory.methods_from_codes(["FixedRate", "BuyOnlinePickupInStore"])

        assert [(method.code, method.name, method.priority, method.is_active) for method in methods] == [
            ("FixedRate", "Fixed Rate", 0, True),
            ("BuyOnlinePickupInStore", "Buy Online Pickup In Store", 1, True),
        ]

    def test_unsupported_catalog_type(self):
        """Test unknown catalog types are rejected."""
        with pytest.raises(ValueError):
            GatewayCatalogFactory.create_catalog("graphql", name="payment")

    def test_configured_gateway_service(self):
        """Test the shared gateway service exposes the configured defaults."""
        assert isinstance(gateway_service, GatewayService)
        assert [method.code for method in gateway_service.get_all_shipping_methods()] == ["FixedRate"]
        assert [method.code for method in gateway_service.get_all_payment_methods()] == ["DefaultManualPaymentMethod"]
        assert [method.code for method in gateway_service.get_all_tax_providers()] == ["FixedRate"]
