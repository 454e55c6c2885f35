from src.domain.converters import to_core_model, to_web_model
from src.domain.enums import StoreMethodKind, StoreState
from src.domain.models import FulfillmentCenter, Store, StoreMethod
from src.domain.schemas import StoreSchema
from src.libs.gateways import GatewayMethod

SHIPPING_METHODS = [GatewayMethod(code="FixedRate"), GatewayMethod(code="BuyOnlinePickupInStore", priority=1)]
PAYMENT_METHODS = [GatewayMethod(code="DefaultManualPaymentMethod"), GatewayMethod(code="Stripe", priority=1)]
TAX_PROVIDERS = [GatewayMethod(code="FixedRate", is_active=True), GatewayMethod(code="Avalara", is_active=False)]


class TestStoreConverter:
    """Test cases for the store converter"""

    def test_to_web_model_lists_active_gateways(self):
        """Test only active payment and shipping methods are listed, by code."""
        store = Store(
            id="s1",
            name="Electronics",
            store_state=StoreState.RESTRICTED_ACCESS,
            default_currency="USD",
            currencies=["USD", "EUR"],
            languages=["en-US", "de-DE"],
            settings=[{"name": "Stores.SeoLinksType", "value": "Collapsed"}],
        )
        store.methods = [
            StoreMethod(store_id="s1", kind=StoreMethodKind.PAYMENT, code="Stripe", is_active=True),
            StoreMethod(store_id="s1", kind=StoreMethodKind.PAYMENT, code="Manual", is_active=False),
            StoreMethod(store_id="s1", kind=StoreMethodKind.SHIPPING, code="FixedRate", is_active=True),
            StoreMethod(store_id="s1", kind=StoreMethodKind.TAX, code="Avalara", is_active=True),
        ]

        result = to_web_model(store)

        assert result.payment_gateways == ["Stripe"]
        assert result.shipment_gateways == ["FixedRate"]
        assert result.store_state == StoreState.RESTRICTED_ACCESS
        assert result.languages == ["en-US", "de-DE"]
        assert result.settings[0].name == "Stores.SeoLinksType"
        assert result.security_scopes is None

        dumped = result.model_dump(mode="json", by_alias=True)
        assert dumped["defaultCurrency"] == "USD"
        assert dumped["currencies"] == ["USD", "EUR"]

    def test_to_web_model_with_fulfillment_centers(self):
        """Test fulfillment centers are converted when loaded."""
        store = Store(id="s1")
        store.fulfillment_center = FulfillmentCenter(id="fc-1", name="Main warehouse")

        result = to_web_model(store)

        assert result.fulfillment_center.id == "fc-1"
        assert result.returns_fulfillment_center is None

    def test_to_core_model_activates_selected_gateways(self):
        """Test every known method is attached, active only when selected."""
        dto = StoreSchema(
            id="s1",
            name="Electronics",
            payment_gateways=["Stripe"],
            shipment_gateways=["FixedRate", "Unknown"],
            default_currency="EUR",
            currencies=["EUR"],
        )

        store = to_core_model(dto, SHIPPING_METHODS, PAYMENT_METHODS, TAX_PROVIDERS)

        assert store.id == "s1"
        assert store.default_currency == "EUR"
        assert store.currencies == ["EUR"]
        assert [(method.kind, method.code, method.is_active) for method in store.methods] == [
            (StoreMethodKind.SHIPPING, "FixedRate", True),
            (StoreMethodKind.SHIPPING, "BuyOnlinePickupInStore", False),
            (StoreMethodKind.PAYMENT, "DefaultManualPaymentMethod", False),
            (StoreMethodKind.PAYMENT, "Stripe", True),
            (StoreMethodKind.TAX, "FixedRate", True),
            (StoreMethodKind.TAX, "Avalara", False),
        ]
        assert {method.store_id for method in store.methods} == {"s1"}

    def test_to_core_model_generates_id(self):
        """Test a store without id gets one."""
        store = to_core_model(StoreSchema(name="New"), [], [], [])

        assert store.id
        assert store.methods == []

    def test_to_core_model_references_fulfillment_centers(self):
        """Test fulfillment centers are referenced by id."""
        dto = StoreSchema.model_validate(
            {"id": "s1", "fulfillmentCenter": {"id": "fc-1"}, "returnsFulfillmentCenter": {"id": "fc-2"}}
        )

        store = to_core_model(dto, [], [], [])

        assert store.fulfillment_center_id == "fc-1"
        assert store.returns_fulfillment_center_id == "fc-2"

    def test_round_trip_keeps_gateway_selection(self):
        """Test converting back and forth keeps the selected gateways."""
        dto = StoreSchema(id="s1", payment_gateways=["DefaultManualPaymentMethod"], shipment_gateways=[])

        result = to_web_model(to_core_model(dto, SHIPPING_METHODS, PAYMENT_METHODS, TAX_PROVIDERS))

        assert result.payment_gateways == ["DefaultManualPaymentMethod"]
        assert result.shipment_gateways == []
