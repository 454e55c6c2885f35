from enum import Enum
from typing import Any

from src.domain.enums import StoreMethodKind, StoreState
from src.domain.models import Store, StoreMethod
from src.domain.schemas import FulfillmentCenterSchema, StoreSchema, StoreSettingSchema
from src.libs.gateways import GatewayMethod


def _currency_code(currency: Any) -> str:
    return str(currency.value) if isinstance(currency, Enum) else str(currency)


def _to_store_method(store_id: str, kind: StoreMethodKind, method: GatewayMethod, is_active: bool) -> StoreMethod:
    return StoreMethod(
        store_id=store_id,
        kind=kind,
        code=method.code,
        name=method.name,
        description=method.description,
        logo_url=method.logo_url,
        priority=method.priority,
        is_active=is_active,
    )


def to_web_model(store: Store) -> StoreSchema:
    """
    Convert a persisted store into its wire representation.

    Only active payment and shipping methods are listed, by code.
    """
    fulfillment_center = store.fulfillment_center
    returns_fulfillment_center = store.returns_fulfillment_center

    return StoreSchema(
        id=store.id,
        name=store.name,
        description=store.description,
        url=store.url,
        store_state=StoreState(store.store_state),
        time_zone=store.time_zone,
        country=store.country,
        region=store.region,
        default_language=store.default_language,
        default_currency=store.default_currency,
        catalog=store.catalog,
        credit_card_save_policy=store.credit_card_save_policy,
        secure_url=store.secure_url,
        email=store.email,
        admin_email=store.admin_email,
        display_out_of_stock=store.display_out_of_stock,
        fulfillment_center=(
            FulfillmentCenterSchema.model_validate(fulfillment_center) if fulfillment_center else None
        ),
        returns_fulfillment_center=(
            FulfillmentCenterSchema.model_validate(returns_fulfillment_center) if returns_fulfillment_center else None
        ),
        languages=list(store.languages or []),
        currencies=list(store.currencies or []),
        settings=[StoreSettingSchema.model_validate(setting) for setting in store.settings or []],
        payment_gateways=[method.code for method in store.payment_methods if method.is_active],
        shipment_gateways=[method.code for method in store.shipping_methods if method.is_active],
        created_date=store.created_date,
        created_by=store.created_by,
        modified_date=store.modified_date,
        modified_by=store.modified_by,
    )


def to_core_model(
    store: StoreSchema,
    shipping_methods: list[GatewayMethod],
    payment_methods: list[GatewayMethod],
    tax_providers: list[GatewayMethod],
) -> Store:
    """
    Convert a wire store into a store ready to be persisted.

    Every known shipping and payment method is attached, active only when its
    code is listed in the matching gateway list. Tax providers are attached as
    the tax catalog describes them.

    Args:
        store (StoreSchema): The incoming store
        shipping_methods (list[GatewayMethod]): Every known shipping method
        payment_methods (list[GatewayMethod]): Every known payment method
        tax_providers (list[GatewayMethod]): Every known tax provider

    Returns:
        Store: A transient store, with a generated id when none was given
    """
    values: dict[str, Any] = {
        "name": store.name,
        "description": store.description,
        "url": store.url,
        "store_state": store.store_state,
        "time_zone": store.time_zone,
        "country": store.country,
        "region": store.region,
        "default_language": store.default_language,
        "default_currency": _currency_code(store.default_currency) if store.default_currency else None,
        "catalog": store.catalog,
        "credit_card_save_policy": store.credit_card_save_policy,
        "secure_url": store.secure_url,
        "email": store.email,
        "admin_email": store.admin_email,
        "display_out_of_stock": store.display_out_of_stock,
        "fulfillment_center_id": store.fulfillment_center.id if store.fulfillment_center else None,
        "returns_fulfillment_center_id": (
            store.returns_fulfillment_center.id if store.returns_fulfillment_center else None
        ),
        "languages": list(store.languages),
        "currencies": [_currency_code(currency) for currency in store.currencies],
        "settings": [setting.model_dump(mode="json") for setting in store.settings],
    }
    if store.id:
        values["id"] = store.id

    core_store = Store(**values)

    shipping = [
        _to_store_method(core_store.id, StoreMethodKind.SHIPPING, method, method.code in store.shipment_gateways)
        for method in shipping_methods
    ]
    payment = [
        _to_store_method(core_store.id, StoreMethodKind.PAYMENT, method, method.code in store.payment_gateways)
        for method in payment_methods
    ]
    tax = [_to_store_method(core_store.id, StoreMethodKind.TAX, method, method.is_active) for method in tax_providers]

    core_store.methods = shipping + payment + tax

    return core_store
