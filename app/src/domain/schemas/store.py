from datetime import datetime
from typing import Any

from pycountries import Currency as CurrencyCode
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from src.core.constants import DEFAULT_PAGE_SIZE
from src.domain.enums import SettingValueType, StoreState


class StoreWireModel(BaseModel):
    """
    Base for every store payload: camelCase on the wire, snake_case accepted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FulfillmentCenterSchema(StoreWireModel):
    """
    Represents a fulfillment center referenced by a store.
    """

    id: str
    name: str | None = None
    description: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state_province: str | None = None
    country_code: str | None = None
    country_name: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    email: str | None = None


class StoreSettingSchema(StoreWireModel):
    """
    Represents a single store setting.

    Attributes:
        name (str): The setting name.
        value (Any): The setting value when `is_array` is false.
        value_type (SettingValueType): How the value should be interpreted.
        is_array (bool): Whether `array_values` holds the value.
        array_values (list[Any] | None): The values of an array setting.
    """

    name: str
    value: Any = None
    value_type: SettingValueType = SettingValueType.SHORT_TEXT
    is_array: bool = False
    array_values: list[Any] | None = None


class StoreMethodSchema(StoreWireModel):
    """
    Represents a payment method, shipping method or tax provider offered by a gateway catalog.
    """

    code: str
    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    priority: int = 0
    is_active: bool = False


class StoreSchema(StoreWireModel):
    """
    Wire representation of a store, used for both requests and responses.

    Attributes:
        payment_gateways (list[str]): Codes of the active payment methods.
        shipment_gateways (list[str]): Codes of the active shipping methods.
        security_scopes (list[str] | None): Permission scopes of the store,
            only filled when a single store is fetched by id.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    url: str | None = None
    store_state: StoreState = StoreState.OPEN
    time_zone: str | None = None
    country: str | None = None
    region: str | None = None
    default_language: str | None = None
    default_currency: CurrencyCode | None = None
    catalog: str | None = None
    credit_card_save_policy: bool = False
    secure_url: str | None = None
    email: str | None = None
    admin_email: str | None = None
    display_out_of_stock: bool = False
    fulfillment_center: FulfillmentCenterSchema | None = None
    returns_fulfillment_center: FulfillmentCenterSchema | None = None
    languages: list[str] = Field(default_factory=list)
    currencies: list[CurrencyCode] = Field(default_factory=list)
    settings: list[StoreSettingSchema] = Field(default_factory=list)
    payment_gateways: list[str] = Field(default_factory=list)
    shipment_gateways: list[str] = Field(default_factory=list)
    security_scopes: list[str] | None = None
    created_date: datetime | None = None
    created_by: str | None = None
    modified_date: datetime | None = None
    modified_by: str | None = None


class StoreSearchCriteria(StoreWireModel):
    """
    Criteria for searching stores.

    Attributes:
        keyword (str | None): Matched against the store id, name and url.
        store_ids (list[str] | None): Restrict the search to these stores.
        skip (int): Number of stores to skip.
        take (int): Maximum number of stores to return.
        sort (str | None): Sort expression, e.g `name:desc;createdDate`.
    """

    keyword: str | None = None
    store_ids: list[str] | None = None
    skip: int = Field(default=0, ge=0)
    take: int = Field(default=DEFAULT_PAGE_SIZE, ge=0)
    sort: str | None = None


class StoreSearchResult(StoreWireModel):
    """
    A page of stores along with the total number of matches.
    """

    total_count: int = 0
    stores: list[StoreSchema] = Field(default_factory=list)


class SendDynamicNotificationRequest(StoreWireModel):
    """
    Request to send a dynamic email notification on behalf of a store.

    Attributes:
        store_id (str): The store sending the notification.
        type (str): The form type of the notification (e.g ContactUs).
        language (str | None): The language of the template to render.
        fields (dict[str, str]): Form fields rendered into the notification.
    """

    store_id: str
    type: str
    language: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)


class LoginOnBehalfInfo(StoreWireModel):
    """
    Whether the current user may log in on behalf of an account.
    """

    user_name: str
    can_login_on_behalf: bool = False
