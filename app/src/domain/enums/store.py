from enum import StrEnum


class StoreState(StrEnum):
    """
    Enumeration representing the availability of a store.

    Attributes:\n
        OPEN: The store is open for everyone.
        CLOSED: The store is closed.
        RESTRICTED_ACCESS: Only authenticated customers of the store can access it.
    """

    OPEN = "Open"
    CLOSED = "Closed"
    RESTRICTED_ACCESS = "RestrictedAccess"


class StoreMethodKind(StrEnum):
    """
    Enumeration for the kinds of gateways a store can be wired to.
    """

    PAYMENT = "payment"
    SHIPPING = "shipping"
    TAX = "tax"


class SettingValueType(StrEnum):
    """
    Enumeration for the value types a store setting can hold.
    """

    SHORT_TEXT = "ShortText"
    LONG_TEXT = "LongText"
    INTEGER = "Integer"
    DECIMAL = "Decimal"
    BOOLEAN = "Boolean"
    DATE_TIME = "DateTime"
    SECURE_STRING = "SecureString"
