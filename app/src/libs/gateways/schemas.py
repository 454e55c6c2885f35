from pydantic import BaseModel, Field


class GatewayMethod(BaseModel):
    """
    Describes a payment method, shipping method or tax provider a store can use.

    Attributes:
        code (str): The unique code of the gateway (e.g FixedRate).
        name (str | None): The display name.
        description (str | None): A free text description.
        logo_url (str | None): The url of the gateway logo.
        priority (int): Display order, lower first.
        is_active (bool): Whether the gateway is enabled.
    """

    code: str = Field(..., min_length=1)
    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    priority: int = 0
    is_active: bool = False
