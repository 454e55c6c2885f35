from pydantic import BaseModel, Field


class AuthSessionState(BaseModel):
    """
    Represents the authenticated caller, decoded from the bearer token subject.

    Attributes:
        user_name (str): The user name of the caller.
        id (str | None): The account id of the caller, when the token carries it.
    """

    user_name: str = Field(..., min_length=1)
    id: str | None = None
