from pydantic import BaseModel, Field


class PermissionScope(BaseModel):
    """
    A scope restricting a permission to a subset of objects.

    Attributes:
        type (str): The scope type (e.g StoreSelectedScope).
        scope (str): The scoped value (e.g a store id).
    """

    type: str
    scope: str

    def __str__(self) -> str:
        return f"{self.type}:{self.scope}"


class PermissionGrant(BaseModel):
    """
    A permission held by an account along with the scopes it is assigned to.
    """

    id: str
    assigned_scopes: list[PermissionScope] = Field(default_factory=list)

    def combination_names(self) -> list[str]:
        """
        Expand the grant into the names it satisfies.

        An unscoped grant satisfies its own id, a scoped one satisfies
        `<id>:<scope>` for each assigned scope.
        """
        if not self.assigned_scopes:
            return [self.id]
        return [f"{self.id}:{scope}" for scope in self.assigned_scopes]
