from enum import StrEnum


class StorePermission(StrEnum):
    """
    Enumeration of the permissions guarding store operations.
    """

    READ = "store:read"
    CREATE = "store:create"
    UPDATE = "store:update"
    DELETE = "store:delete"
    LOGIN_ON_BEHALF = "store:loginOnBehalf"
