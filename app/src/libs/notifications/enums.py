from enum import StrEnum


class NotificationDeliveryMethod(StrEnum):
    """
    Enumeration of delivery methods for notifications.

    Attributes:
        EMAIL: Email delivery method.
    """

    EMAIL = "email"


class NotificationStatus(StrEnum):
    """
    Enumeration of notification statuses.

    Attributes:
        PENDING: Notification is built but not handed over for delivery.
        SCHEDULED: Notification is queued for delivery.
        SKIPPED: Notification is inactive and was not queued.
    """

    PENDING = "pending"
    SCHEDULED = "scheduled"
    SKIPPED = "skipped"
