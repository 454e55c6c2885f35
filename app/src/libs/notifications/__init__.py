from .enums import NotificationDeliveryMethod, NotificationStatus  # noqa: F401
from .exceptions import NotificationError, NotificationTemplateNotFoundError  # noqa: F401
from .factory import NotificationFactory  # noqa: F401
from .interface import NotificationProvider  # noqa: F401
from .manager import NotificationManager, notification_manager  # noqa: F401
from .schemas import EmailNotification  # noqa: F401
