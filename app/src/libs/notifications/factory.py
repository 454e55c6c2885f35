from src.libs.notifications.enums import NotificationDeliveryMethod
from src.libs.notifications.interface import NotificationProvider
from src.libs.notifications.providers import EmailProvider


class NotificationFactory:
    _providers: dict[NotificationDeliveryMethod, type[NotificationProvider]] = {
        NotificationDeliveryMethod.EMAIL: EmailProvider,
    }

    @classmethod
    def register_provider(cls, method: NotificationDeliveryMethod, provider_class: type[NotificationProvider]) -> None:
        cls._providers[method] = provider_class

    @classmethod
    def get_provider(cls, method: NotificationDeliveryMethod) -> NotificationProvider:
        if method not in cls._providers:
            raise ValueError(f"Unsupported delivery method: {method}")
        return cls._providers[method]()
