from .store import StoreDynamicEmailNotification  # noqa: F401
