"""Error types raised by the notification pipeline."""


class NotificationError(Exception):
    """Base class for all notification errors."""


class ConfigurationUnresolved(NotificationError):
    """No backend configuration is populated for a resource."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Notification service in `{name}` not found or not defined")


class DeliveryError(NotificationError):
    """A backend could not complete its outbound call."""

    def __init__(self, backend: str, detail: str):
        self.backend = backend
        self.detail = detail
        super().__init__(f"{backend} delivery failed: {detail}")


class DispatcherClosed(NotificationError):
    """The dispatcher no longer accepts notifications."""
