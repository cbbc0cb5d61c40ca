"""Base types shared by all notification backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from opnotify.colors import status_color
from opnotify.config import Settings, settings as default_settings
from opnotify.models import (
    BackendConfig,
    BackendVariant,
    LoggingLevel,
    NotificationRequest,
    StatusColor,
)

MESSAGE_FIELD = "Message"
MESSAGE_VERBOSE_FIELD = "Details"
LOGGING_LEVEL_FIELD = "Logging Level"
CR_NAME_FIELD = "CR Name"
CONFIGURATION_TYPE_FIELD = "Configuration Type"
NAMESPACE_FIELD = "Namespace"


@dataclass(frozen=True)
class MessageField:
    title: str
    value: str
    short: bool = False


@dataclass(frozen=True)
class Message:
    """Backend-neutral notification content."""
    title: str
    color: StatusColor
    fields: tuple[MessageField, ...]
    footer: str


def _level_text(level: Union[LoggingLevel, str]) -> str:
    return level.value if isinstance(level, LoggingLevel) else str(level)


def compose_message(
    request: NotificationRequest,
    color: StatusColor,
    title: str,
    footer: str,
) -> Message:
    """
    Build the message body every backend renders.

    A separate detail field follows the short message when the resource asks
    for verbose notifications and a verbose message is available.
    """
    info = request.information

    fields = [
        MessageField(MESSAGE_FIELD, info.message),
        MessageField(CR_NAME_FIELD, info.cr_name, short=True),
        MessageField(CONFIGURATION_TYPE_FIELD, info.configuration_type, short=True),
        MessageField(LOGGING_LEVEL_FIELD, _level_text(info.log_level), short=True),
        MessageField(NAMESPACE_FIELD, info.namespace, short=True),
    ]
    if request.notification.verbose and info.message_verbose:
        fields.append(MessageField(MESSAGE_VERBOSE_FIELD, info.message_verbose))
    return Message(title=title, color=color, fields=tuple(fields), footer=footer)


class Backend(ABC):
    """
    Common interface for all notification backends.
    Each backend implements deliver() using its own API.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or default_settings
        self.transport = transport

    @property
    @abstractmethod
    def variant(self) -> BackendVariant:
        ...

    def build_message(self, request: NotificationRequest) -> Message:
        color = status_color(request.information.log_level, self.variant)
        return compose_message(
            request,
            color,
            title=self.settings.title_text,
            footer=self.settings.footer_text,
        )

    @abstractmethod
    async def deliver(self, request: NotificationRequest, config: BackendConfig) -> None:
        """Send one notification. Raises DeliveryError on failure."""
        ...
