"""Notification request model and declarative backend configuration."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from opnotify.logging_config import resource_logger

StatusColor = str


class LoggingLevel(str, Enum):
    WARN = "warn"
    INFO = "info"


class BackendVariant(str, Enum):
    SLACK = "slack"
    TEAMS = "teams"
    MAILGUN = "mailgun"


# First populated backend wins when a resource configures more than one.
BACKEND_PRECEDENCE = (BackendVariant.SLACK, BackendVariant.TEAMS, BackendVariant.MAILGUN)


# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------

class _BackendConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return not any(getattr(self, name) for name in type(self).model_fields)


class SlackConfig(_BackendConfig):
    webhook_url: str = Field("", description="Slack incoming webhook URL")


class TeamsConfig(_BackendConfig):
    webhook_url: str = Field("", description="Microsoft Teams incoming webhook URL")


class MailgunConfig(_BackendConfig):
    domain: str = Field("", description="Mailgun sending domain")
    api_key: str = ""
    recipient: str = Field("", description="Address the notification is sent to")
    from_email: str = Field("", description="Sender address")
    api_base: str = Field("", description="Overrides the Mailgun API base URL")


BackendConfig = Union[SlackConfig, TeamsConfig, MailgunConfig]


@dataclass(frozen=True)
class ResolvedBackend:
    """The single backend variant a request is delivered through."""
    variant: BackendVariant
    config: BackendConfig


class NotificationConfig(BaseModel):
    """Notification settings declared on a resource."""

    name: str = ""
    verbose: bool = False
    slack: SlackConfig = Field(default_factory=SlackConfig)
    teams: TeamsConfig = Field(default_factory=TeamsConfig)
    mailgun: MailgunConfig = Field(default_factory=MailgunConfig)

    model_config = {"frozen": True}

    def resolve_backend(self) -> Optional[ResolvedBackend]:
        """
        Pick the backend to deliver through.

        Sub-configs are checked in BACKEND_PRECEDENCE order and the first
        populated one is used. Returns None when nothing is configured.
        """
        for variant in BACKEND_PRECEDENCE:
            config = getattr(self, variant.value)
            if not config.is_empty():
                return ResolvedBackend(variant=variant, config=config)
        return None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Information:
    """Details about an operator status change."""
    configuration_type: str
    namespace: str
    cr_name: str
    log_level: Union[LoggingLevel, str]
    message: str
    message_verbose: str = ""


@dataclass(frozen=True)
class ResourceRef:
    name: str
    namespace: str


@dataclass(frozen=True)
class NotificationRequest:
    """A notification waiting for delivery. Never mutated once enqueued."""
    resource: ResourceRef
    notification: NotificationConfig
    backend: Optional[ResolvedBackend]
    information: Information
    logger: Union[logging.Logger, logging.LoggerAdapter] = field(compare=False, repr=False)

    @classmethod
    def build(
        cls,
        resource: ResourceRef,
        notification: NotificationConfig,
        information: Information,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> "NotificationRequest":
        return cls(
            resource=resource,
            notification=notification,
            backend=notification.resolve_backend(),
            information=information,
            logger=logger or resource_logger(resource.name, resource.namespace),
        )
