"""Notification backend abstraction layer."""

from typing import Optional

import httpx

from opnotify.backends.base import Backend, Message, MessageField, compose_message
from opnotify.backends.mailgun import MailgunBackend
from opnotify.backends.slack import SlackBackend
from opnotify.backends.teams import TeamsBackend
from opnotify.config import Settings
from opnotify.models import BackendVariant


def default_backends(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[BackendVariant, Backend]:
    """One backend instance per variant."""
    return {
        BackendVariant.SLACK: SlackBackend(settings, transport),
        BackendVariant.TEAMS: TeamsBackend(settings, transport),
        BackendVariant.MAILGUN: MailgunBackend(settings, transport),
    }


__all__ = [
    "Backend",
    "MailgunBackend",
    "Message",
    "MessageField",
    "SlackBackend",
    "TeamsBackend",
    "compose_message",
    "default_backends",
]
