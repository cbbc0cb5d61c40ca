"""Microsoft Teams channel adapter."""

import json

from opnotify.backends.base import Backend, Message
from opnotify.backends.transport import ChannelPayload, send_payload
from opnotify.models import BackendVariant, NotificationRequest, TeamsConfig


def format_teams(config: TeamsConfig, message: Message) -> ChannelPayload:
    """
    Format a notification for a Teams webhook using a MessageCard.

    Config expects:
        - webhook_url: Teams webhook URL
    """
    teams_body = {
        "@type": "MessageCard",
        "@context": "https://schema.org/extensions",
        "themeColor": message.color,
        "summary": message.title,
        "title": message.title,
        "sections": [
            {
                "facts": [
                    {"name": f.title, "value": f.value}
                    for f in message.fields
                ],
                "text": message.footer,
            }
        ],
    }

    return ChannelPayload(
        method="POST",
        url=config.webhook_url,
        headers={"Content-Type": "application/json"},
        body=json.dumps(teams_body),
    )


class TeamsBackend(Backend):
    """Deliver notifications through a Teams incoming webhook."""

    @property
    def variant(self) -> BackendVariant:
        return BackendVariant.TEAMS

    async def deliver(self, request: NotificationRequest, config: TeamsConfig) -> None:
        payload = format_teams(config, self.build_message(request))
        await send_payload(
            self.variant.value,
            payload,
            timeout=self.settings.http_timeout,
            transport=self.transport,
        )
