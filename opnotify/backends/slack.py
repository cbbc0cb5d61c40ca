"""Slack channel adapter."""

import json

from opnotify.backends.base import Backend, Message
from opnotify.backends.transport import ChannelPayload, send_payload
from opnotify.models import BackendVariant, NotificationRequest, SlackConfig


def format_slack(config: SlackConfig, message: Message) -> ChannelPayload:
    """
    Format a notification for a Slack incoming webhook.

    Config expects:
        - webhook_url: Slack webhook URL
    """
    attachment = {
        "fallback": message.title,
        "color": message.color,
        "text": message.title,
        "fields": [
            {"title": f.title, "value": f.value, "short": f.short}
            for f in message.fields
        ],
        "footer": message.footer,
    }

    return ChannelPayload(
        method="POST",
        url=config.webhook_url,
        headers={"Content-Type": "application/json"},
        body=json.dumps({"attachments": [attachment]}),
    )


class SlackBackend(Backend):
    """Deliver notifications through a Slack incoming webhook."""

    @property
    def variant(self) -> BackendVariant:
        return BackendVariant.SLACK

    async def deliver(self, request: NotificationRequest, config: SlackConfig) -> None:
        payload = format_slack(config, self.build_message(request))
        await send_payload(
            self.variant.value,
            payload,
            timeout=self.settings.http_timeout,
            transport=self.transport,
        )
