"""Mailgun email provider (https://mailgun.com)."""

import html as html_lib

from opnotify.backends.base import Backend, Message
from opnotify.backends.transport import ChannelPayload, send_payload
from opnotify.errors import DeliveryError
from opnotify.models import BackendVariant, MailgunConfig, NotificationRequest


def _build_email_html(message: Message) -> str:
    """Build the HTML email body from message fields."""
    escape = html_lib.escape

    field_rows = ""
    for f in message.fields:
        field_rows += (
            f"<tr>"
            f'<td style="padding:8px 12px;font-weight:600;white-space:nowrap;">{escape(f.title)}</td>'
            f'<td style="padding:8px 12px;">{escape(f.value)}</td>'
            f"</tr>"
        )

    return (
        f'<h2 style="color:{escape(message.color)};">{escape(message.title)}</h2>'
        f"<table>{field_rows}</table>"
        f'<p style="color:gray;font-size:12px;">{escape(message.footer)}</p>'
    )


def format_mailgun(config: MailgunConfig, message: Message, api_base: str) -> ChannelPayload:
    """
    Format a notification for the Mailgun messages API.

    Config expects:
        - domain: sending domain
        - api_key: Mailgun private API key
        - recipient: destination address
        - from_email: sender address
        - api_base: optional API base URL override
    """
    base = (config.api_base or api_base).rstrip("/")
    return ChannelPayload(
        method="POST",
        url=f"{base}/v3/{config.domain}/messages",
        form={
            "from": config.from_email,
            "to": config.recipient,
            "subject": message.title,
            "html": _build_email_html(message),
        },
        auth=("api", config.api_key),
    )


class MailgunBackend(Backend):
    """Send notification email via the Mailgun REST API."""

    @property
    def variant(self) -> BackendVariant:
        return BackendVariant.MAILGUN

    async def deliver(self, request: NotificationRequest, config: MailgunConfig) -> None:
        for name in ("domain", "api_key", "recipient"):
            if not getattr(config, name):
                raise DeliveryError(self.variant.value, f"missing required field: {name}")

        payload = format_mailgun(
            config, self.build_message(request), self.settings.mailgun_api_base
        )
        await send_payload(
            self.variant.value,
            payload,
            timeout=self.settings.http_timeout,
            transport=self.transport,
        )
