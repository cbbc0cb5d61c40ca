"""Shared fixtures for opnotify tests."""

import logging
from typing import Optional

import pytest

from opnotify.backends import Backend
from opnotify.errors import DeliveryError
from opnotify.models import (
    BackendVariant,
    Information,
    LoggingLevel,
    MailgunConfig,
    NotificationConfig,
    NotificationRequest,
    ResourceRef,
    SlackConfig,
    TeamsConfig,
)

SLACK = SlackConfig(webhook_url="https://hooks.slack.com/services/T000/B000/XXX")
TEAMS = TeamsConfig(webhook_url="https://example.webhook.office.com/webhookb2/abc")
MAILGUN = MailgunConfig(
    domain="mg.example.com",
    api_key="key-123",
    recipient="ops@example.com",
    from_email="operator@example.com",
)


class RecordingBackend(Backend):
    """Backend that records deliveries and optionally fails."""

    def __init__(self, variant: BackendVariant, fail_on: Optional[set[str]] = None):
        super().__init__()
        self._variant = variant
        self.fail_on = fail_on or set()
        self.delivered: list[tuple[NotificationRequest, object, str]] = []

    @property
    def variant(self) -> BackendVariant:
        return self._variant

    async def deliver(self, request, config) -> None:
        message = self.build_message(request)
        self.delivered.append((request, config, message.color))
        if request.information.message in self.fail_on:
            raise DeliveryError(self._variant.value, "simulated outage")


def make_information(
    message: str = "test-message",
    level=LoggingLevel.WARN,
    verbose: str = "detail-test-message",
) -> Information:
    return Information(
        configuration_type="test-configuration",
        namespace="test-namespace",
        cr_name="test-cr",
        log_level=level,
        message=message,
        message_verbose=verbose,
    )


def make_request(
    message: str = "test-message",
    level=LoggingLevel.WARN,
    logger: Optional[logging.Logger] = None,
    **config,
) -> NotificationRequest:
    config.setdefault("name", "test-notification")
    return NotificationRequest.build(
        resource=ResourceRef(name="test-cr", namespace="test-namespace"),
        notification=NotificationConfig(**config),
        information=make_information(message, level),
        logger=logger,
    )


@pytest.fixture()
def backends() -> dict[BackendVariant, RecordingBackend]:
    return {variant: RecordingBackend(variant) for variant in BackendVariant}
