"""Tests for backend resolution and the request model."""

import dataclasses
import logging

import pytest
from pydantic import ValidationError

from conftest import MAILGUN, SLACK, TEAMS, make_request
from opnotify.models import (
    BackendVariant,
    MailgunConfig,
    NotificationConfig,
    SlackConfig,
    TeamsConfig,
)


class TestBackendConfig:
    def test_default_configs_are_empty(self):
        assert SlackConfig().is_empty()
        assert TeamsConfig().is_empty()
        assert MailgunConfig().is_empty()

    def test_any_field_populates_config(self):
        assert not MailgunConfig(recipient="ops@example.com").is_empty()
        assert not SlackConfig(webhook_url="https://hooks.slack.com/x").is_empty()

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            SlackConfig(url="https://hooks.slack.com/x")


class TestResolveBackend:
    def test_nothing_configured(self):
        assert NotificationConfig(name="empty").resolve_backend() is None

    @pytest.mark.parametrize(
        "configs,expected",
        [
            ({"slack": SLACK}, BackendVariant.SLACK),
            ({"teams": TEAMS}, BackendVariant.TEAMS),
            ({"mailgun": MAILGUN}, BackendVariant.MAILGUN),
            ({"slack": SLACK, "teams": TEAMS, "mailgun": MAILGUN}, BackendVariant.SLACK),
            ({"teams": TEAMS, "mailgun": MAILGUN}, BackendVariant.TEAMS),
            ({"slack": SLACK, "mailgun": MAILGUN}, BackendVariant.SLACK),
        ],
    )
    def test_precedence(self, configs, expected):
        resolved = NotificationConfig(**configs).resolve_backend()
        assert resolved.variant == expected
        assert resolved.config == configs[expected.value]

    def test_parses_nested_dicts(self):
        config = NotificationConfig.model_validate(
            {"name": "n", "teams": {"webhook_url": TEAMS.webhook_url}}
        )
        assert config.resolve_backend().variant == BackendVariant.TEAMS


class TestNotificationRequest:
    def test_backend_resolved_at_build(self):
        request = make_request(mailgun=MAILGUN)
        assert request.backend.variant == BackendVariant.MAILGUN

    def test_request_is_immutable(self):
        request = make_request(slack=SLACK)
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.backend = None
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.information.message = "changed"

    def test_default_logger_bound_to_resource(self):
        request = make_request(slack=SLACK)
        assert isinstance(request.logger, logging.LoggerAdapter)
        assert request.logger.extra == {"resource": "test-namespace/test-cr"}

    def test_explicit_logger_kept(self):
        custom = logging.getLogger("custom")
        request = make_request(logger=custom, slack=SLACK)
        assert request.logger is custom
