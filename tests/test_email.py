"""Unit tests for the SendGrid email sender."""

from __future__ import annotations

import json
import logging
import types

import pytest

from app.infrastructure.email import (
    EmailConfigurationError,
    EmailDeliveryError,
    EmailSender,
    EmailSettings,
)

CONFIGURED = EmailSettings(api_key="SG.fake", sender="sender@example.com")


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that records what it was asked to send."""

    instances: list["RecordingClient"] = []

    def __init__(self, api_key: str, response=None, error: Exception | None = None):
        self.api_key = api_key
        self.client = types.SimpleNamespace(timeout=None)
        self.sent: list = []
        self._response = response or types.SimpleNamespace(status_code=202, body=None)
        self._error = error
        RecordingClient.instances.append(self)

    def send(self, message):
        self.sent.append(message)
        if self._error is not None:
            raise self._error
        return self._response


@pytest.fixture(autouse=True)
def clear_instances():
    RecordingClient.instances = []
    yield


def _send(sender: EmailSender) -> None:
    sender.send(
        recipient="user@example.com",
        subject="Subject",
        html="<p>Body</p>",
        text="Body",
    )


@pytest.mark.parametrize(
    "config",
    [
        EmailSettings(api_key=None, sender="sender@example.com"),
        EmailSettings(api_key="SG.fake", sender=None),
    ],
)
def test_send_without_configuration_never_builds_a_client(config: EmailSettings) -> None:
    """Missing credentials fail before any client is created."""

    sender = EmailSender(config, client_factory=RecordingClient)

    with pytest.raises(EmailConfigurationError):
        _send(sender)

    assert RecordingClient.instances == []


def test_send_success_applies_timeout() -> None:
    """An accepted request returns quietly and uses the configured timeout."""

    sender = EmailSender(
        EmailSettings(api_key="SG.fake", sender="sender@example.com", timeout_seconds=7),
        client_factory=RecordingClient,
    )

    _send(sender)

    (client,) = RecordingClient.instances
    assert client.api_key == "SG.fake"
    assert client.client.timeout == 7
    assert len(client.sent) == 1


def test_send_forbidden_error_surfaces_details(caplog: pytest.LogCaptureFixture) -> None:
    """Provider errors are raised with the status and the decoded error body."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://sendgrid.com/docs/for-developers/sending-email/api-getting-started/",
                    }
                ]
            }
        ).encode("utf-8")

    sender = EmailSender(
        CONFIGURED,
        client_factory=lambda key: RecordingClient(key, error=FakeForbiddenError()),
    )

    with caplog.at_level(logging.ERROR):
        with pytest.raises(EmailDeliveryError) as exc_info:
            _send(sender)

    assert exc_info.value.status_code == 403
    assert "status 403" in str(exc_info.value)
    assert "authorization grant is invalid" in str(exc_info.value)
    assert "authorization grant is invalid" in caplog.text


def test_send_rejects_non_success_status() -> None:
    """A non-2xx response is treated as a delivery failure."""

    response = types.SimpleNamespace(status_code=500, body=b"upstream unavailable")
    sender = EmailSender(
        CONFIGURED,
        client_factory=lambda key: RecordingClient(key, response=response),
    )

    with pytest.raises(EmailDeliveryError) as exc_info:
        _send(sender)

    assert exc_info.value.status_code == 500
    assert "upstream unavailable" in str(exc_info.value)


def test_send_wraps_transport_errors_without_status() -> None:
    sender = EmailSender(
        CONFIGURED,
        client_factory=lambda key: RecordingClient(key, error=ConnectionError("reset")),
    )

    with pytest.raises(EmailDeliveryError) as exc_info:
        _send(sender)

    assert exc_info.value.status_code is None
    assert "reset" in str(exc_info.value)
