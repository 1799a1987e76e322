"""Tests for port protocol conformance and webhook event parsing."""

import pytest

from zoombot.adapters.zoom import ZoomMessenger, ZoomTokenClient
from zoombot.config import ZoomConfig
from zoombot.ports.inbound import BotInstallation, BotNotification, WebhookEvent
from zoombot.ports.outbound import MessengerPort, TokenProvider


class TestOutboundConformance:
    def test_token_client_is_token_provider(self):
        assert isinstance(ZoomTokenClient(ZoomConfig()), TokenProvider)

    def test_messenger_is_messenger_port(self):
        tokens = ZoomTokenClient(ZoomConfig())
        assert isinstance(ZoomMessenger(ZoomConfig(), tokens), MessengerPort)


class TestWebhookEvent:
    def test_envelope(self):
        event = WebhookEvent.from_body({"event": "bot_installed", "payload": {"accountId": "a"}})
        assert event.event == "bot_installed"
        assert event.payload == {"accountId": "a"}

    def test_empty_object_is_kept(self):
        event = WebhookEvent.from_body({"event": "x", "payload": {}})
        assert event.payload == {}
        assert event.has_payload is True

    @pytest.mark.parametrize("payload", ["text", [1], 5, True])
    def test_non_object_reads_as_empty(self, payload):
        event = WebhookEvent.from_body({"event": "x", "payload": payload})
        assert event.payload == {}
        assert event.has_payload is True

    @pytest.mark.parametrize("payload", [None, "", 0, False])
    def test_absent(self, payload):
        event = WebhookEvent.from_body({"event": "x", "payload": payload})
        assert event.payload is None
        assert event.has_payload is False

    def test_no_event(self):
        event = WebhookEvent.from_body({})
        assert event.event is None
        assert event.has_payload is False


class TestPayloads:
    def test_installation(self):
        install = BotInstallation.from_payload({
            "accountId": "acc1",
            "robotJid": "bot1",
            "userId": "u1",
            "userJid": "u1@x",
            "userName": "Admin",
        })
        assert install == BotInstallation("acc1", "bot1", "u1", "u1@x", "Admin")

    def test_notification_empty_strings_are_missing(self):
        note = BotNotification.from_payload({"cmd": "", "userJid": "u@x", "robotJid": "b@x"})
        assert note.cmd is None
        assert note.is_complete is False

    def test_notification_complete(self):
        note = BotNotification.from_payload({"cmd": "hi", "userJid": "u@x", "robotJid": "b@x"})
        assert note.is_complete is True
        assert note.user_name is None
