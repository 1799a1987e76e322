"""Inbound port — Zoom webhook events as plain dataclasses."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

BOT_INSTALLED = "bot_installed"
BOT_NOTIFICATION = "bot_notification"

# JSON values that mean the event carried no payload at all
_NO_PAYLOAD = (None, "", 0)


def _str_field(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    return str(value)


@dataclass
class WebhookEvent:
    """Envelope of a POST /webhook call: ``{event, payload}``.

    ``payload`` is None only when the event carried none. A payload that is
    not an object becomes an empty dict, so every field reads as missing.
    """

    event: Optional[str]
    payload: Optional[Dict[str, Any]] = None

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "WebhookEvent":
        payload = body.get("payload")
        if not isinstance(payload, dict):
            payload = None if payload in _NO_PAYLOAD else {}
        return cls(event=body.get("event"), payload=payload)

    @property
    def has_payload(self) -> bool:
        return self.payload is not None


@dataclass
class BotInstallation:
    account_id: Optional[str] = None
    robot_jid: Optional[str] = None
    user_id: Optional[str] = None
    user_jid: Optional[str] = None
    user_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "BotInstallation":
        return cls(
            account_id=_str_field(payload, "accountId"),
            robot_jid=_str_field(payload, "robotJid"),
            user_id=_str_field(payload, "userId"),
            user_jid=_str_field(payload, "userJid"),
            user_name=_str_field(payload, "userName"),
        )


@dataclass
class BotNotification:
    """A user message sent to the bot."""

    cmd: Optional[str] = None
    user_jid: Optional[str] = None
    robot_jid: Optional[str] = None
    account_id: Optional[str] = None
    user_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "BotNotification":
        return cls(
            cmd=_str_field(payload, "cmd"),
            user_jid=_str_field(payload, "userJid"),
            robot_jid=_str_field(payload, "robotJid"),
            account_id=_str_field(payload, "accountId"),
            user_name=_str_field(payload, "userName"),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.cmd and self.user_jid and self.robot_jid)
