"""Port interfaces (Hexagonal Architecture)."""

from zoombot.ports.inbound import (
    BOT_INSTALLED,
    BOT_NOTIFICATION,
    BotInstallation,
    BotNotification,
    WebhookEvent,
)
from zoombot.ports.outbound import MessengerPort, TokenProvider

__all__ = [
    "BOT_INSTALLED",
    "BOT_NOTIFICATION",
    "BotInstallation",
    "BotNotification",
    "WebhookEvent",
    "MessengerPort",
    "TokenProvider",
]
