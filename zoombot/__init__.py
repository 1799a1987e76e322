"""Zoom Chat Bot — webhook-driven Zoom Team Chat bot."""

__version__ = "1.0.0"

from zoombot.config import AppConfig, ZoomConfig
from zoombot.errors import (
    ConfigurationError,
    MessageDeliveryError,
    TokenExchangeError,
    ZoomAPIError,
    ZoomBotError,
)
from zoombot.domain.commands import interpret
from zoombot.domain.models import BotIdentity

__all__ = [
    "__version__",
    "AppConfig",
    "ZoomConfig",
    "ConfigurationError",
    "MessageDeliveryError",
    "TokenExchangeError",
    "ZoomAPIError",
    "ZoomBotError",
    "interpret",
    "BotIdentity",
]
