"""Process-lifetime bot state, owned by the web application instance."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from zoombot.adapters.zoom import ZoomMessenger, ZoomTokenClient
from zoombot.config import AppConfig
from zoombot.domain.commands import CommandContext, process_uptime
from zoombot.domain.dispatcher import WebhookDispatcher
from zoombot.domain.models import BotIdentity
from zoombot.ports.outbound import MessengerPort


@dataclass
class BotContext:
    """Token cache, learned identity and the components that share them."""

    config: AppConfig
    identity: BotIdentity = field(default_factory=BotIdentity)
    tokens: Optional[ZoomTokenClient] = None
    messenger: Optional[MessengerPort] = None
    dispatcher: Optional[WebhookDispatcher] = None

    def __post_init__(self):
        if self.tokens is None:
            self.tokens = ZoomTokenClient(self.config.zoom)
        if self.messenger is None:
            self.messenger = ZoomMessenger(
                self.config.zoom,
                self.tokens,
                identity=self.identity,
                display_name=self.config.display_name,
            )
        if self.dispatcher is None:
            self.dispatcher = WebhookDispatcher(
                self.identity,
                self.messenger,
                identity_policy=self.config.identity_policy,
                context_factory=self.command_context,
            )

    def command_context(self) -> CommandContext:
        return CommandContext(tz_name=self.config.timezone)

    def health(self) -> dict:
        return {
            "status": "running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": process_uptime(),
            "config": self.config.config_flags(),
            "message": "🤖 Zoom chat bot is running",
        }
