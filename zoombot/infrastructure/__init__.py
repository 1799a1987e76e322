"""Runtime wiring shared by the web adapter and the entrypoint."""

from zoombot.infrastructure.context import BotContext

__all__ = ["BotContext"]
