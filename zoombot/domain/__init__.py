"""Domain layer — pure Python, no framework dependencies."""

from zoombot.domain.commands import COMMANDS, CommandContext, interpret, process_uptime
from zoombot.domain.dispatcher import WebhookDispatcher
from zoombot.domain.models import TEST_JIDS, BotIdentity, DispatchResult, is_test_jid

__all__ = [
    "COMMANDS",
    "CommandContext",
    "interpret",
    "process_uptime",
    "WebhookDispatcher",
    "TEST_JIDS",
    "BotIdentity",
    "DispatchResult",
    "is_test_jid",
]
