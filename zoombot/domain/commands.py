"""Chat command interpreter.

Pure Python, no framework dependencies. Commands are a flat alias table;
anything not in the table gets the echo reply.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
from zoneinfo import ZoneInfo

from zoombot import __version__

DEFAULT_USER_NAME = "User"
DEFAULT_TIMEZONE = "Asia/Shanghai"

_PROCESS_STARTED = time.monotonic()


def process_uptime() -> float:
    """Seconds since this module was first imported."""
    return time.monotonic() - _PROCESS_STARTED


@dataclass
class CommandContext:
    """Inputs the time-dependent replies draw from."""

    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    uptime_seconds: float = field(default_factory=process_uptime)
    tz_name: str = DEFAULT_TIMEZONE
    version: str = __version__


def _greeting(user_name: str, ctx: CommandContext) -> str:
    return (
        f"Hello {user_name}! I'm the Zoom chat bot 🤖\n\n"
        "Try sending one of these commands:\n"
        "• help - show help\n"
        "• time - show the current time\n"
        "• ping - check the connection\n"
        "• info - show bot information"
    )


def _help(user_name: str, ctx: CommandContext) -> str:
    return (
        "🤖 **Zoom Chat Bot Help**\n\n"
        "**Available commands:**\n"
        "• hello/hi/你好 - greet the bot\n"
        "• help/帮助 - show this help message\n"
        "• time/时间 - show the current time\n"
        "• ping - check that the bot is reachable\n"
        "• info/信息 - show version information\n\n"
        "**Usage:**\n"
        "Just send a command and the bot replies automatically!"
    )


def _time(user_name: str, ctx: CommandContext) -> str:
    local = ctx.now.astimezone(ZoneInfo(ctx.tz_name))
    return f"🕐 **Current time**\n{local.strftime('%Y-%m-%d %H:%M:%S')} ({ctx.tz_name})"


def _ping(user_name: str, ctx: CommandContext) -> str:
    return (
        "🏓 **Pong!**\n\n"
        "Status: ✅ running normally\n"
        "Response time: < 100ms\n"
        f"Server time: {ctx.now.isoformat()}"
    )


def _info(user_name: str, ctx: CommandContext) -> str:
    return (
        "🤖 **Bot information**\n\n"
        f"**Version:** {ctx.version}\n"
        "**Status:** 🟢 online\n"
        "**Features:** chat, command handling\n"
        "**Languages:** Chinese/English\n"
        f"**Uptime:** {int(ctx.uptime_seconds)} seconds"
    )


def _echo(command_text: str) -> str:
    return (
        f'I received your message: "{command_text}"\n\n'
        "🤖 I'm a chat bot, try sending:\n"
        "• help - show help\n"
        "• time - show the current time\n"
        "• ping - check the connection"
    )


CommandHandler = Callable[[str, CommandContext], str]

# Map lowercase command -> reply builder
COMMANDS: Dict[str, CommandHandler] = {
    "hello": _greeting,
    "hi": _greeting,
    "你好": _greeting,
    "help": _help,
    "帮助": _help,
    "time": _time,
    "时间": _time,
    "ping": _ping,
    "info": _info,
    "信息": _info,
}


def interpret(
    command_text: str,
    user_name: Optional[str] = None,
    context: Optional[CommandContext] = None,
) -> str:
    """Return the reply for a chat command (case-insensitive, trimmed)."""
    handler = COMMANDS.get(command_text.strip().lower())
    if handler is None:
        return _echo(command_text)
    return handler(user_name or DEFAULT_USER_NAME, context or CommandContext())
