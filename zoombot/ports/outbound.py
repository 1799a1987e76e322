"""Outbound ports — interfaces for the Zoom API adapters."""

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class TokenProvider(Protocol):
    """Source of OAuth access tokens."""

    async def get_token(self) -> str: ...


@runtime_checkable
class MessengerPort(Protocol):
    """Interface for sending a chat message to a JID."""

    async def send(
        self,
        to_jid: str,
        message: str,
        robot_jid: Optional[str] = None,
    ) -> Dict[str, Any]: ...
