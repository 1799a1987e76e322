"""Exception types raised by the Zoom adapters."""

from typing import Any, Optional


class ZoomBotError(Exception):
    """Base class for bot errors."""
    pass


class ConfigurationError(ZoomBotError):
    """Raised when required credentials are missing from the environment."""
    pass


class ZoomAPIError(ZoomBotError):
    """Upstream Zoom API failure.

    ``status`` is None when the request never got an HTTP response
    (DNS failure, connection reset, timeout).
    """

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status = status
        self.body = body

    def describe(self) -> str:
        if self.status is None:
            return f"Network Error: {self}"
        return f"API Error: {self.status} - {self.body}"


class TokenExchangeError(ZoomAPIError):
    """The OAuth token endpoint rejected the exchange or returned no token."""
    pass


class MessageDeliveryError(ZoomAPIError):
    """The chat messages endpoint rejected the message."""
    pass
