"""Zoom OAuth token client using aiohttp (client credentials grant)."""

import asyncio
import logging
import time
from typing import Callable, Optional

import aiohttp

from zoombot.config import ZoomConfig
from zoombot.errors import ConfigurationError, TokenExchangeError

logger = logging.getLogger(__name__)

# Seconds shaved off the declared lifetime so a token never expires mid-request
SAFETY_MARGIN = 300
DEFAULT_EXPIRES_IN = 3600


class ZoomTokenClient:
    """Fetches an access token and caches it until shortly before expiry."""

    def __init__(self, config: ZoomConfig, clock: Callable[[], float] = time.time):
        self.config = config
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: Optional[float] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def is_configured(self) -> bool:
        return self.config.has_credentials

    @property
    def expires_at(self) -> Optional[float]:
        return self._expires_at

    def has_valid_token(self) -> bool:
        return bool(
            self._token
            and self._expires_at is not None
            and self._clock() < self._expires_at
        )

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = None

    async def get_token(self) -> str:
        if self.has_valid_token():
            return self._token
        async with self._refresh_lock:
            # Another caller may have refreshed while we waited.
            if self.has_valid_token():
                return self._token
            return await self._fetch_token()

    async def _fetch_token(self) -> str:
        if not self.is_configured:
            message = "Missing required Zoom credentials (ZOOM_CLIENT_ID or ZOOM_CLIENT_SECRET)"
            logger.error(message)
            raise ConfigurationError(message)

        params = {"grant_type": "client_credentials"}
        # Server-to-Server OAuth apps are scoped to an account
        if self.config.account_id:
            params["account_id"] = self.config.account_id

        auth = aiohttp.BasicAuth(self.config.client_id, self.config.client_secret)
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        logger.info("Requesting access token...")
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.config.oauth_token_url,
                    params=params,
                    auth=auth,
                    headers=headers,
                ) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise TokenExchangeError(
                            f"Token request rejected (HTTP {resp.status})",
                            status=resp.status,
                            body=body,
                        )
                    data = await resp.json(content_type=None)
        except TokenExchangeError as e:
            logger.error(f"Failed to get access token: {e.describe()}")
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            reason = str(e) or type(e).__name__
            error = TokenExchangeError(reason, body=reason)
            logger.error(f"Failed to get access token: {error.describe()}")
            raise error from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            error = TokenExchangeError("No access token in response", status=resp.status, body=data)
            logger.error(f"Failed to get access token: {error}")
            raise error

        raw_expires_in = data.get("expires_in")
        try:
            expires_in = DEFAULT_EXPIRES_IN if raw_expires_in is None else int(raw_expires_in)
        except (TypeError, ValueError) as e:
            error = TokenExchangeError(
                f"Invalid expires_in in response: {raw_expires_in!r}",
                status=resp.status,
                body=data,
            )
            logger.error(f"Failed to get access token: {error}")
            raise error from e

        self._token = token
        self._expires_at = self._clock() + expires_in - SAFETY_MARGIN
        logger.info("Access token obtained successfully")
        return token
