"""Zoom Team Chat messenger using aiohttp (chatbot messages API)."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from zoombot.config import ZoomConfig
from zoombot.domain.models import BotIdentity, is_test_jid
from zoombot.errors import MessageDeliveryError
from zoombot.ports.outbound import TokenProvider

logger = logging.getLogger(__name__)


class ZoomMessenger:
    """Sends chat messages as the bot.

    Identity learned from webhook events takes precedence over the values
    supplied by the caller or the environment.
    """

    def __init__(
        self,
        config: ZoomConfig,
        tokens: TokenProvider,
        identity: Optional[BotIdentity] = None,
        display_name: str = "Zoom Bot",
    ):
        self.config = config
        self.tokens = tokens
        self.identity = identity if identity is not None else BotIdentity()
        self.display_name = display_name

    def build_payload(self, to_jid: str, message: str, robot_jid: Optional[str]) -> Dict[str, Any]:
        payload = {
            "robot_jid": self.identity.robot_jid or robot_jid,
            "to_jid": to_jid,
            "content": {
                "head": {"text": self.display_name},
                "body": [{"type": "message", "text": message}],
            },
        }
        account_id = self.identity.account_id or self.config.account_id
        if account_id:
            payload["account_id"] = account_id
        return payload

    async def send(
        self,
        to_jid: str,
        message: str,
        robot_jid: Optional[str] = None,
    ) -> Dict[str, Any]:
        logger.info(f"Attempting to send message - toJid: {to_jid}, robotJid: {robot_jid}")

        if is_test_jid(to_jid) or is_test_jid(robot_jid):
            logger.info(f"Test mode detected: Would send message to {to_jid}: {message}")
            return {
                "success": True,
                "message": "Test message sent successfully",
                "to_jid": to_jid,
                "robot_jid": robot_jid,
                "test_mode": True,
            }

        token = await self.tokens.get_token()
        payload = self.build_payload(to_jid, message, robot_jid)
        logger.info(f"API Request Data: {json.dumps(payload, ensure_ascii=False)}")

        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        url = self.config.messages_url
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(url, json=payload, headers=headers) as resp:
                    text = await resp.text()
                    if resp.status >= 400:
                        logger.error(f"Failed to send message to {to_jid}")
                        logger.error(f"Request URL: {url}")
                        logger.error(f"HTTP Status: {resp.status}")
                        logger.error(f"Response Data: {text}")
                        raise MessageDeliveryError(
                            f"Message rejected (HTTP {resp.status})",
                            status=resp.status,
                            body=text,
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to send message: {e}")
            logger.error(f"Request URL: {url}")
            reason = str(e) or type(e).__name__
            raise MessageDeliveryError(reason, body=reason) from e

        logger.info(f"Message sent successfully to {to_jid}: {message}")
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError:
            return {"raw": text}
