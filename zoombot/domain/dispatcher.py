"""Webhook event dispatcher — routes Zoom events by type.

Platform-agnostic: the web adapter parses and authenticates the request,
this module decides what to do with it.
"""

import json
import logging
from typing import Callable, Optional

from zoombot.domain.commands import CommandContext, interpret
from zoombot.domain.models import BotIdentity, DispatchResult, is_test_jid
from zoombot.errors import ZoomAPIError
from zoombot.ports.inbound import (
    BOT_INSTALLED,
    BOT_NOTIFICATION,
    BotInstallation,
    BotNotification,
    WebhookEvent,
)
from zoombot.ports.outbound import MessengerPort

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """Handles ``bot_installed`` and ``bot_notification`` events.

    Send failures are logged and acknowledged with 200 so Zoom does not
    retry the webhook.
    """

    def __init__(
        self,
        identity: BotIdentity,
        messenger: MessengerPort,
        identity_policy: str = "keep_first",
        context_factory: Optional[Callable[[], CommandContext]] = None,
    ):
        self.identity = identity
        self.messenger = messenger
        self.identity_policy = identity_policy
        self._context_factory = context_factory or CommandContext

    async def dispatch(self, event: WebhookEvent) -> DispatchResult:
        logger.info(f"Event type: {event.event}, Payload: {json.dumps(event.payload, ensure_ascii=False)}")

        if event.event == BOT_INSTALLED and event.has_payload:
            return self._on_installed(BotInstallation.from_payload(event.payload))
        if event.event == BOT_NOTIFICATION and event.has_payload:
            return await self._on_notification(BotNotification.from_payload(event.payload))

        logger.info(f"Received event: {event.event}")
        return DispatchResult(200, {"status": "ok", "message": "Event received"})

    def _on_installed(self, install: BotInstallation) -> DispatchResult:
        logger.info(
            f"Bot installed - accountId: {install.account_id}, robotJid: {install.robot_jid}, "
            f"installed by: {install.user_name}"
        )
        changed = self.identity.learn(
            account_id=install.account_id,
            robot_jid=install.robot_jid,
            overwrite=self.identity_policy == "latest_install",
        )
        if changed:
            logger.info(f"Stored bot identity fields: {', '.join(changed)}")
        else:
            logger.info(f"Bot identity unchanged (policy: {self.identity_policy})")
        logger.info("Bot installation completed successfully")
        return DispatchResult(200, {"status": "ok", "message": "Bot installed successfully"})

    async def _on_notification(self, note: BotNotification) -> DispatchResult:
        # Notifications only fill in identity that is still unknown.
        for name in self.identity.learn(account_id=note.account_id, robot_jid=note.robot_jid):
            logger.info(f"Updated bot {name} from notification payload: {getattr(self.identity, name)}")

        logger.info(
            f"Received JIDs - userJid: {note.user_jid}, robotJid: {note.robot_jid}, "
            f"accountId: {note.account_id}"
        )
        logger.info(
            f"Test JID check - userJid is test: {is_test_jid(note.user_jid)}, "
            f"robotJid is test: {is_test_jid(note.robot_jid)}"
        )

        if not note.is_complete:
            logger.warning(
                f"Missing required fields - cmd: {note.cmd}, userJid: {note.user_jid}, "
                f"robotJid: {note.robot_jid}"
            )
            return DispatchResult(400, {"error": "Missing required fields"})

        user_name = note.user_name or "User"
        reply = interpret(note.cmd, user_name, self._context_factory())
        logger.info(f"Generated reply message: {reply}")

        try:
            result = await self.messenger.send(note.user_jid, reply, note.robot_jid)
        except Exception as e:
            detail = e.describe() if isinstance(e, ZoomAPIError) else str(e)
            logger.error(f"Error sending message: {detail}")
            return DispatchResult(200, {"status": "received", "error": "Failed to send reply"})

        logger.info(f"Send message result: {json.dumps(result, ensure_ascii=False, default=str)}")
        logger.info(f"Command processed successfully: {note.cmd} -> {user_name}")
        return DispatchResult(
            200,
            {"to_jid": note.user_jid, "message": reply, "robot_jid": note.robot_jid},
        )
