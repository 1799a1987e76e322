"""FastAPI application: Zoom webhook, diagnostics and test routes."""

import hmac
import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ValidationError

from zoombot import __version__
from zoombot.adapters.web.pages import (
    INDEX_PAGE,
    OAUTH_FAILURE_PAGE,
    TEST_CONSOLE_PAGE,
    oauth_success_page,
)
from zoombot.config import AppConfig
from zoombot.infrastructure.context import BotContext
from zoombot.ports.inbound import WebhookEvent

logger = logging.getLogger(__name__)

DEFAULT_ROBOT_JID = "default_robot_jid"


# Request/Response models
class SendMessageRequest(BaseModel):
    to_jid: Optional[str] = None
    message: Optional[str] = None
    robot_jid: Optional[str] = None


class SendMessageResponse(BaseModel):
    status: str
    message: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float
    config: Dict[str, str]
    message: str


class ChallengeResponse(BaseModel):
    challenge: str


def get_bot(request: Request) -> BotContext:
    return request.app.state.bot


def _internal_error(config: AppConfig, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if config.is_development else "Processing failed",
        },
    )


def _authorized(expected: str, received: Optional[str]) -> bool:
    if not expected:
        return True
    if received is None:
        return False
    return hmac.compare_digest(expected.encode(), received.encode())


def create_app(
    config: Optional[AppConfig] = None,
    context: Optional[BotContext] = None,
) -> FastAPI:
    """Build the web application around a single BotContext."""
    if context is None:
        context = BotContext(config or AppConfig.from_env())

    app = FastAPI(title="Zoom Chat Bot", version=__version__)
    app.state.bot = context

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return _internal_error(request.app.state.bot.config, exc)

    # ============================================
    # Zoom webhook
    # ============================================
    @app.get("/webhook", response_model=ChallengeResponse)
    async def webhook_verify(challenge: Optional[str] = None):
        """Echo the verification challenge back to Zoom"""
        logger.info(f"Webhook verification request - challenge: {challenge}")
        if not challenge:
            return JSONResponse(status_code=400, content={"error": "Missing challenge parameter"})
        return ChallengeResponse(challenge=challenge)

    @app.post("/webhook")
    async def webhook(request: Request, bot: BotContext = Depends(get_bot)):
        """Receive bot events from Zoom"""
        try:
            client = request.client.host if request.client else "unknown"
            logger.info(f"Received webhook request from {client}")

            expected = bot.config.zoom.verification_token
            received = request.headers.get("authorization")
            if not _authorized(expected, received):
                logger.warning(
                    f"Verification token mismatch. Expected: {'[SET]' if expected else '[NOT SET]'}, "
                    f"Received: {'[PROVIDED]' if received else '[NOT PROVIDED]'}"
                )
                return JSONResponse(status_code=401, content={"error": "Unauthorized access"})

            try:
                body = await request.json()
            except ValueError:
                body = None
            if not isinstance(body, dict):
                logger.warning("Invalid request body")
                return JSONResponse(status_code=400, content={"error": "Invalid request body"})

            result = await bot.dispatcher.dispatch(WebhookEvent.from_body(body))
            return JSONResponse(status_code=result.status_code, content=result.body)
        except Exception as e:
            logger.error(f"Webhook processing error: {e}", exc_info=e)
            return _internal_error(bot.config, e)

    @app.api_route(
        "/webhook-debug",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )
    async def webhook_debug(request: Request):
        """Log whatever reaches this endpoint"""
        raw = await request.body()
        logger.info(f"DEBUG - Method: {request.method}, Headers: {json.dumps(dict(request.headers))}")
        logger.info(f"DEBUG - Query: {json.dumps(dict(request.query_params))}")
        logger.info(f"DEBUG - Body: {raw.decode('utf-8', errors='replace')}")
        return {"status": "debug", "method": request.method, "received": True}

    # ============================================
    # Diagnostics
    # ============================================
    @app.post("/test-send-message", response_model=SendMessageResponse, response_model_exclude_none=True)
    async def test_send_message(request: Request, bot: BotContext = Depends(get_bot)):
        """Send a message directly, bypassing the webhook"""
        body: Any = {}
        if await request.body():
            try:
                body = await request.json()
            except ValueError:
                body = None
        if not isinstance(body, dict):
            return JSONResponse(status_code=400, content={"error": "Invalid request body"})

        try:
            req = SendMessageRequest.model_validate(body)
        except ValidationError:
            req = None
        if req is None or not req.to_jid or not req.message:
            return JSONResponse(
                status_code=400,
                content={
                    "error": "Missing required parameters",
                    "required": ["to_jid", "message"],
                },
            )

        robot_jid = req.robot_jid or bot.config.zoom.bot_jid or DEFAULT_ROBOT_JID
        try:
            result = await bot.messenger.send(req.to_jid, req.message, robot_jid)
        except Exception as e:
            logger.error(f"Test send failed: {e}")
            return JSONResponse(
                status_code=500,
                content=SendMessageResponse(
                    status="error",
                    message="Failed to send message",
                    error=str(e),
                ).model_dump(exclude_none=True),
            )
        return SendMessageResponse(status="success", message="Message sent successfully", data=result)

    @app.get("/health", response_model=HealthResponse)
    async def health(bot: BotContext = Depends(get_bot)):
        return HealthResponse(**bot.health())

    @app.get("/oauth/callback", response_class=HTMLResponse)
    async def oauth_callback(code: Optional[str] = None, state: Optional[str] = None):
        logger.info(f"OAuth callback received: code={'provided' if code else 'missing'}, state={state}")
        if not code:
            return HTMLResponse(OAUTH_FAILURE_PAGE, status_code=400)
        return HTMLResponse(oauth_success_page(state))

    @app.get("/test", response_class=HTMLResponse)
    async def test_console():
        return TEST_CONSOLE_PAGE

    @app.get("/", response_class=HTMLResponse)
    async def root():
        return INDEX_PAGE

    return app
