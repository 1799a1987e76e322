#!/usr/bin/env python3
"""Server entrypoint: logging, startup checks and the uvicorn run loop.

uvicorn closes the listener on SIGINT/SIGTERM before the process exits.
Uncaught exceptions and unhandled asynchronous errors are logged and end
the process with a non-zero status.
"""

import asyncio
import logging
import platform
import sys

import uvicorn

from zoombot import __version__
from zoombot.adapters.web import create_app
from zoombot.config import AppConfig
from zoombot.logging_config import setup_logging

logger = logging.getLogger("zoombot.main")


def log_startup(config: AppConfig) -> None:
    logger.info("=" * 50)
    logger.info(f"Zoom Chat Bot {__version__} starting...")
    logger.info(f"Python version: {platform.python_version()}")
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Port: {config.port}")


def check_environment(config: AppConfig) -> bool:
    """Log missing required variables; the server still starts without them."""
    missing = config.missing_env_vars()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        logger.error("Please check your .env file configuration")
        return False
    logger.info("Environment variables check passed")
    return True


def log_endpoints(config: AppConfig) -> None:
    logger.info(f"Webhook URL: http://localhost:{config.port}/webhook")
    logger.info(f"Test Console: http://localhost:{config.port}/test")
    logger.info(f"Health Check: http://localhost:{config.port}/health")
    urls = config.public_urls()
    if urls:
        logger.info(f"Public Webhook URL: {urls['webhook']}")
        logger.info(f"Public OAuth Callback: {urls['oauth_callback']}")
    logger.info("=" * 50)


def _log_uncaught(exc_type, exc, tb) -> None:
    logger.critical(f"Uncaught Exception: {exc}", exc_info=(exc_type, exc, tb))


async def serve(config: AppConfig) -> int:
    """Run the HTTP server until shutdown; returns the process exit status."""
    server = uvicorn.Server(uvicorn.Config(create_app(config), host="0.0.0.0", port=config.port))
    failed = False

    def on_loop_error(loop, context):
        nonlocal failed
        exc = context.get("exception")
        logger.critical(f"Unhandled asynchronous error: {context.get('message')}", exc_info=exc)
        failed = True
        server.should_exit = True

    loop = asyncio.get_running_loop()
    previous = loop.get_exception_handler()
    loop.set_exception_handler(on_loop_error)
    try:
        await server.serve()
    finally:
        loop.set_exception_handler(previous)
    return 1 if failed else 0


def main() -> None:
    config = AppConfig.from_env()
    setup_logging(config.log_level, config.log_file)
    sys.excepthook = _log_uncaught

    log_startup(config)
    if not check_environment(config):
        logger.warning("Server started but configuration is incomplete")
        logger.warning("The bot may not function properly without proper Zoom credentials")
    log_endpoints(config)

    try:
        status = asyncio.run(serve(config))
    except SystemExit as e:
        # uvicorn exits with status 1 when it cannot bind
        if e.code:
            logger.error(
                f"Server failed to start on port {config.port}. If the port is already in use, "
                f"set PORT to a different value, e.g. PORT={config.port + 1}"
            )
        raise

    if status:
        sys.exit(status)
    logger.info("Server closed successfully")


if __name__ == "__main__":
    main()
