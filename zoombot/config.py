"""Configuration loaded from environment variables (.env supported)."""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()

ZOOM_OAUTH_TOKEN_URL = "https://zoom.us/oauth/token"
ZOOM_CHAT_MESSAGES_URL = "https://api.zoom.us/v2/im/chat/messages"

REQUIRED_ENV_VARS = ("ZOOM_CLIENT_ID", "ZOOM_CLIENT_SECRET", "ZOOM_VERIFICATION_TOKEN")

PLACEHOLDER_DOMAIN = "your-domain.com"

IDENTITY_POLICIES = ("keep_first", "latest_install")


@dataclass
class ZoomConfig:
    client_id: str = ""
    client_secret: str = ""
    account_id: str = ""
    verification_token: str = ""
    bot_jid: str = ""
    oauth_token_url: str = ZOOM_OAUTH_TOKEN_URL
    messages_url: str = ZOOM_CHAT_MESSAGES_URL

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass
class AppConfig:
    """Typed runtime configuration."""

    port: int = 3001
    environment: str = "development"
    domain_name: str = ""
    log_file: str = "logs/run.log"
    log_level: str = "INFO"
    identity_policy: str = "keep_first"
    timezone: str = "Asia/Shanghai"
    display_name: str = "Zoom Bot"
    zoom: ZoomConfig = field(default_factory=ZoomConfig)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        policy = os.getenv("BOT_IDENTITY_POLICY", "keep_first").strip().lower()
        if policy not in IDENTITY_POLICIES:
            raise ValueError(
                f"Unsupported BOT_IDENTITY_POLICY={policy!r}, "
                f"expected one of {', '.join(IDENTITY_POLICIES)}"
            )
        return cls(
            port=int(os.getenv("PORT", "3001")),
            environment=os.getenv("APP_ENV", "development").strip().lower(),
            domain_name=os.getenv("DOMAIN_NAME", "").strip(),
            log_file=os.getenv("LOG_FILE", "logs/run.log"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            identity_policy=policy,
            timezone=os.getenv("BOT_TIMEZONE", "Asia/Shanghai"),
            display_name=os.getenv("BOT_DISPLAY_NAME", "Zoom Bot"),
            zoom=ZoomConfig(
                client_id=os.getenv("ZOOM_CLIENT_ID", ""),
                client_secret=os.getenv("ZOOM_CLIENT_SECRET", ""),
                account_id=os.getenv("ZOOM_ACCOUNT_ID", ""),
                verification_token=os.getenv("ZOOM_VERIFICATION_TOKEN", ""),
                bot_jid=os.getenv("ZOOM_BOT_JID", ""),
            ),
        )

    def missing_env_vars(self) -> List[str]:
        """Names of required variables that are not configured."""
        values = {
            "ZOOM_CLIENT_ID": self.zoom.client_id,
            "ZOOM_CLIENT_SECRET": self.zoom.client_secret,
            "ZOOM_VERIFICATION_TOKEN": self.zoom.verification_token,
        }
        return [name for name in REQUIRED_ENV_VARS if not values[name]]

    def public_urls(self) -> Optional[Dict[str, str]]:
        """Public webhook/OAuth URLs, or None when no real domain is set."""
        if not self.domain_name or self.domain_name == PLACEHOLDER_DOMAIN:
            return None
        return {
            "webhook": f"https://{self.domain_name}/webhook",
            "oauth_callback": f"https://{self.domain_name}/oauth/callback",
        }

    def config_flags(self) -> Dict[str, str]:
        """Presence flags for the health endpoint (never the values)."""

        def flag(value: str) -> str:
            return "configured" if value else "not configured"

        return {
            "port": str(self.port),
            "clientId": flag(self.zoom.client_id),
            "clientSecret": flag(self.zoom.client_secret),
            "verificationToken": flag(self.zoom.verification_token),
            "accountId": flag(self.zoom.account_id),
        }
