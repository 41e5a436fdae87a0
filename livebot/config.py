"""Client configuration loaded once from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root
_project_root = Path(__file__).parent.parent
load_dotenv(_project_root / ".env")

_WINDOWS_CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/123.0.0.0 Safari/537.36"
)

_MAC_CHROME_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/119.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class ShopeeSettings:
    """Fixed browser identity used against the Shopee web API.

    The fingerprint strings and the anti-abuse token identify this client to
    Shopee's anti-abuse system. They are sent verbatim and never derived
    from input.
    """

    origin: str = "https://shopee.co.id"
    user_agent: str = _WINDOWS_CHROME_UA
    accept_language: str = "en-US,en;q=0.9"

    # qrcode_login only
    login_user_agent: str = _MAC_CHROME_UA
    login_referer_path: str = "/buyer/login/qr?next=https%3A%2F%2Fshopee.co.id%2F"
    device_sz_fingerprint: str = (
        "Eci2goR2Eb+MxmnU3gKNBQ==|U4oBUb+lXscV+6i8liMV/0lL2YjLYCw6ZgvAg3AVpmc="
        "|WYw++VlzfflxOp1j|08|3"
    )
    security_device_fingerprint: str = (
        "vRr1CLNxsx/YWsLqNCAeGQ==|3UI1dXTNSZRQkHYpKyn3MGV94+BUZv/37sidjlGODXY="
        "|77wWZwahX4xYgzK9BHP57A=="
    )
    anti_abuse_token: str = (
        "LKhci5u+IZWG5pLadxISkw==|KnTeDESKZrvJIH7v/k87MkjZgllq1OIb4WNTbBMjqiX47"
        "UKmLiYT/5gQveB5AcnnWrX7QOH0K22Cyg==|WYw++VlzfflxOp1j|08|3"
    )
    sdk_version: str = "3.3.0-2&1.6.6"
    language: str = "id"
    platform: str = '"macOS"'

    @property
    def referer(self) -> str:
        return f"{self.origin}/"

    @property
    def login_referer(self) -> str:
        return f"{self.origin}{self.login_referer_path}"

    def browser_headers(self) -> dict[str, str]:
        """Headers sent on every Shopee call."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json, text/plain",
            "Accept-Language": self.accept_language,
            "Origin": self.origin,
            "Referer": self.referer,
        }

    def login_headers(self) -> dict[str, str]:
        """Extra browser-emulation headers for the token exchange."""
        return {
            "User-Agent": self.login_user_agent,
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Sz-Sdk-Version": self.sdk_version,
            "X-Api-Source": "pc",
            "X-Shopee-Language": self.language,
            "X-Requested-With": "XMLHttpRequest",
            "Af-Ac-Enc-Sz-Token": self.anti_abuse_token,
            "Sec-Ch-Ua-Platform": self.platform,
            "Origin": self.origin,
            "Referer": self.login_referer,
        }


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, passed into each client constructor."""

    backend_url: str = "https://livekenceng.com/api"
    app_identifier: str = "botgacor"
    # Response bodies at or above this length are logged as a prefix
    log_body_limit: int = 500
    # None: the core enforces no timeout
    request_timeout: Optional[float] = None
    log_level: str = "INFO"
    shopee: ShopeeSettings = field(default_factory=ShopeeSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from environment variables (``.env`` included)."""
        timeout = os.getenv("LIVEBOT_REQUEST_TIMEOUT", "")
        return cls(
            backend_url=os.getenv("LIVEBOT_BACKEND_URL", cls.backend_url).rstrip("/"),
            app_identifier=os.getenv("LIVEBOT_APP_IDENTIFIER", cls.app_identifier),
            log_body_limit=int(os.getenv("LIVEBOT_LOG_BODY_LIMIT", str(cls.log_body_limit))),
            request_timeout=float(timeout) if timeout else None,
            log_level=os.getenv("LIVEBOT_LOG_LEVEL", cls.log_level),
            shopee=ShopeeSettings(
                origin=os.getenv("SHOPEE_ORIGIN", ShopeeSettings.origin).rstrip("/"),
            ),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process settings, building them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
