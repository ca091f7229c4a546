"""Settings for the campaign app, read once at startup."""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


DEFAULT_CIVIC_API_URL = "https://www.googleapis.com/civicinfo/v2/representatives"
DEFAULT_EMAIL_SENDER = "Hemp Action Campaign <action@dontbanhemp.org>"
DEFAULT_BAN_EFFECTIVE_DATE = "2026-11-12T00:00:00-05:00"  # Nov 12, 2026, EST
DEFAULT_HTTP_TIMEOUT = 10.0

STATS_REFRESH_SECONDS = 30
COUNTDOWN_REFRESH_SECONDS = 1

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    civic_api_key: Optional[str] = None
    civic_api_url: str = DEFAULT_CIVIC_API_URL
    resend_api_key: Optional[str] = None
    email_sender: str = DEFAULT_EMAIL_SENDER
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    ban_effective_date: datetime = datetime.fromisoformat(DEFAULT_BAN_EFFECTIVE_DATE)
    log_level: str = "INFO"

    def require(self, *names: str) -> None:
        """Raise ConfigurationError naming every unset attribute in ``names``."""
        missing = [name for name in names if not getattr(self, name)]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}"
            )


def _lookup(name: str, environ: Mapping[str, str], secrets: Optional[Mapping[str, Any]]) -> Optional[str]:
    # Environment first, then secrets
    value = environ.get(name)
    if value:
        return value
    if secrets is None:
        return None
    try:
        value = secrets.get(name)
    except (FileNotFoundError, KeyError):
        return None
    return str(value) if value else None


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    secrets: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """
    Build Settings from the process environment and optional Streamlit secrets.

    Args:
        environ: Mapping to read instead of ``os.environ`` (tests)
        secrets: Fallback mapping, usually ``st.secrets``

    Returns:
        Settings with every value resolved; missing credentials stay None
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    def get(name: str) -> Optional[str]:
        return _lookup(name, environ, secrets)

    timeout_raw = get("HTTP_TIMEOUT")
    try:
        http_timeout = float(timeout_raw) if timeout_raw else DEFAULT_HTTP_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"HTTP_TIMEOUT must be a number, got {timeout_raw!r}")

    ban_raw = get("BAN_EFFECTIVE_DATE") or DEFAULT_BAN_EFFECTIVE_DATE
    try:
        ban_effective_date = datetime.fromisoformat(ban_raw)
    except ValueError:
        raise ConfigurationError(f"BAN_EFFECTIVE_DATE is not an ISO-8601 timestamp: {ban_raw!r}")
    if ban_effective_date.tzinfo is None:
        raise ConfigurationError("BAN_EFFECTIVE_DATE must include a UTC offset")

    return Settings(
        supabase_url=get("SUPABASE_URL"),
        supabase_key=get("SUPABASE_SERVICE_ROLE_KEY") or get("SUPABASE_KEY"),
        civic_api_key=get("GOOGLE_CIVIC_API_KEY"),
        civic_api_url=get("GOOGLE_CIVIC_API_URL") or DEFAULT_CIVIC_API_URL,
        resend_api_key=get("RESEND_API_KEY"),
        email_sender=get("EMAIL_SENDER") or DEFAULT_EMAIL_SENDER,
        http_timeout=http_timeout,
        ban_effective_date=ban_effective_date,
        log_level=(get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
