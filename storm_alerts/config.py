"""Centralised configuration for storm_alerts.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance.
"""

from __future__ import annotations

import os
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()

# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
MONGODB_URI: str | None = os.getenv("MONGODB_URI")
RESEND_API_KEY: str | None = os.getenv("RESEND_API_KEY")
UNSUBSCRIBE_SECRET: str = os.getenv("UNSUBSCRIBE_SECRET", "change-me")

# ---------------------------------------------------------------------------
# NWS alert source
# ---------------------------------------------------------------------------
NWS_BASE_URL: str = "https://api.weather.gov"
NWS_USER_AGENT: str = os.getenv(
    "NWS_USER_AGENT", "StormAlertSystem/1.0 (contact@stormalertsystem.com)"
)
ZONE_DIRECTORY_PATH: str | None = os.getenv("ZONE_DIRECTORY_PATH")

ZONE_REQUEST_TIMEOUT_SECONDS: float = 10.0
REGION_REQUEST_TIMEOUT_SECONDS: float = 15.0
REQUEST_DELAY_SECONDS: float = 1.0
REGION_DELAY_SECONDS: float = 2.0
MAX_RETRIES: int = 3
RATE_LIMIT_DEFAULT_WAIT_SECONDS: float = 60.0
RETRY_BACKOFF_SECONDS: float = 2.0
HISTORY_PAGE_LIMIT: int = 500
MAX_HISTORY_PAGES: int = 5
RECENT_HISTORY_HOURS: int = 2

# ---------------------------------------------------------------------------
# Roofing qualification thresholds
# ---------------------------------------------------------------------------
HAIL_THRESHOLD_INCHES: float = 1.0
WIND_THRESHOLD_MPH: float = 58.0

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "storm_alerts")
HISTORY_RETENTION_DAYS: int = int(os.getenv("HISTORY_RETENTION_DAYS", "365"))

# ---------------------------------------------------------------------------
# Email delivery
# ---------------------------------------------------------------------------
RESEND_API_URL: str = "https://api.resend.com/emails"
EMAIL_FROM_ADDRESS: str = os.getenv(
    "EMAIL_FROM_ADDRESS", "Storm Alert Pro <alerts@stormalertsystem.com>"
)
PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:3000")
EMAIL_REQUEST_TIMEOUT_SECONDS: float = 15.0

# ---------------------------------------------------------------------------
# Miscellaneous
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "MONGODB_URI",
    "RESEND_API_KEY",
    "UNSUBSCRIBE_SECRET",
    # nws
    "NWS_BASE_URL",
    "NWS_USER_AGENT",
    "ZONE_DIRECTORY_PATH",
    "ZONE_REQUEST_TIMEOUT_SECONDS",
    "REGION_REQUEST_TIMEOUT_SECONDS",
    "REQUEST_DELAY_SECONDS",
    "REGION_DELAY_SECONDS",
    "MAX_RETRIES",
    "RATE_LIMIT_DEFAULT_WAIT_SECONDS",
    "RETRY_BACKOFF_SECONDS",
    "HISTORY_PAGE_LIMIT",
    "MAX_HISTORY_PAGES",
    "RECENT_HISTORY_HOURS",
    # thresholds
    "HAIL_THRESHOLD_INCHES",
    "WIND_THRESHOLD_MPH",
    # persistence
    "MONGODB_DATABASE",
    "HISTORY_RETENTION_DAYS",
    # email
    "RESEND_API_URL",
    "EMAIL_FROM_ADDRESS",
    "PUBLIC_BASE_URL",
    "EMAIL_REQUEST_TIMEOUT_SECONDS",
    # misc
    "LOG_LEVEL",
]
