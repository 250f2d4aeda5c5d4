"""Shared HTTP session for the Resend email API."""

from __future__ import annotations

import requests

from ..config import RESEND_API_KEY

_session: requests.Session | None = None


def get_resend_session() -> requests.Session:
    """Return a singleton :class:`requests.Session` authorised for Resend."""
    global _session
    if _session is None:
        if not RESEND_API_KEY:
            raise EnvironmentError("RESEND_API_KEY is not set in environment variables")
        _session = requests.Session()
        _session.headers.update(
            {
                "Authorization": f"Bearer {RESEND_API_KEY}",
                "Content-Type": "application/json",
            }
        )
    return _session

__all__ = ["get_resend_session"]
