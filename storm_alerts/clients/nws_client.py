"""Shared HTTP session for National Weather Service API calls."""

from __future__ import annotations

import math

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import InvalidHeader
from urllib3.util.retry import Retry

from ..config import (
    MAX_RETRIES,
    NWS_USER_AGENT,
    RATE_LIMIT_DEFAULT_WAIT_SECONDS,
    RETRY_BACKOFF_SECONDS,
)

RETRY_STATUS_CODES = (429, *range(500, 600))

_session: requests.Session | None = None


class NWSRetry(Retry):
    """Retry policy for api.weather.gov.

    Rate-limited responses wait for ``Retry-After`` (or the default wait when
    the header is missing or unusable); server errors, timeouts and dropped
    connections back off linearly by attempt.
    """

    def get_retry_after(self, response) -> float | None:
        rate_limited = response.status == 429
        try:
            seconds = super().get_retry_after(response)
        except InvalidHeader:
            seconds = None
        if seconds is None or not math.isfinite(seconds) or seconds < 0:
            return RATE_LIMIT_DEFAULT_WAIT_SECONDS if rate_limited else None
        return seconds

    def parse_retry_after(self, retry_after: str) -> float:
        try:
            return float(retry_after)
        except ValueError:
            return super().parse_retry_after(retry_after)

    def get_backoff_time(self) -> float:
        return RETRY_BACKOFF_SECONDS * len(self.history)


def build_retry(max_retries: int = MAX_RETRIES) -> NWSRetry:
    return NWSRetry(
        total=max_retries,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=frozenset({"GET"}),
        respect_retry_after_header=True,
        raise_on_status=True,
    )


def get_nws_session() -> requests.Session:
    """Return a singleton :class:`requests.Session` configured for api.weather.gov.

    The NWS API rejects requests without a contact-identifying User-Agent.
    """
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update(
            {
                "User-Agent": NWS_USER_AGENT,
                "Accept": "application/geo+json",
            }
        )
        adapter = HTTPAdapter(max_retries=build_retry())
        _session.mount("https://", adapter)
        _session.mount("http://", adapter)
    return _session

__all__ = ["get_nws_session", "build_retry", "NWSRetry", "RETRY_STATUS_CODES"]
