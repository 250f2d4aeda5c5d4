"""Alert acquisition from the NWS alerts API.

Zones are polled one at a time with a fixed inter-request delay. Transient
failures are retried by the session (see :func:`~storm_alerts.clients.build_retry`),
so every request unit (one zone, or one region's broad history query) has
its own bounded retry budget. A unit that still fails is logged and treated
as "no alerts" so that sibling units are unaffected.
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

import requests
from requests.exceptions import RetryError

from ..config import (
    HAIL_THRESHOLD_INCHES,
    HISTORY_PAGE_LIMIT,
    MAX_HISTORY_PAGES,
    NWS_BASE_URL,
    RECENT_HISTORY_HOURS,
    REGION_REQUEST_TIMEOUT_SECONDS,
    REQUEST_DELAY_SECONDS,
    WIND_THRESHOLD_MPH,
    ZONE_REQUEST_TIMEOUT_SECONDS,
)
from ..models import ExtractedHazard, RawAlert
from ..utils.datetime_utils import get_current_timestamp
from .deduplication import dedupe
from .extraction import extract_from_alert
from .zones import ZoneDirectory

logger = logging.getLogger(__name__)

RELEVANT_KEYWORDS = re.compile(r"hail|wind|storm|hurricane", re.IGNORECASE)


def is_roof_damage_relevant(alert: RawAlert, hazard: ExtractedHazard) -> bool:
    """Return ``True`` if *alert* could plausibly involve roof damage."""
    if hazard.hail_inches >= HAIL_THRESHOLD_INCHES or hazard.wind_mph >= WIND_THRESHOLD_MPH:
        return True
    return any(
        RELEVANT_KEYWORDS.search(text)
        for text in (alert.event_type, alert.headline, alert.description)
    )


def was_active_within(alert: RawAlert, start: datetime, end: datetime) -> bool:
    """Return ``True`` if the alert's onset..expires window intersects [start, end].

    A missing expiry is treated as still in effect; an alert with no onset
    (or effective/sent fallback) cannot be placed in time and is excluded.
    """
    if alert.onset_time is None:
        return False
    if alert.onset_time > end:
        return False
    return alert.expires_time is None or alert.expires_time >= start


class AlertFetcher:
    """Retrieves and pre-filters raw alerts for one region at a time."""

    def __init__(
        self,
        session: requests.Session,
        directory: ZoneDirectory,
        *,
        base_url: str = NWS_BASE_URL,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = get_current_timestamp,
        request_delay: float = REQUEST_DELAY_SECONDS,
    ):
        self.session = session
        self.directory = directory
        self.base_url = base_url.rstrip("/")
        self.sleep = sleep
        self.clock = clock
        self.request_delay = request_delay

    # ------------------------------------------------------------------
    # HTTP; transient failures are retried by the session's adapter
    # ------------------------------------------------------------------

    def _get_json(
        self,
        url: str,
        *,
        unit: str,
        timeout: float,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """GET *url* and return its JSON object; ``None`` once the unit is given up."""
        try:
            response = self.session.get(url, params=params, timeout=timeout)
        except RetryError as exc:
            logger.error("Giving up on %s after retries: %s", unit, exc)
            return None
        except requests.RequestException as exc:
            logger.error("Request for %s failed: %s", unit, exc)
            return None

        if response.status_code >= 400:
            logger.error(
                "NWS API error for %s: %s - %s", unit, response.status_code, response.text[:200]
            )
            return None
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Invalid JSON from NWS for %s: %s", unit, exc)
            return None
        if not isinstance(data, dict):
            logger.error("Unexpected %s payload from NWS for %s", type(data).__name__, unit)
            return None
        return data

    @staticmethod
    def _parse_features(data: Dict[str, Any], unit: str) -> List[RawAlert]:
        alerts: List[RawAlert] = []
        for feature in data.get("features") or []:
            try:
                alerts.append(RawAlert.from_feature(feature))
            except (ValueError, TypeError, AttributeError) as exc:
                logger.warning("Skipping malformed alert from %s: %s", unit, exc)
        return alerts

    @staticmethod
    def _relevant(alerts: List[RawAlert]) -> List[RawAlert]:
        return [a for a in alerts if is_roof_damage_relevant(a, extract_from_alert(a))]

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def fetch_active(self, region: str) -> List[RawAlert]:
        """Currently active, roof-relevant alerts across every zone of *region*."""
        zones = self.directory.zones_for(region)
        if not zones:
            return []

        collected: List[RawAlert] = []
        for zone in zones:
            self.sleep(self.request_delay)
            logger.debug("Fetching active alerts for zone %s", zone)
            data = self._get_json(
                f"{self.base_url}/alerts/active/zone/{zone}",
                unit=f"zone {zone}",
                timeout=ZONE_REQUEST_TIMEOUT_SECONDS,
            )
            if data is None:
                continue
            alerts = self._relevant(self._parse_features(data, f"zone {zone}"))
            if alerts:
                logger.info("Found %d relevant alerts for zone %s", len(alerts), zone)
            collected.extend(alerts)

        logger.info("Active alerts for %s: %d", region, len(collected))
        return collected

    def fetch_recent_historical(self, region: str, hours_back: float) -> List[RawAlert]:
        """Alerts for *region* that were in effect within the last *hours_back* hours."""
        area = self.directory.area_code_for(region)
        if not area:
            logger.info("No area code configured for %s", region)
            return []

        now = self.clock()
        cutoff = now - timedelta(hours=hours_back)
        unit = f"region {region}"

        url: Optional[str] = f"{self.base_url}/alerts"
        params: Optional[Dict[str, Any]] = {"area": area, "limit": HISTORY_PAGE_LIMIT}
        raw: List[RawAlert] = []
        pages = 0
        while url and pages < MAX_HISTORY_PAGES:
            data = self._get_json(url, unit=unit, params=params, timeout=REGION_REQUEST_TIMEOUT_SECONDS)
            if data is None:
                break
            pages += 1
            raw.extend(self._parse_features(data, unit))
            # the "next" link already carries the query string
            url = (data.get("pagination") or {}).get("next")
            params = None
            if url:
                self.sleep(self.request_delay)

        recent = [
            a for a in self._relevant(raw) if was_active_within(a, cutoff, now)
        ]
        logger.info(
            "Recent alerts for %s (past %sh): %d of %d", region, hours_back, len(recent), len(raw)
        )
        return recent

    def fetch_comprehensive(self, region: str) -> List[RawAlert]:
        """Active plus recently expired alerts for *region*, deduplicated."""
        active = self.fetch_active(region)
        historical = self.fetch_recent_historical(region, RECENT_HISTORY_HOURS)
        combined = dedupe(active + historical)
        logger.info(
            "Comprehensive results for %s: %d active, %d recent, %d unique",
            region, len(active), len(historical), len(combined),
        )
        return combined

__all__ = ["AlertFetcher", "is_roof_damage_relevant", "was_active_within"]
