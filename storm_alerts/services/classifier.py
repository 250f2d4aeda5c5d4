"""Roofing-campaign qualification of a single alert."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..config import HAIL_THRESHOLD_INCHES, WIND_THRESHOLD_MPH
from ..models import DamageEstimate, ExtractedHazard, QualifyingStorm, RawAlert
from ..utils.text_cleaning import find_zip_tokens

logger = logging.getLogger(__name__)

TORNADO_PATTERN = re.compile(r"tornado", re.IGNORECASE)
HURRICANE_PATTERN = re.compile(r"hurricane|tropical storm", re.IGNORECASE)

HURRICANE = "hurricane"
HAIL = "hail"
WIND = "wind"

# Ranked by typical claim value, not meteorological intensity
SEVERITY_SCORES: Dict[str, int] = {HURRICANE: 9, HAIL: 8, WIND: 7}

DAMAGE_TABLE: Dict[str, DamageEstimate] = {
    HURRICANE: DamageEstimate(potential_jobs=300, avg_job_value=12000),
    HAIL: DamageEstimate(potential_jobs=100, avg_job_value=9000),
    WIND: DamageEstimate(potential_jobs=50, avg_job_value=7000),
}

BASELINE_RECOMMENDATION = "Deploy canvassing teams to affected zip codes"
CATEGORY_RECOMMENDATIONS: Dict[str, Tuple[str, ...]] = {
    HURRICANE: (
        "Prepare for emergency tarping and restoration demand",
        "Contact insurance adjusters for immediate inspections",
        "Mobilize emergency response teams",
    ),
    HAIL: (
        "Expect strong approval rate for hail claims",
        "Document hail size with photos and measurements",
        "Focus on metal surfaces and soft metals for damage evidence",
    ),
    WIND: (
        "Inspect for wind uplift and gutter damage",
        "Check for missing shingles and flashing",
        "Document wind speed from weather reports",
    ),
}

# (minimum inches, display name), largest first
HAIL_SIZE_NAMES: Tuple[Tuple[float, str], ...] = (
    (4.5, "Grapefruit"),
    (4.0, "Softball"),
    (2.75, "Baseball"),
    (2.5, "Tennis Ball"),
    (2.0, "Hen Egg"),
    (1.75, "Golf Ball"),
    (1.5, "Ping Pong Ball"),
    (1.25, "Half Dollar"),
    (1.0, "Quarter"),
    (0.88, "Nickel"),
    (0.75, "Penny"),
    (0.5, "Marble"),
    (0.25, "Pea"),
)


def hail_size_label(inches: float) -> str:
    """Return the common name NWS uses for a hail diameter."""
    for minimum, name in HAIL_SIZE_NAMES:
        if inches >= minimum:
            return name
    return "Small"


def is_tornado_alert(alert: RawAlert) -> bool:
    return bool(TORNADO_PATTERN.search(alert.event_type) or TORNADO_PATTERN.search(alert.headline))


def extract_zip_codes(alert: RawAlert) -> Tuple[str, ...]:
    """Best-effort affected-area codes: geocodes, else 5-digit narrative tokens."""
    if alert.geocodes:
        return tuple(alert.geocodes)
    return tuple(find_zip_tokens(alert.description))


def _recommendations(is_hurricane: bool, is_hail: bool, is_wind: bool) -> Tuple[str, ...]:
    recs: List[str] = [BASELINE_RECOMMENDATION]
    if is_hurricane:
        recs.extend(CATEGORY_RECOMMENDATIONS[HURRICANE])
    if is_hail:
        recs.extend(CATEGORY_RECOMMENDATIONS[HAIL])
    if is_wind:
        recs.extend(CATEGORY_RECOMMENDATIONS[WIND])
    return tuple(recs)


def classify(alert: RawAlert, hazard: ExtractedHazard, region: str) -> Optional[QualifyingStorm]:
    """Return a :class:`QualifyingStorm`, or ``None`` when the alert is rejected.

    Tornado bulletins are rejected before any metric is considered.
    """
    if is_tornado_alert(alert):
        logger.info("Rejected tornado bulletin '%s' for %s", alert.event_type, alert.area_description)
        return None

    is_hurricane = bool(HURRICANE_PATTERN.search(alert.event_type))
    is_hail = hazard.hail_inches >= HAIL_THRESHOLD_INCHES
    is_wind = hazard.wind_mph >= WIND_THRESHOLD_MPH

    if not (is_hurricane or is_hail or is_wind):
        logger.debug(
            "Rejected '%s' (hail=%.2fin wind=%.0fmph): below roofing damage thresholds",
            alert.event_type, hazard.hail_inches, hazard.wind_mph,
        )
        return None

    category = HURRICANE if is_hurricane else HAIL if is_hail else WIND

    storm = QualifyingStorm(
        event_type=alert.event_type,
        area_description=alert.area_description,
        headline=alert.headline,
        description=alert.description,
        severity_score=SEVERITY_SCORES[category],
        hail_inches=hazard.hail_inches,
        wind_mph=hazard.wind_mph,
        is_hail=is_hail,
        is_wind=is_wind,
        is_hurricane=is_hurricane,
        damage_estimate=DAMAGE_TABLE[category],
        recommendations=_recommendations(is_hurricane, is_hail, is_wind),
        region=region,
        zip_codes=extract_zip_codes(alert),
        onset_time=alert.onset_time,
        expires_time=alert.expires_time,
        alert_id=alert.alert_id,
        severity_label=alert.severity_label,
    )
    logger.info(
        "Qualified '%s' in %s as %s (score %d, est. $%s)",
        alert.event_type, alert.area_description or region, category,
        storm.severity_score, f"{storm.damage_estimate.total_market_value:,}",
    )
    return storm

__all__ = [
    "classify",
    "is_tornado_alert",
    "extract_zip_codes",
    "hail_size_label",
    "SEVERITY_SCORES",
    "DAMAGE_TABLE",
    "BASELINE_RECOMMENDATION",
]
