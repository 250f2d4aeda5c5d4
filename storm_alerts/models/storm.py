"""Classified storm records, per-region digests and delivery bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

HAIL = "hail"
WIND = "wind"
CATEGORIES: Tuple[str, str] = (HAIL, WIND)


@dataclass(frozen=True, slots=True)
class DamageEstimate:
    """Estimated roofing market opportunity for one storm."""

    potential_jobs: int
    avg_job_value: int

    @property
    def total_market_value(self) -> int:
        return self.potential_jobs * self.avg_job_value

    def to_document(self) -> Dict[str, int]:
        return {
            "potential_jobs": self.potential_jobs,
            "avg_job_value": self.avg_job_value,
            "total_market_value": self.total_market_value,
        }


@dataclass(frozen=True, slots=True)
class QualifyingStorm:
    """An alert that passed classification and will trigger a notification.

    Category flags are computed once by the classifier; at least one of
    ``is_hail``, ``is_wind`` or ``is_hurricane`` is always set.
    """

    event_type: str
    area_description: str
    headline: str
    description: str
    severity_score: int
    hail_inches: float
    wind_mph: float
    is_hail: bool
    is_wind: bool
    is_hurricane: bool
    damage_estimate: DamageEstimate
    recommendations: Tuple[str, ...]
    region: str
    is_tornado: bool = False
    zip_codes: Tuple[str, ...] = ()
    onset_time: Optional[datetime] = None
    expires_time: Optional[datetime] = None
    alert_id: str = ""
    severity_label: str = ""

    def __post_init__(self) -> None:
        if not (self.is_hail or self.is_wind or self.is_hurricane):
            raise ValueError("QualifyingStorm must qualify on hail, wind or hurricane")
        if self.is_tornado:
            raise ValueError("Tornado bulletins never qualify")
        if not 1 <= self.severity_score <= 10:
            raise ValueError(f"severity_score out of range: {self.severity_score}")

    def to_document(self) -> Dict[str, Any]:
        """Return a MongoDB-ready representation."""
        return {
            "alert_id": self.alert_id,
            "region": self.region,
            "event_type": self.event_type,
            "area_description": self.area_description,
            "headline": self.headline,
            "description": self.description,
            "severity_label": self.severity_label,
            "severity_score": self.severity_score,
            "hail_inches": self.hail_inches,
            "wind_mph": self.wind_mph,
            "is_hail": self.is_hail,
            "is_wind": self.is_wind,
            "is_hurricane": self.is_hurricane,
            "is_tornado": self.is_tornado,
            "damage_estimate": self.damage_estimate.to_document(),
            "recommendations": list(self.recommendations),
            "zip_codes": list(self.zip_codes),
            "onset_time": self.onset_time,
            "expires_time": self.expires_time,
        }


@dataclass(slots=True)
class RegionDigest:
    """Per-region, per-category aggregation of one cycle's qualifying storms."""

    region: str
    category: str
    max_hail_inches: float = 0.0
    max_wind_mph: float = 0.0
    affected_areas: List[str] = field(default_factory=list)
    member_storms: List[QualifyingStorm] = field(default_factory=list)

    @property
    def total_market_value(self) -> int:
        return sum(s.damage_estimate.total_market_value for s in self.member_storms)


@dataclass(frozen=True, slots=True)
class Recipient:
    """A subscribed company contact."""

    email: str
    company_name: str = ""
    contact_name: str = ""
    alert_preferences: str = "both"

    def wants(self, category: str) -> bool:
        return self.alert_preferences in ("both", category)


@dataclass(slots=True)
class DeliveryResult:
    """Outcome of one digest fan-out."""

    success_count: int = 0
    error_count: int = 0
    failed: List[str] = field(default_factory=list)

__all__ = [
    "HAIL",
    "WIND",
    "CATEGORIES",
    "DamageEstimate",
    "QualifyingStorm",
    "RegionDigest",
    "Recipient",
    "DeliveryResult",
]
