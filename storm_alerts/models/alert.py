"""Definition of the upstream alert dataclasses used throughout the project."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..utils.datetime_utils import parse_timestamp

# Identity used to collapse duplicate bulletins: (event type, area, onset)
DedupeKey = Tuple[str, str, Optional[datetime]]


@dataclass(frozen=True, slots=True)
class RawAlert:
    """One NWS bulletin as fetched from the alerts API."""

    event_type: str
    headline: str = ""
    description: str = ""
    area_description: str = ""
    severity_label: str = ""
    onset_time: Optional[datetime] = None
    expires_time: Optional[datetime] = None
    geocodes: Tuple[str, ...] = ()
    alert_id: str = ""
    sent_time: Optional[datetime] = None
    parameters: Mapping[str, List[str]] = field(default_factory=dict, hash=False)

    @property
    def dedupe_key(self) -> DedupeKey:
        return (self.event_type, self.area_description, self.onset_time)

    @classmethod
    def from_feature(cls, feature: Dict[str, Any]) -> "RawAlert":
        """Build a :class:`RawAlert` from one GeoJSON feature of the NWS API.

        Raises ``ValueError`` when the feature has no event type.
        """
        props = feature.get("properties") or {}
        event_type = props.get("event")
        if not event_type:
            raise ValueError(f"NWS feature without event type: {feature.get('id')!r}")

        sent = parse_timestamp(props.get("sent"))
        onset = parse_timestamp(props.get("onset")) or parse_timestamp(props.get("effective")) or sent
        expires = parse_timestamp(props.get("expires")) or parse_timestamp(props.get("ends"))
        geocode = props.get("geocode") or {}

        return cls(
            event_type=event_type,
            headline=props.get("headline") or "",
            description=props.get("description") or "",
            area_description=props.get("areaDesc") or "",
            severity_label=props.get("severity") or "",
            onset_time=onset,
            expires_time=expires,
            geocodes=tuple(geocode.get("UGC") or ()),
            alert_id=props.get("id") or feature.get("id") or "",
            sent_time=sent,
            parameters=dict(props.get("parameters") or {}),
        )


@dataclass(frozen=True, slots=True)
class ExtractedHazard:
    """Best-estimate hazard metrics derived from one bulletin's text."""

    hail_inches: float = 0.0
    wind_mph: float = 0.0
    hail_source: Optional[str] = None
    wind_source: Optional[str] = None

__all__ = ["RawAlert", "ExtractedHazard", "DedupeKey"]
