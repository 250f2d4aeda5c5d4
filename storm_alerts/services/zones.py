"""Region zone directory: which NWS forecast zones cover each region.

Zones are grouped by issuing forecast office and stored as contiguous
number ranges; :meth:`ZoneDirectory.zones_for` expands them into the
``<state code>Z<nnn>`` identifiers the alerts API expects.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

ZoneRange = Tuple[int, int]


class ZoneDirectoryError(RuntimeError):
    """Raised at startup when the zone directory cannot be loaded."""


# ---------------------------------------------------------------------------
# Built-in table: state -> forecast office -> inclusive zone-number ranges
# ---------------------------------------------------------------------------
STATE_OFFICE_ZONES: Dict[str, Dict[str, List[ZoneRange]]] = {
    "Alabama": {
        "BMX": [(1, 30)],
        "HUN": [(31, 50)],
        "MOB": [(51, 68)],
    },
    "Alaska": {
        "AFC": [(1, 20)],
        "AJK": [(21, 30)],
        "AFG": [(31, 40)],
    },
    "Arizona": {
        "FGZ": [(1, 20)],
        "PSR": [(21, 40)],
        "TWC": [(41, 60)],
    },
    "Arkansas": {
        "LZK": [(1, 25)],
        "TSA": [(26, 40)],
        "MEG": [(41, 50)],
        "SHV": [(51, 65)],
    },
    "California": {
        "LOX": [(1, 20)],
        "SGX": [(21, 40)],
        "STO": [(41, 60)],
        "EKA": [(61, 75)],
        "MTR": [(76, 90)],
        "HNX": [(91, 105)],
    },
    "Colorado": {
        "BOU": [(1, 25)],
        "PUB": [(26, 45)],
        "GJT": [(46, 60)],
        "CYS": [(61, 70)],
    },
    "Connecticut": {
        "BOX": [(1, 8)],
        "OKX": [(9, 16)],
    },
    "Delaware": {
        "PHI": [(1, 3)],
        "AKQ": [(4, 6)],
    },
    "Florida": {
        "JAX": [(211, 215), (221, 225)],
        "MLB": [(231, 235), (241, 245)],
        "MFL": [(251, 255), (261, 265)],
        "KEY": [(271, 276)],
        "TBW": [(281, 286)],
        "TAE": [(291, 296)],
    },
    "Georgia": {
        "FFC": [(1, 25)],
        "JAX": [(26, 35)],
        "CHS": [(36, 45)],
        "TAE": [(46, 55)],
    },
    "Hawaii": {
        "HFO": [(1, 20)],
    },
    "Idaho": {
        "BOI": [(1, 20)],
        "PIH": [(21, 30)],
        "MSO": [(31, 40)],
    },
    "Illinois": {
        "LOT": [(1, 20)],
        "ILX": [(21, 40)],
        "PAH": [(41, 50)],
        "DVN": [(51, 60)],
    },
    "Indiana": {
        "IWX": [(1, 20)],
        "IND": [(21, 40)],
        "PAH": [(41, 50)],
        "ILN": [(51, 60)],
    },
    "Iowa": {
        "DMX": [(1, 25)],
        "DVN": [(26, 40)],
        "ARX": [(41, 55)],
    },
    "Kansas": {
        "TOP": [(1, 25)],
        "ICT": [(26, 45)],
        "DDC": [(46, 60)],
        "GLD": [(61, 75)],
    },
    "Kentucky": {
        "LMK": [(1, 20)],
        "PAH": [(21, 30)],
        "JKL": [(31, 40)],
        "ILN": [(41, 50)],
    },
    "Louisiana": {
        "LIX": [(1, 20)],
        "LCH": [(21, 35)],
        "SHV": [(36, 50)],
    },
    "Maine": {
        "GYX": [(1, 20)],
        "CAR": [(21, 30)],
    },
    "Maryland": {
        "LWX": [(1, 20)],
        "PHI": [(21, 30)],
        "AKQ": [(31, 40)],
    },
    "Massachusetts": {
        "BOX": [(1, 20)],
    },
    "Michigan": {
        "GRR": [(1, 20)],
        "DTX": [(21, 35)],
        "APX": [(36, 50)],
        "MQT": [(51, 65)],
    },
    "Minnesota": {
        "MPX": [(1, 20)],
        "DLH": [(21, 35)],
        "FGF": [(36, 45)],
    },
    "Mississippi": {
        "JAN": [(1, 20)],
        "MEG": [(21, 30)],
        "MOB": [(31, 40)],
        "LIX": [(41, 50)],
    },
    "Missouri": {
        "SGF": [(1, 20)],
        "LSX": [(21, 35)],
        "EAX": [(36, 50)],
        "PAH": [(51, 60)],
    },
    "Montana": {
        "TFX": [(1, 20)],
        "MSO": [(21, 30)],
        "GGW": [(31, 40)],
        "BYZ": [(41, 50)],
    },
    "Nebraska": {
        "OAX": [(1, 20)],
        "GID": [(21, 35)],
        "LBF": [(36, 45)],
        "CYS": [(46, 50)],
    },
    "Nevada": {
        "REV": [(1, 20)],
        "VEF": [(21, 30)],
        "ELY": [(31, 40)],
    },
    "New Hampshire": {
        "GYX": [(1, 10)],
        "BOX": [(11, 20)],
    },
    "New Jersey": {
        "PHI": [(1, 20)],
        "OKX": [(21, 30)],
    },
    "New Mexico": {
        "ABQ": [(1, 20)],
        "EPZ": [(21, 30)],
        "LUB": [(31, 40)],
    },
    "New York": {
        "ALY": [(1, 20)],
        "BGM": [(21, 30)],
        "BUF": [(31, 40)],
        "OKX": [(41, 50)],
    },
    "North Carolina": {
        "RAH": [(1, 20)],
        "ILM": [(21, 30)],
        "MHX": [(31, 40)],
        "GSP": [(41, 50)],
    },
    "North Dakota": {
        "BIS": [(1, 20)],
        "FGF": [(21, 30)],
    },
    "Ohio": {
        "CLE": [(1, 20)],
        "ILN": [(21, 35)],
        "PBZ": [(36, 45)],
        "IWX": [(46, 55)],
    },
    "Oklahoma": {
        "OUN": [(211, 215), (221, 225)],
        "TSA": [(231, 235), (241, 245)],
        "DDC": [(251, 255)],
    },
    "Oregon": {
        "PQR": [(1, 20)],
        "MFR": [(21, 30)],
        "PDT": [(31, 40)],
        "BOI": [(41, 50)],
    },
    "Pennsylvania": {
        "PHI": [(1, 20)],
        "PBZ": [(21, 35)],
        "CTP": [(36, 45)],
        "BGM": [(46, 55)],
    },
    "Rhode Island": {
        "BOX": [(1, 5)],
    },
    "South Carolina": {
        "CHS": [(1, 20)],
        "CAE": [(21, 30)],
        "GSP": [(31, 40)],
    },
    "South Dakota": {
        "FSD": [(1, 20)],
        "ABR": [(21, 30)],
        "UNR": [(31, 40)],
    },
    "Tennessee": {
        "MEG": [(1, 20)],
        "MRX": [(21, 30)],
        "OHX": [(31, 40)],
        "HUN": [(41, 50)],
    },
    "Texas": {
        "LUB": [(211, 216), (221, 226), (231, 236), (241, 246), (251, 256)],
        "FWD": [(261, 266), (271, 276)],
        "HGX": [(281, 286)],
        "CRP": [(291, 296)],
    },
    "Utah": {
        "SLC": [(1, 20)],
        "GJT": [(21, 30)],
    },
    "Vermont": {
        "BTV": [(1, 10)],
        "ALY": [(11, 15)],
    },
    "Virginia": {
        "LWX": [(1, 20)],
        "AKQ": [(21, 30)],
        "RNK": [(31, 40)],
    },
    "Washington": {
        "SEW": [(1, 20)],
        "OTX": [(21, 30)],
        "PQR": [(31, 40)],
    },
    "West Virginia": {
        "LWX": [(1, 10)],
        "PBZ": [(11, 20)],
        "CTP": [(21, 30)],
        "RLX": [(31, 40)],
    },
    "Wisconsin": {
        "MKX": [(1, 20)],
        "GRB": [(21, 30)],
        "DLH": [(31, 40)],
        "MPX": [(41, 50)],
    },
    "Wyoming": {
        "CYS": [(1, 20)],
        "RIW": [(21, 30)],
        "BYZ": [(31, 40)],
    },
}

STATE_CODES: Dict[str, str] = {
    "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
    "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
    "Florida": "FL", "Georgia": "GA", "Hawaii": "HI", "Idaho": "ID",
    "Illinois": "IL", "Indiana": "IN", "Iowa": "IA", "Kansas": "KS",
    "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME", "Maryland": "MD",
    "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN", "Mississippi": "MS",
    "Missouri": "MO", "Montana": "MT", "Nebraska": "NE", "Nevada": "NV",
    "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM", "New York": "NY",
    "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH", "Oklahoma": "OK",
    "Oregon": "OR", "Pennsylvania": "PA", "Rhode Island": "RI", "South Carolina": "SC",
    "South Dakota": "SD", "Tennessee": "TN", "Texas": "TX", "Utah": "UT",
    "Vermont": "VT", "Virginia": "VA", "Washington": "WA", "West Virginia": "WV",
    "Wisconsin": "WI", "Wyoming": "WY",
}


@dataclass(frozen=True, slots=True)
class RegionZones:
    """Area code plus the ordered zone identifiers for one region."""

    code: str
    zones: Tuple[str, ...]


def format_zone_id(state_code: str, number: int) -> str:
    """Return the NWS public zone id, e.g. ``CAZ041``."""
    return f"{state_code}Z{number:03d}"


def _expand(state_code: str, offices: Mapping[str, Sequence[ZoneRange]]) -> Tuple[str, ...]:
    zones: List[str] = []
    seen = set()
    for ranges in offices.values():
        for start, end in ranges:
            for number in range(start, end + 1):
                zone_id = format_zone_id(state_code, number)
                if zone_id not in seen:
                    seen.add(zone_id)
                    zones.append(zone_id)
    return tuple(zones)


class ZoneDirectory:
    """Immutable lookup from region name to the zones that must be polled."""

    def __init__(self, entries: Mapping[str, RegionZones]):
        self._entries: Dict[str, RegionZones] = dict(entries)

    @classmethod
    def builtin(cls) -> "ZoneDirectory":
        entries = {
            state: RegionZones(STATE_CODES[state], _expand(STATE_CODES[state], offices))
            for state, offices in STATE_OFFICE_ZONES.items()
        }
        return cls(entries)

    @classmethod
    def from_json(cls, path: str | Path) -> "ZoneDirectory":
        """Load ``{"Region": {"code": "XX", "zones": ["XXZ001", ...]}}`` from *path*."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ZoneDirectoryError(f"Cannot load zone directory from {path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ZoneDirectoryError(f"Zone directory {path} must be a JSON object")

        entries: Dict[str, RegionZones] = {}
        for region, entry in raw.items():
            try:
                entries[region] = RegionZones(str(entry["code"]), tuple(entry.get("zones", ())))
            except (KeyError, TypeError, AttributeError) as exc:
                raise ZoneDirectoryError(f"Invalid zone entry for {region!r}: {exc}") from exc
        return cls(entries)

    def zones_for(self, region: str) -> List[str]:
        """Return the ordered zone ids for *region* (empty if unconfigured)."""
        entry = self._entries.get(region)
        if entry is None or not entry.zones:
            logger.info("No forecast zones configured for %s", region)
            return []
        return list(entry.zones)

    def area_code_for(self, region: str) -> Optional[str]:
        entry = self._entries.get(region)
        return entry.code if entry else None

    def regions(self) -> List[str]:
        return list(self._entries)


def load_zone_directory(path: str | Path | None = None) -> ZoneDirectory:
    """Return the JSON directory at *path*, or the built-in table when unset."""
    if path:
        directory = ZoneDirectory.from_json(path)
        logger.info("Loaded zone directory for %d regions from %s", len(directory.regions()), path)
        return directory
    return ZoneDirectory.builtin()

__all__ = [
    "ZoneDirectory",
    "ZoneDirectoryError",
    "RegionZones",
    "STATE_CODES",
    "STATE_OFFICE_ZONES",
    "format_zone_id",
    "load_zone_directory",
]
