"""Hazard extraction from free-text NWS bulletins.

Each hazard (hail diameter, peak wind) is resolved by an ordered tuple of
named strategies. The first strategy that yields a value wins; within one
strategy the maximum of all matches is taken. A lower tier never overrides
a higher tier that produced a match.

1. ``structured`` - upstream-generated fields: the API ``parameters`` block
   and machine-formatted lines such as ``MAX HAIL SIZE...1.00 IN``.
2. ``phrased``    - narrative phrases tied to the hazard word, e.g.
   ``hail up to 1.50 inches`` or ``wind gusts up to 70 mph``.
3. ``bare_mph``   - wind only, and only when the event type or headline is
   about wind/storms: any ``NN mph`` in the text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..models import ExtractedHazard
from ..utils.text_cleaning import combine_bulletin_text, normalize_bulletin_text

logger = logging.getLogger(__name__)

# A number standing on its own; never starts inside "..." or another number
_NUMBER = r"(?<!\d)(\d+(?:\.\d+)?|(?<![.\d])\.\d+)"
# A number right after a "..." field marker that the pattern has consumed
_FIELD_NUMBER = r"(\d+(?:\.\d+)?|\.\d+)"
_FLAGS = re.IGNORECASE

# ---------------------------------------------------------------------------
# Patterns by tier
# ---------------------------------------------------------------------------
STRUCTURED_HAIL_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(rf"\bMAX(?:IMUM)?\s+HAIL\s+SIZE\s*(?:\.{{2,}}|:)\s*[<>]?\s*{_FIELD_NUMBER}\s*IN(?:CH(?:ES)?)?\b", _FLAGS),
    re.compile(rf"\bHAIL(?:\s+THREAT)?\s*\.{{3}}\s*[<>]?\s*{_FIELD_NUMBER}\s*IN(?:CH(?:ES)?)?\b", _FLAGS),
)
STRUCTURED_WIND_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(rf"\bMAX(?:IMUM)?\s+WIND\s+GUSTS?\s*(?:\.{{2,}}|:)\s*[<>]?\s*{_FIELD_NUMBER}\s*MPH\b", _FLAGS),
    re.compile(rf"\bWIND(?:\s+THREAT)?\s*\.{{3}}\s*[<>]?\s*{_FIELD_NUMBER}\s*MPH\b", _FLAGS),
)

PHRASED_HAIL_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(rf"\bhail\s+(?:up\s+to|of)\s+{_NUMBER}\s*inch(?:es)?\b", _FLAGS),
    re.compile(rf"{_NUMBER}\s*-?\s*inch(?:es)?\s+(?:diameter\s+)?hail\b", _FLAGS),
)
PHRASED_WIND_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(rf"\bwind\s+gusts?\s+(?:of|up\s+to)\s+{_NUMBER}\s*mph\b", _FLAGS),
    re.compile(rf"\bwind\s+speeds?\s+up\s+to\s+{_NUMBER}\s*mph\b", _FLAGS),
    re.compile(rf"\bwinds?\s+(?:up\s+to|gusting\s+to|of)\s+{_NUMBER}\s*mph\b", _FLAGS),
)

BARE_MPH_PATTERN = re.compile(rf"{_NUMBER}\s*mph\b", _FLAGS)
WIND_CONTEXT_PATTERN = re.compile(r"wind|storm|hurricane|tornado", _FLAGS)

_PARAMETER_NUMBER = re.compile(_NUMBER)

HAIL = "hail"
WIND = "wind"


@dataclass(frozen=True, slots=True)
class Bulletin:
    """The text fields of one alert, normalised once for every strategy."""

    event_type: str
    headline: str
    description: str
    parameters: Mapping[str, Sequence[str]] = field(default_factory=dict)

    @property
    def combined(self) -> str:
        return combine_bulletin_text(self.headline, self.description)

    @property
    def has_wind_context(self) -> bool:
        return bool(
            WIND_CONTEXT_PATTERN.search(self.event_type)
            or WIND_CONTEXT_PATTERN.search(self.headline)
        )


@dataclass(frozen=True, slots=True)
class ExtractionStrategy:
    """A named extractor for one hazard type, returning ``None`` on no match."""

    name: str
    hazard: str
    apply: Callable[[Bulletin], Optional[float]]


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------

def _max_match(patterns: Iterable[re.Pattern[str]], text: str) -> Optional[float]:
    values: List[float] = []
    for pattern in patterns:
        for match in pattern.finditer(text):
            try:
                values.append(float(match.group(1)))
            except ValueError:
                continue
    return max(values) if values else None


def _max_parameter(parameters: Mapping[str, Sequence[str]], key: str) -> Optional[float]:
    values: List[float] = []
    raw = parameters.get(key) or ()
    if isinstance(raw, str):
        raw = (raw,)
    for item in raw:
        match = _PARAMETER_NUMBER.search(str(item))
        if match:
            values.append(float(match.group(1)))
    return max(values) if values else None


def _max_of(*candidates: Optional[float]) -> Optional[float]:
    present = [c for c in candidates if c is not None]
    return max(present) if present else None


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def _structured_hail(bulletin: Bulletin) -> Optional[float]:
    return _max_of(
        _max_parameter(bulletin.parameters, "maxHailSize"),
        _max_match(STRUCTURED_HAIL_PATTERNS, normalize_bulletin_text(bulletin.description)),
    )


def _structured_wind(bulletin: Bulletin) -> Optional[float]:
    return _max_of(
        _max_parameter(bulletin.parameters, "maxWindGust"),
        _max_match(STRUCTURED_WIND_PATTERNS, normalize_bulletin_text(bulletin.description)),
    )


def _phrased_hail(bulletin: Bulletin) -> Optional[float]:
    return _max_match(PHRASED_HAIL_PATTERNS, bulletin.combined)


def _phrased_wind(bulletin: Bulletin) -> Optional[float]:
    return _max_match(PHRASED_WIND_PATTERNS, bulletin.combined)


def _bare_mph(bulletin: Bulletin) -> Optional[float]:
    if not bulletin.has_wind_context:
        return None
    return _max_match((BARE_MPH_PATTERN,), bulletin.combined)


HAIL_STRATEGIES: Tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("structured", HAIL, _structured_hail),
    ExtractionStrategy("phrased", HAIL, _phrased_hail),
)

WIND_STRATEGIES: Tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("structured", WIND, _structured_wind),
    ExtractionStrategy("phrased", WIND, _phrased_wind),
    ExtractionStrategy("bare_mph", WIND, _bare_mph),
)


def resolve(
    strategies: Sequence[ExtractionStrategy], bulletin: Bulletin
) -> Tuple[float, Optional[str]]:
    """Apply *strategies* in priority order; return ``(value, strategy name)``.

    Absence of any match yields ``(0.0, None)``.
    """
    for strategy in strategies:
        value = strategy.apply(bulletin)
        if value is not None:
            return value, strategy.name
    return 0.0, None


def extract(
    event_type: str,
    headline: str,
    description: str,
    parameters: Optional[Mapping[str, Sequence[str]]] = None,
) -> ExtractedHazard:
    """Derive best-estimate hail diameter (inches) and peak wind (mph)."""
    bulletin = Bulletin(
        event_type=event_type or "",
        headline=headline or "",
        description=description or "",
        parameters=parameters or {},
    )
    hail, hail_source = resolve(HAIL_STRATEGIES, bulletin)
    wind, wind_source = resolve(WIND_STRATEGIES, bulletin)

    logger.debug(
        "Extracted hail=%.2fin (%s) wind=%.0fmph (%s) from '%s'",
        hail, hail_source, wind, wind_source, event_type,
    )
    return ExtractedHazard(
        hail_inches=hail,
        wind_mph=wind,
        hail_source=hail_source,
        wind_source=wind_source,
    )


def extract_from_alert(alert) -> ExtractedHazard:
    """Convenience wrapper taking a :class:`~storm_alerts.models.RawAlert`."""
    return extract(alert.event_type, alert.headline, alert.description, alert.parameters)

__all__ = [
    "Bulletin",
    "ExtractionStrategy",
    "HAIL_STRATEGIES",
    "WIND_STRATEGIES",
    "resolve",
    "extract",
    "extract_from_alert",
]
