"""Per-region grouping of qualifying storms into hail and wind digests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from ..models import HAIL, WIND, QualifyingStorm, RegionDigest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConsolidatedDigests:
    """The (possibly empty) hail and wind digests of one region and cycle."""

    hail: Optional[RegionDigest] = None
    wind: Optional[RegionDigest] = None

    def items(self) -> Iterator[Tuple[str, RegionDigest]]:
        """Yield ``(category, digest)`` for every non-empty digest."""
        if self.hail is not None:
            yield HAIL, self.hail
        if self.wind is not None:
            yield WIND, self.wind


def _add(digest: RegionDigest, storm: QualifyingStorm) -> None:
    if storm.area_description and storm.area_description not in digest.affected_areas:
        digest.affected_areas.append(storm.area_description)
    digest.member_storms.append(storm)


def consolidate(storms: Iterable[QualifyingStorm]) -> ConsolidatedDigests:
    """Partition *storms* into a hail digest and a wind/hurricane digest.

    A storm qualifying on both axes contributes to both digests. A digest
    with no members is ``None`` so that no empty notification is sent.
    """
    hail: Optional[RegionDigest] = None
    wind: Optional[RegionDigest] = None

    for storm in storms:
        if storm.is_hail:
            if hail is None:
                hail = RegionDigest(region=storm.region, category=HAIL)
            hail.max_hail_inches = max(hail.max_hail_inches, storm.hail_inches)
            _add(hail, storm)
        if storm.is_wind or storm.is_hurricane:
            if wind is None:
                wind = RegionDigest(region=storm.region, category=WIND)
            wind.max_wind_mph = max(wind.max_wind_mph, storm.wind_mph)
            _add(wind, storm)

    logger.debug(
        "Consolidated into hail=%s wind=%s",
        len(hail.member_storms) if hail else 0,
        len(wind.member_storms) if wind else 0,
    )
    return ConsolidatedDigests(hail=hail, wind=wind)

__all__ = ["consolidate", "ConsolidatedDigests"]
