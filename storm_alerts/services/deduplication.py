"""Duplicate alert detection by exact (event type, area, onset) identity."""

from __future__ import annotations

import logging
from typing import Iterable, List, Set

from ..models import DedupeKey, RawAlert

logger = logging.getLogger(__name__)


def dedupe(alerts: Iterable[RawAlert]) -> List[RawAlert]:
    """Return *alerts* with duplicates removed, keeping each first occurrence.

    Two alerts are duplicates only when event type, area description and
    onset time all match exactly; overlapping geography is not merged.
    """
    seen: Set[DedupeKey] = set()
    unique: List[RawAlert] = []
    duplicate_count = 0

    for alert in alerts:
        key = alert.dedupe_key
        if key in seen:
            duplicate_count += 1
            logger.debug("Dropping duplicate '%s' for %s", alert.event_type, alert.area_description)
            continue
        seen.add(key)
        unique.append(alert)

    if duplicate_count:
        logger.info("Removed %d duplicate alerts (%d unique)", duplicate_count, len(unique))
    return unique

__all__ = ["dedupe"]
