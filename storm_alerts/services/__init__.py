"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from storm_alerts.services import classify` without having to
know which underlying module provides the symbol.
"""

from .zones import ZoneDirectory, ZoneDirectoryError, load_zone_directory  # noqa: F401
from .fetcher import AlertFetcher, is_roof_damage_relevant  # noqa: F401
from .extraction import extract, extract_from_alert  # noqa: F401
from .classifier import classify, hail_size_label  # noqa: F401
from .deduplication import dedupe  # noqa: F401
from .consolidation import consolidate, ConsolidatedDigests  # noqa: F401
from .notifications import ResendEmailGateway, verify_unsubscribe_token  # noqa: F401
from .storage import HistoryStore, SubscriberDirectory  # noqa: F401
from .history import build_hail_history  # noqa: F401

__all__ = [
    "ZoneDirectory",
    "ZoneDirectoryError",
    "load_zone_directory",
    "AlertFetcher",
    "is_roof_damage_relevant",
    "extract",
    "extract_from_alert",
    "classify",
    "hail_size_label",
    "dedupe",
    "consolidate",
    "ConsolidatedDigests",
    "ResendEmailGateway",
    "verify_unsubscribe_token",
    "HistoryStore",
    "SubscriberDirectory",
    "build_hail_history",
]
