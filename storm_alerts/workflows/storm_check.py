"""End-to-end storm check: fetch, classify, consolidate, notify, record."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from ..clients.mongodb_client import get_database
from ..clients.nws_client import get_nws_session
from ..clients.resend_client import get_resend_session
from ..config import HISTORY_RETENTION_DAYS, REGION_DELAY_SECONDS, ZONE_DIRECTORY_PATH
from ..models import QualifyingStorm
from ..services.classifier import classify
from ..services.consolidation import consolidate
from ..services.deduplication import dedupe
from ..services.extraction import extract_from_alert
from ..services.fetcher import AlertFetcher
from ..services.notifications import ResendEmailGateway
from ..services.storage import HistoryStore, SubscriberDirectory
from ..services.zones import load_zone_directory
from ..utils.datetime_utils import get_current_timestamp

logger = logging.getLogger(__name__)

# Called once per qualifying storm after classification: (storm, region, timestamp)
StormHook = Callable[[QualifyingStorm, str, datetime], object]


@dataclass(slots=True)
class CycleReport:
    regions_checked: int = 0
    alerts_found: int = 0
    qualifying_storms: int = 0
    emails_sent: int = 0
    emails_failed: int = 0
    regions_with_alerts: List[str] = field(default_factory=list)
    failed_regions: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0


def classify_region(fetcher: AlertFetcher, region: str) -> tuple[int, List[QualifyingStorm]]:
    """Fetch, dedupe, extract and classify; return ``(alert count, storms)``."""
    alerts = dedupe(fetcher.fetch_comprehensive(region))
    storms: List[QualifyingStorm] = []
    for alert in alerts:
        storm = classify(alert, extract_from_alert(alert), region)
        if storm is not None:
            storms.append(storm)
    return len(alerts), storms


def dispatch_storm_hooks(
    hooks: Sequence[StormHook], storms: Sequence[QualifyingStorm], region: str, timestamp: datetime
) -> None:
    """Run every hook for every storm; a failing hook never affects the others."""
    for storm in storms:
        for hook in hooks:
            try:
                hook(storm, region, timestamp)
            except Exception:
                logger.exception("Post-classification hook %r failed for %s", hook, region)


def _notify_region(
    region: str,
    storms: Sequence[QualifyingStorm],
    subscribers: SubscriberDirectory,
    notifier: ResendEmailGateway,
    report: CycleReport,
) -> None:
    digests = consolidate(storms)
    recipients = subscribers.list_recipients(region)
    if not recipients:
        logger.info("No active subscribers for %s; no alerts will be sent", region)
        return

    for category, digest in digests.items():
        wanted = [r for r in recipients if r.wants(category)]
        if not wanted:
            continue
        try:
            result = notifier.send_category_digest(region, category, digest, wanted)
        except Exception:
            logger.exception("Sending %s digest for %s failed", category, region)
            report.emails_failed += len(wanted)
            continue
        report.emails_sent += result.success_count
        report.emails_failed += result.error_count


def run_check_cycle(
    fetcher: AlertFetcher,
    subscribers: SubscriberDirectory,
    notifier: ResendEmailGateway,
    history: Optional[HistoryStore] = None,
    *,
    hooks: Optional[Sequence[StormHook]] = None,
    sleep: Callable[[float], None] = time.sleep,
    region_delay: float = REGION_DELAY_SECONDS,
    retention_days: Optional[int] = HISTORY_RETENTION_DAYS,
    clock: Callable[[], datetime] = get_current_timestamp,
) -> CycleReport:
    """Execute one full check cycle over every subscribed region.

    Regions are processed strictly one after another. Any failure inside a
    region is logged and the cycle moves on to the next region.
    """
    started = time.monotonic()
    report = CycleReport()
    if hooks is None:
        hooks = [history.record_qualifying_storm] if history is not None else []

    logger.info("Starting storm check cycle")
    try:
        regions = subscribers.list_regions_with_subscribers()
    except Exception:
        logger.exception("Could not load subscribed regions; skipping cycle")
        return report

    logger.info("Checking %d subscribed regions: %s", len(regions), ", ".join(regions))

    for index, region in enumerate(regions):
        if index:
            sleep(region_delay)
        report.regions_checked += 1
        try:
            alert_count, storms = classify_region(fetcher, region)
            report.alerts_found += alert_count
            if not storms:
                logger.info("No qualifying storms in %s (%d alerts checked)", region, alert_count)
                continue

            report.qualifying_storms += len(storms)
            report.regions_with_alerts.append(f"{region} ({len(storms)})")
            dispatch_storm_hooks(hooks, storms, region, clock())
            _notify_region(region, storms, subscribers, notifier, report)
        except Exception:
            logger.exception("Error checking %s", region)
            report.failed_regions.append(region)

    if history is not None and retention_days:
        try:
            history.prune(retention_days)
        except Exception:
            logger.exception("Pruning storm history failed")

    report.duration_seconds = time.monotonic() - started
    _log_stats(report)
    return report


def run() -> CycleReport:
    """Build the default components from configuration and run one cycle."""
    directory = load_zone_directory(ZONE_DIRECTORY_PATH)
    db = get_database()
    fetcher = AlertFetcher(get_nws_session(), directory)
    notifier = ResendEmailGateway(get_resend_session())
    return run_check_cycle(
        fetcher,
        SubscriberDirectory.from_database(db),
        notifier,
        HistoryStore.from_database(db),
    )


def _log_stats(report: CycleReport) -> None:
    logger.info("=== Storm Check Statistics ===")
    logger.info("Duration: %.0f seconds", report.duration_seconds)
    logger.info("Regions checked: %d", report.regions_checked)
    logger.info("Total alerts found: %d", report.alerts_found)
    logger.info("Qualifying storms: %d", report.qualifying_storms)
    logger.info("Emails sent: %d (failed: %d)", report.emails_sent, report.emails_failed)
    logger.info(
        "Regions with storms: %s",
        ", ".join(report.regions_with_alerts) if report.regions_with_alerts else "None",
    )
    logger.info("==============================")

__all__ = ["run", "run_check_cycle", "classify_region", "dispatch_storm_hooks", "CycleReport"]
