"""Persistence layer: storm history and subscriber records in MongoDB."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database

from ..models import QualifyingStorm, Recipient
from ..utils.datetime_utils import get_current_timestamp

logger = logging.getLogger(__name__)

HISTORY_COLLECTION = "storm_events"
COMPANIES_COLLECTION = "companies"
UNSUBSCRIBES_COLLECTION = "unsubscribes"


class HistoryStore:
    """Rolling history of qualifying storms, one document per storm."""

    def __init__(self, collection: Collection):
        self.collection = collection

    @classmethod
    def from_database(cls, db: Database) -> "HistoryStore":
        return cls(db[HISTORY_COLLECTION])

    def record_qualifying_storm(
        self, storm: QualifyingStorm, region: str, timestamp: Optional[datetime] = None
    ) -> Any:
        """Insert *storm* and return the new document id."""
        document = storm.to_document()
        document["region"] = region
        document["recorded_at"] = timestamp or get_current_timestamp()
        result = self.collection.insert_one(document)
        logger.info("Recorded storm '%s' for %s with _id=%s", storm.event_type, region, result.inserted_id)
        return result.inserted_id

    def recent_storms(
        self,
        regions: Iterable[str],
        days_back: int = 30,
        min_score: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """Return stored storms for *regions* from the last *days_back* days, newest first."""
        since = (now or get_current_timestamp()) - timedelta(days=days_back)
        query: Dict[str, Any] = {
            "region": {"$in": list(regions)},
            "recorded_at": {"$gte": since},
        }
        if min_score is not None:
            query["severity_score"] = {"$gte": min_score}
        return list(self.collection.find(query).sort("recorded_at", DESCENDING))

    def prune(self, retention_days: int, now: Optional[datetime] = None) -> int:
        """Delete history older than *retention_days*; return the number removed."""
        cutoff = (now or get_current_timestamp()) - timedelta(days=retention_days)
        result = self.collection.delete_many({"recorded_at": {"$lt": cutoff}})
        if result.deleted_count:
            logger.info("Pruned %d storm records older than %s", result.deleted_count, cutoff.date())
        return result.deleted_count


class SubscriberDirectory:
    """Read access to subscribed companies, honouring unsubscribes."""

    def __init__(self, companies: Collection, unsubscribes: Collection):
        self.companies = companies
        self.unsubscribes = unsubscribes

    @classmethod
    def from_database(cls, db: Database) -> "SubscriberDirectory":
        return cls(db[COMPANIES_COLLECTION], db[UNSUBSCRIBES_COLLECTION])

    def list_regions_with_subscribers(self) -> List[str]:
        """Return every region at least one active company subscribes to."""
        regions = self.companies.distinct("states", {"active": True})
        return sorted({r.strip() for r in regions if isinstance(r, str) and r.strip()})

    def _unsubscribed(self, emails: List[str]) -> set:
        if not emails:
            return set()
        rows = self.unsubscribes.find({"email": {"$in": emails}, "all_alerts": True}, {"email": 1})
        return {row["email"] for row in rows}

    def list_recipients(self, region: str) -> List[Recipient]:
        """Return active, still-subscribed contacts for *region*."""
        rows = list(self.companies.find({"active": True, "states": region}))
        blocked = self._unsubscribed([row["email"] for row in rows if row.get("email")])

        recipients: List[Recipient] = []
        for row in rows:
            email = row.get("email")
            if not email:
                continue
            if email in blocked:
                logger.info("Skipping unsubscribed recipient %s", email)
                continue
            recipients.append(
                Recipient(
                    email=email,
                    company_name=row.get("company_name", ""),
                    contact_name=row.get("contact_name", ""),
                    alert_preferences=row.get("alert_preferences", "both"),
                )
            )
        return recipients

    def unsubscribe(self, email: str, token: str) -> None:
        """Record an opt-out from all alerts for *email*."""
        self.unsubscribes.update_one(
            {"email": email},
            {
                "$set": {
                    "email": email,
                    "all_alerts": True,
                    "unsubscribe_token": token,
                    "created_at": get_current_timestamp(),
                }
            },
            upsert=True,
        )
        logger.info("Unsubscribed %s from all alerts", email)

__all__ = [
    "HistoryStore",
    "SubscriberDirectory",
    "HISTORY_COLLECTION",
    "COMPANIES_COLLECTION",
    "UNSUBSCRIBES_COLLECTION",
]
