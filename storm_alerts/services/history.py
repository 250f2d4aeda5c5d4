"""Hail history report data built from stored storm records."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .classifier import hail_size_label

REPORT_MIN_HAIL_INCHES: float = 0.75


@dataclass(slots=True)
class HailEvent:
    date: datetime
    region: str
    area: str
    hail_inches: float
    size_name: str
    headline: str = ""


@dataclass(slots=True)
class MonthSummary:
    year: int
    month: int
    events: List[HailEvent] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"


@dataclass(slots=True)
class HailHistoryReport:
    months: List[MonthSummary] = field(default_factory=list)

    @property
    def total_hail_events(self) -> int:
        return sum(len(m.events) for m in self.months)

    @property
    def largest_hail_inches(self) -> float:
        return max((e.hail_inches for m in self.months for e in m.events), default=0.0)


def _event_date(record: Dict[str, Any]) -> Optional[datetime]:
    return record.get("onset_time") or record.get("recorded_at")


def build_hail_history(
    records: Iterable[Dict[str, Any]], min_hail: float = REPORT_MIN_HAIL_INCHES
) -> HailHistoryReport:
    """Group hail records by month, newest month first, largest hail first."""
    by_month: Dict[Tuple[int, int], MonthSummary] = {}
    for record in records:
        hail = float(record.get("hail_inches") or 0.0)
        date = _event_date(record)
        if hail < min_hail or date is None:
            continue
        key = (date.year, date.month)
        summary = by_month.setdefault(key, MonthSummary(year=date.year, month=date.month))
        summary.events.append(
            HailEvent(
                date=date,
                region=record.get("region", ""),
                area=record.get("area_description", ""),
                hail_inches=hail,
                size_name=hail_size_label(hail),
                headline=record.get("headline", ""),
            )
        )

    months = [by_month[key] for key in sorted(by_month, reverse=True)]
    for summary in months:
        summary.events.sort(key=lambda e: (e.hail_inches, e.date), reverse=True)
    return HailHistoryReport(months=months)

__all__ = ["build_hail_history", "HailHistoryReport", "MonthSummary", "HailEvent"]
