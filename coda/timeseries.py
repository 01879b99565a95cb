"""
Time series aggregation
=======================

Groups a filtered subset by exact calendar date and sums `total_cases` and
`total_deaths` across the regions observed that day. The result is a
cross-sectional sum of per-region cumulative totals, not a running total.

Each point carries a display label (month + year by default). Labels are for
charts only: several days share a label, so grouping is always by date.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List
from .config import DEFAULT_LABEL_FORMAT
from .models import ObservationRecord


@dataclass(frozen=True)
class SeriesPoint:
    date: date
    label: str
    value: int


@dataclass
class TimeSeries:
    """Cases and deaths per date, both in ascending date order."""
    cases: List[SeriesPoint] = field(default_factory=list)
    deaths: List[SeriesPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cases)


def time_series(records: Iterable[ObservationRecord], label_format: str = DEFAULT_LABEL_FORMAT) -> TimeSeries:
    cases: Dict[date, int] = {}
    deaths: Dict[date, int] = {}
    for r in records:
        cases[r.date] = cases.get(r.date, 0) + r.total_cases
        deaths[r.date] = deaths.get(r.date, 0) + r.total_deaths

    out = TimeSeries()
    for d in sorted(cases):
        label = d.strftime(label_format)
        out.cases.append(SeriesPoint(date=d, label=label, value=cases[d]))
        out.deaths.append(SeriesPoint(date=d, label=label, value=deaths[d]))
    return out
