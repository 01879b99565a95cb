"""
Date index (precomputed lookup table)
=====================================

CODA builds one index (distinct date -> list of record IDs) so that window
changes do not need to rescan the whole dataset.

Example:
- `date_to_ids[date(2020, 3, 1)]` gives the IDs of all regions observed that day.
- `range_ids(idx, start, end)` gives the IDs for every date in [start, end].

Record IDs equal positions in `Dataset.records`, so sorting IDs restores
source order.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List
from bisect import bisect_left, bisect_right
from .models import ObservationRecord


@dataclass
class DateIndex:
    """Distinct dates in ascending order plus their record IDs."""
    date_to_ids: Dict[date, List[int]]
    dates_sorted: List[date]


def build_date_index(records: Iterable[ObservationRecord]) -> DateIndex:
    date_to_ids: Dict[date, List[int]] = {}
    for r in records:
        date_to_ids.setdefault(r.date, []).append(r.record_id)
    for ids in date_to_ids.values():
        ids.sort()
    return DateIndex(date_to_ids=date_to_ids, dates_sorted=sorted(date_to_ids))


def range_ids(idx: DateIndex, start: date, end: date) -> List[int]:
    """Return sorted record IDs with date in [start, end] (both inclusive).

    Binary search on `dates_sorted` finds the slice of dates, then the ID
    lists are merged.
    """
    lo = bisect_left(idx.dates_sorted, start)
    hi = bisect_right(idx.dates_sorted, end)
    out: List[int] = []
    for d in idx.dates_sorted[lo:hi]:
        out.extend(idx.date_to_ids[d])
    out.sort()
    return out
