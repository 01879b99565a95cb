"""
Region (borough) aggregation
============================

Pure functions over a filtered subset: per-region record lookup, death
totals per region, and the orderings used by the region detail table.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Sequence, Tuple
from .models import ObservationRecord

# key -> (sort key, descending?)
_SORTS: Dict[str, Tuple[Callable[[ObservationRecord], object], bool]] = {
    "date": (lambda r: r.date, False),
    "new_cases": (lambda r: r.new_cases, True),
    "total_cases": (lambda r: r.total_cases, True),
    "new_deaths": (lambda r: r.new_deaths, True),
}

SORT_KEYS = tuple(_SORTS)


def records_for_region(records: Iterable[ObservationRecord], name: str) -> List[ObservationRecord]:
    """Return records whose region matches `name`, ignoring case.

    An unknown region yields an empty list.
    """
    # linear scan; a lower-cased region index would replace this if lookups get hot
    target = name.lower()
    return [r for r in records if r.region.lower() == target]


def death_totals_by_region(records: Iterable[ObservationRecord]) -> Dict[str, int]:
    """Sum `new_deaths` per region. Regions without records are absent."""
    totals: Dict[str, int] = {}
    for r in records:
        totals[r.region] = totals.get(r.region, 0) + r.new_deaths
    return totals


def regions(records: Iterable[ObservationRecord]) -> List[str]:
    """Distinct region names in order of first appearance."""
    return list(dict.fromkeys(r.region for r in records))


def sort_records(records: Sequence[ObservationRecord], key: str = "date") -> List[ObservationRecord]:
    """Order records by date (ascending) or by a count field (descending)."""
    k = key.lower().strip()
    if k not in _SORTS:
        raise ValueError(f"sort key must be one of: {', '.join(SORT_KEYS)}")
    fn, reverse = _SORTS[k]
    return sorted(records, key=fn, reverse=reverse)
