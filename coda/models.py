"""
Data model (ObservationRecord, Dataset)
=======================================

Each row of the source file is converted into an `ObservationRecord`.
Records are immutable (`frozen=True`) so that:
- records cannot be accidentally modified after loading, and
- window changes select records rather than editing them.

The whole dataset is loaded once and never changes afterwards.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Tuple

# Mobility categories, in source column order
MOBILITY_FIELDS: Tuple[str, ...] = (
    "retail_recreation",
    "grocery_pharmacy",
    "parks",
    "transit",
    "workplaces",
    "residential",
)

COUNT_FIELDS: Tuple[str, ...] = ("new_cases", "total_cases", "new_deaths", "total_deaths")

COLUMNS: Tuple[str, ...] = ("date", "region") + MOBILITY_FIELDS + COUNT_FIELDS


@dataclass(frozen=True)
class ObservationRecord:
    """One (date, region) observation.

    Mobility values are percentage-point changes from a baseline period.
    `total_cases` and `total_deaths` are meant to be cumulative per region.
    """
    record_id: int
    date: date
    region: str
    retail_recreation: int
    grocery_pharmacy: int
    parks: int
    transit: int
    workplaces: int
    residential: int
    new_cases: int
    total_cases: int
    new_deaths: int
    total_deaths: int


@dataclass(frozen=True)
class Dataset:
    """The loaded records plus the date envelope they span."""
    records: Tuple[ObservationRecord, ...]
    valid_start: date
    valid_end: date
    source: str = ""

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
