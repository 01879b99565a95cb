"""
Scalar statistics
=================

Averages and the death span over a filtered subset. Every function returns a
neutral value (0 or 0.0) on an empty subset instead of raising.

Statistic kinds form a closed enumeration; each kind maps to the function
that extracts its value from a record.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Callable, Dict, Sequence, Union
from .models import MOBILITY_FIELDS, ObservationRecord


class StatisticKind(str, Enum):
    RETAIL_RECREATION = "retail_recreation"
    GROCERY_PHARMACY = "grocery_pharmacy"
    PARKS = "parks"
    TRANSIT = "transit"
    WORKPLACES = "workplaces"
    RESIDENTIAL = "residential"
    TOTAL_CASES = "total_cases"
    NEW_CASES = "new_cases"

    @classmethod
    def parse(cls, kind: Union["StatisticKind", str]) -> "StatisticKind":
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).strip().lower())
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown statistic {kind!r}; expected one of: {valid}") from None


_EXTRACTORS: Dict[StatisticKind, Callable[[ObservationRecord], int]] = {
    kind: attrgetter(kind.value) for kind in StatisticKind
}

MOBILITY_KINDS = tuple(StatisticKind(f) for f in MOBILITY_FIELDS)


@dataclass(frozen=True)
class StatisticsSummary:
    """The statistics shown together on the statistics panel."""
    avg_retail_recreation: float
    avg_grocery_pharmacy: float
    death_span: int
    avg_total_cases: float
    avg_new_cases: float


def average(records: Sequence[ObservationRecord], field: Union[StatisticKind, str]) -> float:
    """Arithmetic mean of `field` over `records`; 0.0 when empty."""
    get = _EXTRACTORS[StatisticKind.parse(field)]
    if not records:
        return 0.0
    return sum(get(r) for r in records) / len(records)


def death_span(records: Sequence[ObservationRecord]) -> int:
    """max(total_deaths) - min(total_deaths); 0 when empty.

    NOTE: this is a range, not a sum of deaths. The panel labels it
    "Total Deaths", which reads as a sum; the range behaviour is kept.
    """
    if not records:
        return 0
    values = [r.total_deaths for r in records]
    return max(values) - min(values)


def average_total_cases(records: Sequence[ObservationRecord]) -> float:
    return average(records, StatisticKind.TOTAL_CASES)


def average_new_cases(records: Sequence[ObservationRecord]) -> float:
    return average(records, StatisticKind.NEW_CASES)


def summary(records: Sequence[ObservationRecord]) -> StatisticsSummary:
    return StatisticsSummary(
        avg_retail_recreation=average(records, StatisticKind.RETAIL_RECREATION),
        avg_grocery_pharmacy=average(records, StatisticKind.GROCERY_PHARMACY),
        death_span=death_span(records),
        avg_total_cases=average_total_cases(records),
        avg_new_cases=average_new_cases(records),
    )
