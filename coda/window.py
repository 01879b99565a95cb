"""
Analysis window
===============

`AnalysisWindow` holds the currently selected [start, end] date range and the
records that fall inside it. Every accepted change recomputes the subset from
the full dataset; nothing is carried over from the previous window.

The (start, end, subset) triple is replaced under a lock in one assignment,
so a reader never sees a new range paired with an old subset.
"""

from __future__ import annotations
from datetime import date, datetime
from threading import RLock
from typing import Tuple

from loguru import logger

from .errors import ValidationError
from .indices import build_date_index, range_ids
from .models import Dataset, ObservationRecord

Subset = Tuple[ObservationRecord, ...]


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date, got {type(value).__name__}")


class AnalysisWindow:
    """Current date window over an immutable dataset."""

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset
        self._idx = build_date_index(dataset.records)
        self._lock = RLock()
        self._state: Tuple[date, date, Subset] = (
            dataset.valid_start,
            dataset.valid_end,
            dataset.records,
        )

    def snapshot(self) -> Tuple[date, date, Subset]:
        """Return (start, end, subset) from a single consistent state."""
        return self._state

    @property
    def range(self) -> Tuple[date, date]:
        start, end, _ = self._state
        return start, end

    @property
    def subset(self) -> Subset:
        return self._state[2]

    def validate(self, start: date, end: date) -> None:
        """Raise ValidationError unless valid_start <= start <= end <= valid_end."""
        ds = self.dataset
        if start > end:
            raise ValidationError(f"Start date {start} is after end date {end}")
        if start < ds.valid_start:
            raise ValidationError(f"Start date {start} is before the first available date {ds.valid_start}")
        if end > ds.valid_end:
            raise ValidationError(f"End date {end} is after the last available date {ds.valid_end}")

    def set_range(self, start, end) -> Subset:
        """Select [start, end] and return the new filtered subset.

        On ValidationError the previous window stays in effect.
        """
        start, end = _as_date(start), _as_date(end)
        with self._lock:
            try:
                self.validate(start, end)
            except ValidationError as e:
                logger.warning("Rejected window {} .. {}: {}", start, end, e)
                raise
            records = self.dataset.records
            subset = tuple(records[i] for i in range_ids(self._idx, start, end))
            self._state = (start, end, subset)
        logger.debug("Window set to {} .. {} ({} records)", start, end, len(subset))
        return subset

    def reset(self) -> Subset:
        """Select the full valid range again."""
        return self.set_range(self.dataset.valid_start, self.dataset.valid_end)
