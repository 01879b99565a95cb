"""
Core engine (CODA)
==================

This is the facade presentation layers talk to. CODA works like a tiny
offline analytics engine:

1) Load dataset -> immutable tuple of ObservationRecord
2) Hold the current analysis window (AnalysisWindow)
3) Recompute the filtered subset whenever the window changes
4) Answer region, statistic and time-series queries from that subset

The aggregators are plain functions; the engine passes the current subset
into each call, so no aggregator keeps its own copy of the window.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple, Union

from . import boroughs, stats, timeseries
from .config import EngineConfig
from .loader import Source, load
from .models import Dataset, ObservationRecord
from .stats import StatisticKind, StatisticsSummary
from .timeseries import TimeSeries
from .window import AnalysisWindow


@dataclass
class CODA:
    """COVID Observation Data Analyzer.

    The engine stores:
    - dataset: every loaded record plus the valid date range
    - window: the current [start, end] selection and its subset
    - config: display/logging options

    Window changes only replace the subset; the dataset never changes.
    """
    dataset: Dataset
    config: EngineConfig = field(default_factory=EngineConfig)
    window: AnalysisWindow = field(init=False)

    def __post_init__(self) -> None:
        self.window = AnalysisWindow(self.dataset)

    @classmethod
    def from_source(cls, source: Source, config: Optional[EngineConfig] = None) -> "CODA":
        config = config or EngineConfig()
        return cls(dataset=load(source, has_header=config.has_header), config=config)

    # ---------------- Window ----------------
    def query_date_bounds(self) -> Tuple[date, date]:
        return self.dataset.valid_start, self.dataset.valid_end

    def set_window(self, start: date, end: date) -> None:
        """Select [start, end]; raises ValidationError and keeps the old window if invalid."""
        self.window.set_range(start, end)

    def current_window(self) -> Tuple[date, date]:
        return self.window.range

    def reset_window(self) -> None:
        self.window.reset()

    @property
    def subset(self) -> Tuple[ObservationRecord, ...]:
        return self.window.subset

    # ---------------- Regions ----------------
    def records_for_region(self, name: str) -> List[ObservationRecord]:
        return boroughs.records_for_region(self.subset, name)

    def death_totals_by_region(self) -> Dict[str, int]:
        return boroughs.death_totals_by_region(self.subset)

    def regions(self) -> List[str]:
        return boroughs.regions(self.subset)

    # ---------------- Statistics ----------------
    def statistic(self, kind: Union[StatisticKind, str]) -> float:
        return stats.average(self.subset, kind)

    def death_span(self) -> int:
        return stats.death_span(self.subset)

    def summary(self) -> StatisticsSummary:
        return stats.summary(self.subset)

    # ---------------- Time series ----------------
    def time_series(self) -> TimeSeries:
        return timeseries.time_series(self.subset, label_format=self.config.label_format)
