"""
CODA package
============

This package contains the COVID Observation Data Analyzer (CODA).

- The CLI entry point is in `coda/cli.py`.
- The engine facade (window + aggregations) is in `coda/engine.py`.
- Dataset loading is in `coda/loader.py`.
- Aggregators live in `coda/boroughs.py`, `coda/stats.py` and `coda/timeseries.py`.
"""

from .engine import CODA
from .errors import CodaError, EmptyDatasetError, LoadError, ValidationError
from .loader import load
from .models import Dataset, ObservationRecord
from .stats import StatisticKind

__version__ = '0.1.0'

__all__ = [
    "CODA",
    "CodaError",
    "Dataset",
    "EmptyDatasetError",
    "LoadError",
    "ObservationRecord",
    "StatisticKind",
    "ValidationError",
    "load",
]
