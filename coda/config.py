"""
Runtime configuration
=====================

`EngineConfig` collects the few knobs CODA exposes. The CLI fills it from
command-line flags; library users can build one directly.
"""

from __future__ import annotations
from dataclasses import dataclass
import sys

from loguru import logger

DEFAULT_LABEL_FORMAT = "%b %Y"


@dataclass
class EngineConfig:
    """High-level knobs for loading and presenting data."""
    # strftime pattern for time-series labels (display only, never a grouping key)
    label_format: str = DEFAULT_LABEL_FORMAT
    log_level: str = "INFO"
    # False when the source has no header row (columns are then positional)
    has_header: bool = True


def configure_logging(level: str = "INFO") -> None:
    """Route loguru output to stderr at `level`."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
