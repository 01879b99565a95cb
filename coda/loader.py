"""
Dataset loader (CSV/Excel -> ObservationRecord tuple)
=====================================================

This module reads the per-region observation export and converts each row
into an `ObservationRecord`.

Key ideas:
- We try multiple possible column names because exports name the mobility
  columns differently (`parks_GMR`, `parks_percent_change_from_baseline`, ...).
- Conversion helpers (_to_int/_to_str) reject malformed cells with a
  `LoadError` naming the column and source row.
- The loader returns an immutable `Dataset`; CODA never edits the source file.
"""

from __future__ import annotations
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Union
import re
from zipfile import BadZipFile

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from loguru import logger

from .errors import EmptyDatasetError, LoadError
from .models import COLUMNS, Dataset, ObservationRecord

Source = Union[str, Path, TextIO]

DATE_FORMAT = "%Y-%m-%d"

_EXCEL_SUFFIXES = (".xlsx", ".xlsm")

# Accepted header names per field (matched after normalization)
_ALIASES: Dict[str, tuple] = {
    "date": ("date", "Date"),
    "region": ("region", "borough", "area", "area_name"),
    "retail_recreation": ("retail_recreation", "retail_recreation_GMR",
                          "retail_and_recreation_percent_change_from_baseline"),
    "grocery_pharmacy": ("grocery_pharmacy", "grocery_pharmacy_GMR",
                         "grocery_and_pharmacy_percent_change_from_baseline"),
    "parks": ("parks", "parks_GMR", "parks_percent_change_from_baseline"),
    "transit": ("transit", "transit_GMR", "transit_stations",
                "transit_stations_percent_change_from_baseline"),
    "workplaces": ("workplaces", "workplaces_GMR", "workplaces_percent_change_from_baseline"),
    "residential": ("residential", "residential_GMR", "residential_percent_change_from_baseline"),
    "new_cases": ("new_cases", "newCases"),
    "total_cases": ("total_cases", "totalCases"),
    "new_deaths": ("new_deaths", "newDeaths"),
    "total_deaths": ("total_deaths", "totalDeaths"),
}

_MIDNIGHT_RE = re.compile(r"[ T]00:00:00$")


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(df: pd.DataFrame, field: str) -> str:
    cols = list(df.columns)
    names = _ALIASES[field]
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise LoadError(f"Missing required column {field!r}. Tried={names}. Available={cols}")


def _to_str(x) -> str:
    return str(x).strip()


def _to_int(x, column: str, row: int) -> int:
    """Convert a cell to int. Blank cells count as 0 (gaps in the mobility data)."""
    s = _to_str(x)
    if not s:
        return 0
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        raise LoadError(f"Row {row}: column {column!r} is not numeric: {s!r}") from None
    if not f.is_integer():
        raise LoadError(f"Row {row}: column {column!r} is not an integer: {s!r}")
    return int(f)


def parse_date(text: str) -> date:
    """Parse a `yyyy-MM-dd` string. Raises ValueError on anything else."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def _to_date(x, column: str, row: int) -> date:
    s = _MIDNIGHT_RE.sub("", _to_str(x))
    try:
        return parse_date(s)
    except ValueError:
        raise LoadError(f"Row {row}: column {column!r} is not a yyyy-MM-dd date: {s!r}") from None


def _is_excel(source: Source) -> bool:
    return isinstance(source, (str, Path)) and str(source).lower().endswith(_EXCEL_SUFFIXES)


def _describe(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "<buffer>")


def _read_frame(source: Source, has_header: bool, offset: int) -> pd.DataFrame:
    header: Optional[int] = 0 if has_header else None
    excel = _is_excel(source)
    try:
        if excel:
            df = pd.read_excel(source, engine="openpyxl", dtype=str, header=header)
        else:
            # blank lines stay in the frame so index + offset is the source line
            df = pd.read_csv(source, dtype=str, header=header, keep_default_na=False,
                             skip_blank_lines=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise EmptyDatasetError(f"No data in {_describe(source)}") from e
    except (OSError, UnicodeDecodeError, ValueError, BadZipFile, InvalidFileException) as e:
        raise LoadError(f"Cannot read {_describe(source)}: {e}") from e

    if has_header:
        df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    else:
        if len(df.columns) < len(COLUMNS):
            raise LoadError(f"Expected {len(COLUMNS)} columns, found {len(df.columns)}")
        df = df.iloc[:, :len(COLUMNS)]
        df.columns = list(COLUMNS)

    # with keep_default_na=False only padding of short CSV rows is NaN
    missing = df.isna()
    df = df.fillna("").astype(str)
    if df.empty:
        return df
    # blank lines and trailing lines like ",,,,,"
    blank = df.apply(lambda col: col.str.strip() == "").all(axis=1)
    if not excel:
        short = missing.any(axis=1) & ~blank
        if short.any():
            pos = short.idxmax()
            found = int((~missing.loc[pos]).sum())
            raise LoadError(f"Row {int(pos) + offset}: expected {len(df.columns)} fields, found {found}")
    return df[~blank]


def load(source: Source, *, has_header: bool = True) -> Dataset:
    """
    Parse `source` once into a `Dataset`.

    Rows keep their source order; `valid_start`/`valid_end` are the earliest
    and latest dates seen. Raises LoadError on malformed input and
    EmptyDatasetError when no rows remain.
    """
    # header occupies source row 1
    offset = 2 if has_header else 1
    df = _read_frame(source, has_header, offset)
    cols = {field: _col(df, field) for field in COLUMNS}

    records: List[ObservationRecord] = []
    for i, (pos, row) in enumerate(df.iterrows()):
        line = int(pos) + offset
        region = _to_str(row[cols["region"]])
        if not region:
            raise LoadError(f"Row {line}: column {cols['region']!r} is empty")
        values = {
            field: _to_int(row[cols[field]], cols[field], line)
            for field in COLUMNS[2:]
        }
        records.append(ObservationRecord(
            record_id=i,
            date=_to_date(row[cols["date"]], cols["date"], line),
            region=region,
            **values,
        ))

    if not records:
        raise EmptyDatasetError(f"No usable rows in {_describe(source)}")

    dates = [r.date for r in records]
    dataset = Dataset(
        records=tuple(records),
        valid_start=min(dates),
        valid_end=max(dates),
        source=_describe(source),
    )
    logger.info(
        "Loaded {} records from {} ({} .. {})",
        len(dataset), dataset.source, dataset.valid_start, dataset.valid_end,
    )
    return dataset
