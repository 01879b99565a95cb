# tests/conftest.py
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List

import pytest
from loguru import logger

from coda.models import COLUMNS, Dataset, ObservationRecord

HEADER = ",".join(COLUMNS)

# date, region, retail, grocery, parks, transit, work, home, new_cases, total_cases, new_deaths, total_deaths
ROWS = [
    "2022-10-15,Barking And Dagenham,-17,2,27,-6,-19,0,11,72918,0,615",
    "2022-10-14,Barking And Dagenham,-15,10,29,-11,-29,3,12,72907,0,615",
    "2022-10-13,Barking And Dagenham,-15,6,28,-8,-31,3,17,72895,0,615",
    "2022-10-13,Camden,-20,1,40,-25,-35,5,30,60010,1,520",
    "2022-10-14,Camden,-21,0,35,-24,-33,4,25,60035,2,522",
    "2022-10-16,Camden,-19,3,30,-20,-30,2,20,60055,0,522",
]


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def make_record(record_id: int, day: date, region: str = "X", **overrides) -> ObservationRecord:
    values = dict(
        retail_recreation=0, grocery_pharmacy=0, parks=0, transit=0, workplaces=0, residential=0,
        new_cases=0, total_cases=0, new_deaths=0, total_deaths=0,
    )
    values.update(overrides)
    return ObservationRecord(record_id=record_id, date=day, region=region, **values)


def make_dataset(records: List[ObservationRecord]) -> Dataset:
    dates = [r.date for r in records]
    return Dataset(records=tuple(records), valid_start=min(dates), valid_end=max(dates))


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    p = tmp_path / "covid.csv"
    p.write_text(HEADER + "\n" + "\n".join(ROWS) + "\n\n", encoding="utf-8")
    return p


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(text: str, name: str = "data.csv") -> Path:
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write
