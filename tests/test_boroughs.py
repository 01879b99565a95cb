"""Tests for region lookup and per-region death totals."""

from __future__ import annotations

from datetime import date

import pytest

from coda.boroughs import death_totals_by_region, records_for_region, regions, sort_records
from coda.loader import load

from conftest import make_record


def test_records_for_region_is_case_insensitive(csv_path) -> None:
    records = load(csv_path).records
    rows = records_for_region(records, "barking and dagenham")
    assert [r.record_id for r in rows] == [0, 1, 2]
    assert records_for_region(records, "CAMDEN") == list(records[3:])
    assert records_for_region(records, " camden") == []


def test_records_for_unknown_region_is_empty(csv_path) -> None:
    assert records_for_region(load(csv_path).records, "Hackney") == []
    assert records_for_region((), "Camden") == []


def test_death_totals_sum_new_deaths_per_region(csv_path) -> None:
    totals = death_totals_by_region(load(csv_path).records)
    assert totals == {"Barking And Dagenham": 0, "Camden": 3}


def test_death_totals_single_region_zero_deaths() -> None:
    records = [make_record(i, date(2022, 10, 13 + i), new_deaths=0) for i in range(3)]
    assert death_totals_by_region(records) == {"X": 0}


def test_death_totals_omit_regions_outside_subset(csv_path) -> None:
    records = [r for r in load(csv_path).records if r.date == date(2022, 10, 16)]
    assert death_totals_by_region(records) == {"Camden": 0}
    assert death_totals_by_region([]) == {}


def test_regions_in_first_appearance_order(csv_path) -> None:
    assert regions(load(csv_path).records) == ["Barking And Dagenham", "Camden"]


def test_sort_records(csv_path) -> None:
    rows = records_for_region(load(csv_path).records, "Barking And Dagenham")

    by_date = sort_records(rows, "date")
    assert [r.date.day for r in by_date] == [13, 14, 15]

    by_cases = sort_records(rows, "new_cases")
    assert [r.new_cases for r in by_cases] == [17, 12, 11]

    by_total = sort_records(rows, "total_cases")
    assert [r.total_cases for r in by_total] == [72918, 72907, 72895]

    with pytest.raises(ValueError):
        sort_records(rows, "parks")
