"""Tests for the CLI command handler."""

from __future__ import annotations

from datetime import date

import pytest

from coda.cli import handle, main
from coda.engine import CODA
from coda.errors import ValidationError


@pytest.fixture
def engine(csv_path) -> CODA:
    return CODA.from_source(csv_path)


def test_bounds(engine, capsys) -> None:
    handle(engine, "bounds")
    assert "2022-10-13 .. 2022-10-16" in capsys.readouterr().out


def test_window_and_deaths(engine, capsys) -> None:
    handle(engine, "window 2022-10-14 2022-10-16")
    assert engine.current_window() == (date(2022, 10, 14), date(2022, 10, 16))
    handle(engine, "deaths")
    out = capsys.readouterr().out
    assert "Size=4" in out
    assert "Camden: 2" in out


def test_invalid_window_raises(engine) -> None:
    with pytest.raises(ValidationError):
        handle(engine, "window 2022-10-16 2022-10-13")
    with pytest.raises(ValueError):
        handle(engine, "window 2022/10/13 2022-10-16")


def test_region_sorted(engine, capsys) -> None:
    handle(engine, 'region "barking and dagenham" new_cases')
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "3 records for Barking And Dagenham:"
    assert "new_cases=17" in out[1]


def test_region_missing(engine, capsys) -> None:
    handle(engine, 'region "Hackney"')
    assert "No records" in capsys.readouterr().out


def test_stat_span_and_series(engine, capsys) -> None:
    handle(engine, "stat parks")
    handle(engine, "span")
    handle(engine, "series 1")
    out = capsys.readouterr().out
    assert "Average parks:" in out
    assert "Total deaths (max - min): 95" in out
    assert "2022-10-13 (Oct 2022)" in out
    assert "2022-10-14" not in out.split("Total deaths")[1]


def test_main_runs_repl(csv_path, monkeypatch, capsys) -> None:
    commands = iter(["summary", "stat nonsense", "quit"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(commands))
    main(["--csv", str(csv_path), "--log-level", "ERROR"])
    out = capsys.readouterr().out
    assert "Loaded 6 records" in out
    assert "Average New Cases:" in out
    assert "Error: Unknown statistic" in out


def test_main_exits_on_load_error(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main(["--csv", str(tmp_path / "missing.csv"), "--log-level", "CRITICAL"])
