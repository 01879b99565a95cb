"""
CODA Command Line Interface (CLI)
=================================

This file provides the interactive terminal program you run like:

    python -m coda.cli --csv "path/to/covid_london.csv"

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to engine methods (window, regions, statistics)

The CLI DOES NOT modify your dataset file. It only loads it once and works on
an in-memory window of records.
"""

from __future__ import annotations
import argparse, shlex
from typing import Iterable, List, Optional

from loguru import logger

from .config import EngineConfig, configure_logging
from .engine import CODA
from .errors import CodaError
from .boroughs import SORT_KEYS, sort_records
from .loader import parse_date
from .models import ObservationRecord
from .stats import StatisticKind

HELP = f"""
Commands:
  help
  bounds                           valid date range of the dataset
  window <start> <end>             dates as yyyy-MM-dd (inclusive)
  reset                            select the full date range again
  show [n]                         first n records in the window

  regions
  region "<Region>" [{'|'.join(SORT_KEYS)}]
  deaths                           new deaths summed per region

  stat <kind>                      kinds: {', '.join(k.value for k in StatisticKind)}
  span                             max(total_deaths) - min(total_deaths)
  summary
  series [n]                       summed total cases/deaths per date
  quit
"""


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CODA CLI.

    1) Load dataset
    2) Build the engine (full date range selected)
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="coda", description="COVID Observation Data Analyzer")
    ap.add_argument("--csv", required=True, help="Path to the observation export (.csv or .xlsx)")
    ap.add_argument("--no-header", action="store_true", help="Source has no header row")
    ap.add_argument("--label-format", default=EngineConfig.label_format,
                    help="strftime pattern for series labels")
    ap.add_argument("--log-level", default=EngineConfig.log_level)
    args = ap.parse_args(argv)

    config = EngineConfig(label_format=args.label_format, log_level=args.log_level,
                          has_header=not args.no_header)
    configure_logging(config.log_level)

    print("Loading dataset...")
    try:
        engine = CODA.from_source(args.csv, config=config)
    except CodaError as e:
        logger.error("Failed to load {}: {}", args.csv, e)
        raise SystemExit(1) from e

    start, end = engine.query_date_bounds()
    print(f"Loaded {len(engine.dataset)} records ({start} .. {end}). Type 'help' for commands.")
    while True:
        try:
            line = input("coda> ")
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break
        try:
            handle(engine, line)
        except (CodaError, ValueError) as e:
            print(f"Error: {e}")


def handle(engine: CODA, line: str) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate engine method.
    """
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "bounds":
        start, end = engine.query_date_bounds()
        print(f"Valid range: {start} .. {end}")
        return

    if cmd == "window":
        if len(parts) < 3:
            raise ValueError("usage: window <start> <end>")
        engine.set_window(parse_date(parts[1]), parse_date(parts[2]))
        start, end = engine.current_window()
        print(f"Window {start} .. {end}. Size={len(engine.subset)}")
        return

    if cmd == "reset":
        engine.reset_window()
        print(f"Window reset. Size={len(engine.subset)}")
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        _print_rows(engine.subset[:n])
        return

    if cmd == "regions":
        for name in engine.regions():
            print(name)
        return

    if cmd == "region":
        if len(parts) < 2:
            raise ValueError('usage: region "<Region>" [sort]')
        rows = engine.records_for_region(parts[1])
        if len(parts) >= 3:
            rows = sort_records(rows, parts[2])
        if not rows:
            print(f"No records for {parts[1]!r} in the current window.")
            return
        print(f"{len(rows)} records for {rows[0].region}:")
        _print_rows(rows)
        return

    if cmd == "deaths":
        totals = engine.death_totals_by_region()
        for name, total in sorted(totals.items(), key=lambda kv: kv[1], reverse=True):
            print(f"{name}: {total}")
        return

    if cmd == "stat":
        if len(parts) < 2:
            raise ValueError("usage: stat <kind>")
        kind = StatisticKind.parse(parts[1])
        print(f"Average {kind.value}: {engine.statistic(kind):.2f}")
        return

    if cmd == "span":
        print(f"Total deaths (max - min): {engine.death_span()}")
        return

    if cmd == "summary":
        s = engine.summary()
        print(f"Average Retail & Recreation Mobility: {s.avg_retail_recreation:.2f}")
        print(f"Average Grocery & Pharmacy Mobility: {s.avg_grocery_pharmacy:.2f}")
        print(f"Total Deaths: {s.death_span}")
        print(f"Average Total Cases: {s.avg_total_cases:.2f}")
        print(f"Average New Cases: {s.avg_new_cases:.2f}")
        return

    if cmd == "series":
        n = int(parts[1]) if len(parts) >= 2 else None
        ts = engine.time_series()
        points = list(zip(ts.cases, ts.deaths))
        for c, d in points[:n]:
            print(f"{c.date} ({c.label}) | total_cases={c.value} total_deaths={d.value}")
        return

    print("Unknown command. Type 'help'.")


def _print_rows(rows: Iterable[ObservationRecord]) -> None:
    for r in rows:
        print(f"[{r.record_id}] {r.date} | {r.region} | "
              f"retail={r.retail_recreation} grocery={r.grocery_pharmacy} parks={r.parks} "
              f"transit={r.transit} work={r.workplaces} home={r.residential} | "
              f"new_cases={r.new_cases} total_cases={r.total_cases} "
              f"new_deaths={r.new_deaths} total_deaths={r.total_deaths}")


if __name__ == "__main__":
    main()
