#!/usr/bin/env python3
"""
Baby Calendar Report

Reads a baby log, either a JSON array of rows:
    [{"timestamp": "June 6, 2019 at 05:19AM", "activity": "is asleep"}, ...]
or plain text in the standard row format:
    "Mar 11, 2025 - 5:48 AM: Breastfeeding"
and prints:
  - the coalesced event list (a wake-up closes the sleep before it, feeds within
    an hour of the first one fold together),
  - a per-day summary table (poops, sleep time, amount fed),
  - the predicted next sleep, if the baby is currently awake.

Usage:
    python main.py --url https://example.com/log.json
    python main.py --json log.json
    python main.py --text schedule.txt
Run without a source to analyze the bundled sample.

Note:
    Requires pandas, tabulate, pydantic-settings and requests.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from baby_calendar.config import Settings
from baby_calendar.errors import BabyCalendarError
from baby_calendar.events import RawLogRow
from baby_calendar.pipeline import PipelineResult, run_pipeline
from baby_calendar.source import fetch_rows, load_rows, parse_standard_rows

log = logging.getLogger("baby_calendar.cli")


class BabyCalendarReport:
    """
    Runs the pipeline over a set of rows and renders it as text tables:
      - Events: one line per coalesced event, time-ordered as logged.
      - Daily: one line per day with the aggregated counts.
    """

    def __init__(self, rows: List[RawLogRow], settings: Optional[Settings] = None, now: Optional[datetime] = None):
        self.rows = rows
        self.settings = settings or Settings()
        self.now = now
        self.result: Optional[PipelineResult] = None

    def events_table(self) -> str:
        table_rows = []
        for event in self.result.events:
            table_rows.append(
                {
                    "Start": event.start.strftime("%b %d %I:%M %p"),
                    "End": event.end.strftime("%b %d %I:%M %p") if event.end else "",
                    "Event": event.title,
                }
            )
        return tabulate(table_rows, headers="keys", tablefmt="grid", showindex=False, stralign="left")

    def daily_table(self) -> str:
        df = self.result.summary_frame()
        if df.empty:
            return "No days to summarize."
        # Sleep Minutes is kept for charting; the h:mm column is what people read.
        df = df.drop(columns=["Sleep Minutes"])
        df["Date"] = df["Date"].apply(lambda d: d.strftime("%b %d"))
        return tabulate(df, headers="keys", tablefmt="grid", showindex=False, stralign="left")

    def render(self) -> str:
        lines = ["Events:", self.events_table(), "", "Daily Summary:", self.daily_table()]
        if self.result.prediction is not None:
            prediction = self.result.prediction
            lines += ["", f"Next sleep: {prediction.start:%b %d %I:%M %p} - {prediction.advisory_text}"]
        return "\n".join(lines)

    def run_analysis(self) -> str:
        self.result = run_pipeline(self.rows, self.settings, self.now)
        return self.render()


SAMPLE_DATA = """
Mar 5, 2025 - 9:19 AM: took 90
Mar 5, 2025 - 9:40 AM: took 30
Mar 5, 2025 - 10:06 AM: Poopy diaper
Mar 5, 2025 - 10:30 AM: Sleeping
Mar 5, 2025 - 11:58 AM: Wake up
Mar 5, 2025 - 12:10 PM: took 120
Mar 5, 2025 - 1:38 PM: Sleeping
Mar 5, 2025 - 3:19 PM: Wake up
Mar 5, 2025 - 3:25 PM: took 100
Mar 5, 2025 - 4:32 PM: Poopy diaper (light)
Mar 5, 2025 - 9:30 PM: Synthroid
Mar 5, 2025 - 11:40 PM: Sleeping
Mar 6, 2025 - 6:12 AM: Wake up
Mar 6, 2025 - 6:17 AM: took 110
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="baby-calendar",
        description="Baby Calendar: coalesced baby log events, daily summaries and next-sleep prediction.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="URL of a JSON array of {timestamp, activity} rows.")
    source.add_argument("--json", type=Path, help="Local JSON file of rows.")
    source.add_argument("--text", type=Path, help="Plain-text log in the standard row format.")
    parser.add_argument("--skip-invalid", action="store_true", help="Skip rows whose timestamp cannot be parsed.")
    parser.add_argument("--strict-ordering", action="store_true", help="Fail on rows that go back in time.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def read_rows(args: argparse.Namespace, settings: Settings) -> List[RawLogRow]:
    url = args.url or (None if (args.json or args.text) else settings.log_url)
    if url:
        return fetch_rows(url, timeout=settings.request_timeout_s)
    if args.json:
        return load_rows(args.json)
    if args.text:
        return parse_standard_rows(args.text.read_text(encoding="utf-8"))
    log.info("No source given; using the bundled sample.")
    return parse_standard_rows(SAMPLE_DATA)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    if args.skip_invalid:
        settings.skip_invalid_rows = True
    if args.strict_ordering:
        settings.strict_ordering = True

    logging.basicConfig(
        format="%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s",
        level=logging.DEBUG if args.debug else settings.log_level.upper(),
    )

    try:
        rows = read_rows(args, settings)
        report = BabyCalendarReport(rows, settings)
        print(report.run_analysis())
    except BabyCalendarError as e:
        log.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
