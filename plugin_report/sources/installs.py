"""Monthly plugin installation counts from stats.jenkins.io."""

import json
import re
from datetime import date, timedelta
from typing import Optional

from plugin_report.errors import MalformedInstallRecord
from plugin_report.sources.base import BaseFetcher

# The statistics for a month are published well after the month ends
# https://github.com/jenkins-infra/infra-statistics/blob/master/Jenkinsfile#L18
REPORT_DELAY_DAYS = 35

PERIOD_PATTERN = re.compile(r"^\d{4}(0[1-9]|1[0-2])$")


def last_report_period(today: Optional[date] = None) -> str:
    """Return the most recent finalized statistics month as ``YYYYMM``."""
    report_date = (today or date.today()) - timedelta(days=REPORT_DELAY_DAYS)
    return f"{report_date.year}{report_date.month:02d}"


def validate_period(period: str) -> str:
    """Check that ``period`` looks like ``YYYYMM``."""
    if not PERIOD_PATTERN.match(period):
        raise ValueError(f"Invalid report period {period!r}, expected YYYYMM")
    return period


def parse_installs(text: str) -> list[tuple[str, int]]:
    """Parse the installs feed into ``(name, count)`` pairs.

    Each line is a JSON array body, e.g. ``"git",123456``. Every line must
    parse; a blank line is a malformed record.

    Raises:
        MalformedInstallRecord: on the first line that is not a pair.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        # A final newline ends the last record
        lines.pop()

    records = []
    for line_number, line in enumerate(lines, start=1):
        try:
            pair = json.loads("[" + line + "]")
        except ValueError as e:
            raise MalformedInstallRecord(line_number, line, str(e)) from e

        if len(pair) != 2:
            raise MalformedInstallRecord(
                line_number, line, f"expected 2 values, got {len(pair)}"
            )

        name, count = pair
        if not isinstance(name, str):
            raise MalformedInstallRecord(line_number, line, "name is not a string")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise MalformedInstallRecord(
                line_number, line, "count is not a non-negative integer"
            )

        records.append((name, count))

    return records


class InstallsSource:
    """Load plugin installation counts for one report period."""

    source_name = "installs"

    URL_TEMPLATE = "https://stats.jenkins.io/jenkins-stats/svg/{period}-plugins.csv"

    def __init__(
        self,
        fetcher: BaseFetcher,
        url: Optional[str] = None,
        period: Optional[str] = None,
    ):
        self.fetcher = fetcher
        self.period = validate_period(period) if period else last_report_period()
        self.url = url or self.URL_TEMPLATE.format(period=self.period)

    def collect(self) -> list[tuple[str, int]]:
        text = self.fetcher.fetch(self.url, "text")
        records = parse_installs(text)
        print(f"Loaded {len(records)} install counts for {self.period}")
        return records
