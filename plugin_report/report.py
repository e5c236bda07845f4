"""Build the plugin documentation migration report.

Joins the documentation feed with the monthly installs feed, classifies
each plugin by where its documentation lives, ranks plugins by installs
and counts how many are done, in review, or still to do.
"""

import re
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from plugin_report.errors import UnknownStatus
from plugin_report.models import PluginRecord, ReportSummary, Status
from plugin_report.sources.base import BaseFetcher, CachedFetcher
from plugin_report.sources.documentation import DocumentationSource
from plugin_report.sources.installs import InstallsSource

GITHUB_URL_PATTERN = re.compile(r"^https?://github\.com/jenkinsci/")

PULL_REQUEST_URL = "https://github.com/jenkinsci/{name}-plugin/pull/{number}"
REPORT_ACTION = "/?pluginName={name}"

# Status -> ReportSummary counter
STATUS_BUCKETS = {
    Status.TODO: "todo",
    Status.PR: "pr",
    Status.OK: "done",
}


def classify(name: str, url: str, pulls: Mapping[str, int]) -> Status:
    """Return the migration status of a plugin."""
    if GITHUB_URL_PATTERN.match(url):
        return Status.OK
    if name in pulls:
        return Status.PR
    return Status.TODO


def build_record(
    name: str, metadata: dict, installs: int, pulls: Mapping[str, int]
) -> PluginRecord:
    """Build the report row for one documentation feed entry."""
    url = metadata.get("url") or ""
    status = classify(name, url, pulls)

    if status is Status.OK:
        class_name, action = "success", None
    elif status is Status.PR:
        class_name = "info"
        action = PULL_REQUEST_URL.format(name=name, number=pulls[name])
    elif status is Status.TODO:
        class_name, action = None, REPORT_ACTION.format(name=name)
    else:
        raise UnknownStatus(status)

    return PluginRecord(
        name=name,
        url=url,
        installs=installs,
        status=status,
        class_name=class_name,
        action=action,
    )


def merge_installs(
    documentation: Mapping[str, dict], installs: list[tuple[str, int]]
) -> dict[str, int]:
    """Keep the install counts of documented plugins, dropping the rest."""
    counts = {}
    for name, count in installs:
        if name in documentation:
            counts[name] = count
    return counts


def count_statuses(records: list[PluginRecord]) -> dict[str, int]:
    """Count records per status bucket and in total."""
    counts = {bucket: 0 for bucket in STATUS_BUCKETS.values()}
    for record in records:
        bucket = STATUS_BUCKETS.get(record.status)
        if bucket is None:
            raise UnknownStatus(record.status)
        counts[bucket] += 1

    counts["total"] = counts["todo"] + counts["pr"] + counts["done"]
    return counts


class ReportBuilder:
    """Compose the two feeds and the pull request mapping into a report."""

    def __init__(
        self,
        fetcher: BaseFetcher,
        pulls: Optional[Mapping[str, int]] = None,
        documentation_url: Optional[str] = None,
        installs_url: Optional[str] = None,
        period: Optional[str] = None,
    ):
        self.documentation = DocumentationSource(fetcher, url=documentation_url)
        self.installs = InstallsSource(fetcher, url=installs_url, period=period)
        self.pulls = pulls if pulls is not None else {}

    def build(self) -> ReportSummary:
        """Fetch both feeds and build the report.

        Raises:
            FetchError: if either feed cannot be retrieved.
            MalformedInstallRecord: if a line of the installs feed is invalid.
            UnknownStatus: if a record falls outside the known statuses.
        """
        # Both feeds must arrive before anything is merged
        with ThreadPoolExecutor(max_workers=2) as executor:
            documentation_future = executor.submit(self.documentation.collect)
            installs_future = executor.submit(self.installs.collect)
            documentation = documentation_future.result()
            installs = installs_future.result()

        counts = merge_installs(documentation, installs)

        records = [
            build_record(name, metadata, counts.get(name, 0), self.pulls)
            for name, metadata in documentation.items()
        ]
        # Stable: equal installs keep documentation feed order
        records.sort(key=lambda r: r.installs, reverse=True)

        summary = count_statuses(records)
        print(
            f"Built report for {summary['total']} plugins "
            f"({summary['done']} done, {summary['pr']} PR, {summary['todo']} todo)"
        )

        return ReportSummary(
            plugins=records,
            todo=summary["todo"],
            pr=summary["pr"],
            done=summary["done"],
            total=summary["total"],
            period=self.installs.period,
        )


def build_report(
    fetcher: Optional[BaseFetcher] = None,
    pulls: Optional[Mapping[str, int]] = None,
    **kwargs,
) -> ReportSummary:
    """Build a report with a fresh CachedFetcher unless one is given."""
    builder = ReportBuilder(fetcher or CachedFetcher(), pulls=pulls, **kwargs)
    return builder.build()
