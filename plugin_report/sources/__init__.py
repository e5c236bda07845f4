"""Remote feeds the report is built from."""

from plugin_report.sources.base import BaseFetcher, CachedFetcher, HttpCache
from plugin_report.sources.documentation import DocumentationSource
from plugin_report.sources.installs import InstallsSource, last_report_period

__all__ = [
    "BaseFetcher",
    "CachedFetcher",
    "HttpCache",
    "DocumentationSource",
    "InstallsSource",
    "last_report_period",
]
