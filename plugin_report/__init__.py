"""Jenkins plugin documentation migration report."""

from plugin_report.errors import (
    FetchError,
    MalformedInstallRecord,
    ReportError,
    UnknownStatus,
)
from plugin_report.models import PluginRecord, ReportSummary, Status
from plugin_report.report import ReportBuilder, build_report

__all__ = [
    "FetchError",
    "MalformedInstallRecord",
    "ReportError",
    "UnknownStatus",
    "PluginRecord",
    "ReportSummary",
    "Status",
    "ReportBuilder",
    "build_report",
]
