"""Exceptions raised while building the report."""

from typing import Optional


class ReportError(Exception):
    """Base class for report failures."""


class FetchError(ReportError):
    """A source feed could not be retrieved or decoded."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        message = f"Failed to fetch {url}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class MalformedInstallRecord(ReportError):
    """A line of the installs feed is not a ``"name",count`` pair."""

    def __init__(self, line_number: int, line: str, reason: str = ""):
        self.line_number = line_number
        self.line = line
        message = f"Malformed install record on line {line_number}: {line!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownStatus(ReportError):
    """A record carries a status outside OK/PR/TODO."""

    def __init__(self, status):
        self.status = status
        super().__init__(f"Unknown status: {status!r}")
