"""Data models for the plugin documentation report."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    """Documentation migration state of a plugin."""

    OK = "OK"  # documentation hosted in the jenkinsci GitHub organization
    PR = "PR"  # migration pull request open
    TODO = "TODO"  # not started


class PluginRecord(BaseModel):
    """One row of the report, built from a documentation feed entry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Plugin key from the documentation feed")
    url: str = Field(default="", description="Documentation/source URL, may be empty")
    installs: int = Field(default=0, ge=0, description="Monthly installations")
    status: Status = Field(description="Migration status")

    # Presentation hints
    class_name: Optional[str] = Field(
        default=None,
        alias="className",
        description="Row style: 'success' for OK, 'info' for PR",
    )
    action: Optional[str] = Field(
        default=None, description="Pull request URL (PR) or report link (TODO)"
    )


class ReportSummary(BaseModel):
    """Result of a report run."""

    model_config = ConfigDict(populate_by_name=True)

    plugins: list[PluginRecord] = Field(description="Records sorted by installs")
    todo: int = Field(default=0, ge=0)
    pr: int = Field(default=0, ge=0, alias="PR")
    done: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0, description="todo + PR + done")

    period: Optional[str] = Field(
        default=None, description="YYYYMM label of the installs feed used"
    )
    generated_at: date = Field(default_factory=date.today)
