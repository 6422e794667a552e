"""Pydantic schemas for reviewer service."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from src.services.github.schemas import ChangedFileRecord, PullRequestMetadata


class FileFailure(BaseModel):
    """A changed file that was left out of the aggregated report."""

    filename: str
    kind: Literal["resolution", "parse", "removed"]
    message: str


class AggregatedReport(BaseModel):
    """Raw code and structure dumps of all changed files, in listed order."""

    model_config = ConfigDict(frozen=True)

    raw_code: str = ""
    structure_report: str = ""
    files_included: list[str] = []
    failures: list[FileFailure] = []


class FeedbackRequest(BaseModel):
    """Everything handed to the feedback generator for one event."""

    changed_files: list[ChangedFileRecord]
    raw_code: str
    structure_report: str
    pull_request: PullRequestMetadata | None = None
    user_comment: str | None = None
    conversation_context: str | None = None


class ReviewResult(BaseModel):
    """Result of handling one event."""

    success: bool = True
    event: Literal["pull_request", "pull_request_comment"]
    pr: str
    files_listed: int
    files_aggregated: int
    failures: int
